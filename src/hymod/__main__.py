from hymod.cli import main

main()
