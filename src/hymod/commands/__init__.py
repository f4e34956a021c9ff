"""CLI commands for hymod."""
