"""Core functionality for hymod."""
