"""Hymod - a mod manager for Hytale add-on packages."""

__version__ = "0.1.0"
