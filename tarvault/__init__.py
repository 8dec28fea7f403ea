"""TARVAULT - archive a directory and encrypt it into a single file."""

__version__ = "1.0.0"
