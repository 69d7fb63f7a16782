"""Stamp release builds with their version and commit in a remote config store."""

__version__ = "1.0.0"
