"""Scanlink: short links with scan tracking."""

__version__ = "0.1.0"
