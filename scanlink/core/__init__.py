"""Core module for the scanlink application."""

from scanlink.core.config import settings

__all__ = ["settings"]
