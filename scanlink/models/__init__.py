"""
Data models for the scanlink application.

This module imports and exports all SQLModel models used in the application.
"""

from sqlmodel import SQLModel

from scanlink.models.short_link import (
    ShortLinkBase,
    ShortLinkRead,
    ShortLinkSummary,
)
from scanlink.models.scan import ScanBase, ScanRead

# Table models
from scanlink.models.short_link import ShortLink
from scanlink.models.scan import Scan

__all__ = [
    "SQLModel",
    
    # Short link models
    "ShortLink",
    "ShortLinkBase",
    "ShortLinkRead",
    "ShortLinkSummary",
    
    # Scan models
    "Scan",
    "ScanBase",
    "ScanRead",
]
