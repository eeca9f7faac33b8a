"""
Scan event data models.

This module defines the Scan model, one row per resolution of a short
identifier. Scans are append-only.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Column, DateTime, Index, func
from sqlmodel import Field, SQLModel


class ScanBase(SQLModel):
    """Base model for scan data."""
    
    qr_id: str = Field(
        description="Identifier of the scanned short link"
    )
    ip: Optional[str] = Field(
        default=None,
        description="Network address of the scanner",
        max_length=45  # Support both IPv4 and IPv6 addresses
    )
    user_agent: Optional[str] = Field(
        default=None,
        description="User agent string reported by the scanner",
    )


class Scan(ScanBase, table=True):
    """
    Scan model for tracking resolutions of short links.
    
    ``qr_id`` intentionally carries no enforced foreign key: a scan may
    reference a link that is concurrently being removed and must still
    be accepted.
    """
    
    __tablename__ = "scans"
    
    id: Optional[int] = Field(default=None, primary_key=True)
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        sa_column=Column(DateTime, nullable=False, server_default=func.now()),
    )
    
    __table_args__ = (
        Index("idx_scans_qr_id", "qr_id"),
    )


class ScanRead(ScanBase):
    """Schema for reading a scan."""
    id: int
    timestamp: datetime
