"""Short link data models.

The ``qr_codes`` table maps a short identifier to its destination URL.
Rows are written once and never updated.
"""
import json
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import Column, DateTime, Index, Text, func
from sqlmodel import Field, SQLModel


class ShortLinkBase(SQLModel):
    """Base model for short link data."""
    
    id: str = Field(
        primary_key=True,
        description="Short identifier naming this link",
    )
    original_url: str = Field(
        description="Destination URL scanners are redirected to",
    )


class ShortLink(ShortLinkBase, table=True):
    """
    Short link table model.
    
    ``style_options`` is an opaque JSON document supplied by the client
    (rendering preferences); it is stored verbatim and never interpreted.
    """
    
    __tablename__ = "qr_codes"
    
    style_options: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )
    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        sa_column=Column(DateTime, nullable=False, server_default=func.now()),
    )
    
    __table_args__ = (
        Index("idx_qr_codes_created_at", "created_at"),
    )
    
    @staticmethod
    def dump_style_options(style_options: Optional[Dict[str, Any]]) -> str:
        return json.dumps(style_options or {})
    
    def load_style_options(self) -> Optional[Dict[str, Any]]:
        if not self.style_options:
            return None
        return json.loads(self.style_options)
    
    def to_read(self) -> "ShortLinkRead":
        return ShortLinkRead(
            id=self.id,
            original_url=self.original_url,
            style_options=self.load_style_options(),
            created_at=self.created_at,
        )


class ShortLinkRead(SQLModel):
    """Schema for reading a short link."""
    id: str
    original_url: str
    style_options: Optional[Dict[str, Any]] = None
    created_at: datetime


class ShortLinkSummary(SQLModel):
    """A short link enriched with its total scan count."""
    id: str
    original_url: str
    created_at: datetime
    scan_count: int = 0
