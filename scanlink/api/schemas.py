"""API request and response schemas.

This module contains Pydantic models for API request validation
and response serialization. Fields are exposed under camelCase
names on the wire.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class CreateLinkRequest(CamelModel):
    """Request schema for creating a tracked short link.
    
    ``url`` is left untyped so that missing or non-string values reach
    the registration service and fail with its own messages.
    """
    url: Optional[Any] = None
    style_options: Optional[Dict[str, Any]] = None


class CreateLinkResponse(CamelModel):
    success: bool = True
    short_id: str
    tracking_url: str
    original_url: str
    message: str = "QR code created successfully"


class ScanEntry(CamelModel):
    """Schema for one recorded scan."""
    timestamp: datetime
    ip: Optional[str] = None
    user_agent: Optional[str] = None


class StatsResponse(CamelModel):
    """Response schema for per-link analytics."""
    success: bool = True
    id: str
    original_url: str
    style_options: Optional[Dict[str, Any]] = None
    created_at: datetime
    total_scans: int
    unique_scans: int
    scans: List[ScanEntry]


class LinkSummary(CamelModel):
    id: str
    original_url: str
    created_at: datetime
    scan_count: int = 0


class ListResponse(CamelModel):
    """Response schema for listing links."""
    success: bool = True
    count: int
    qr_codes: List[LinkSummary]


class TimelinePoint(CamelModel):
    """Schema for a point in a timeline chart."""
    date: str
    count: int


class ScanView(CamelModel):
    timestamp: str
    ip: str
    device: str


class ReportResponse(CamelModel):
    """Response schema for the display-ready analytics report."""
    success: bool = True
    id: str
    original_url: str
    total_scans: int
    unique_scans: int
    scans_by_date: List[TimelinePoint]
    recent_scans: List[ScanView]


class ErrorResponse(BaseModel):
    """Response schema for errors."""
    success: bool = False
    error: str = Field(..., description="Human readable error message")
