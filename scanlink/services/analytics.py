"""Analytics service.

Composes per-link scan analytics from storage aggregates.
"""

import asyncio
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlmodel import SQLModel

from scanlink.core.config import settings
from scanlink.models.scan import ScanRead
from scanlink.models.short_link import ShortLinkSummary
from scanlink.storage.base import Storage

logger = logging.getLogger(__name__)


class AnalyticsSummary(SQLModel):
    """Link metadata together with its scan aggregates."""
    id: str
    original_url: str
    style_options: Optional[Dict[str, Any]] = None
    created_at: datetime
    total_scans: int
    unique_scans: int
    scans: List[ScanRead]


class AnalyticsService:
    """
    Service for scan analytics.
    
    Recent scans are bounded to ``recent_limit`` so the response size
    stays constant however long the scan history grows.
    """
    
    def __init__(self, storage: Storage, recent_limit: Optional[int] = None):
        self.storage = storage
        self.recent_limit = recent_limit or settings.ANALYTICS_RECENT_SCANS
    
    async def get_analytics(self, id: str) -> Optional[AnalyticsSummary]:
        """
        Get analytics for a link.
        
        Returns:
            AnalyticsSummary, or None if no link exists for ``id``
        """
        link = await self.storage.get_short_link(id)
        if link is None:
            return None
        
        total_scans, unique_scans, scans = await asyncio.gather(
            self.storage.count_scans(id),
            self.storage.count_distinct_ips(id),
            self.storage.list_recent_scans(id, self.recent_limit),
        )
        
        return AnalyticsSummary(
            id=link.id,
            original_url=link.original_url,
            style_options=link.style_options,
            created_at=link.created_at,
            total_scans=total_scans,
            unique_scans=unique_scans,
            scans=scans,
        )
    
    async def list_all(self, limit: int = 50) -> List[ShortLinkSummary]:
        """Most recently created links with scan counts."""
        return await self.storage.list_short_links(limit)
