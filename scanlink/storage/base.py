"""
Storage interface consumed by all services.

Implementations may back onto a local embedded store or a remote
relational store; both must enforce identifier uniqueness atomically
inside ``insert_short_link``.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from scanlink.models.scan import ScanRead
from scanlink.models.short_link import ShortLinkRead, ShortLinkSummary


class Storage(ABC):
    """
    Abstract base class for short link and scan persistence.
    
    Every operation is a coroutine and is safe to call concurrently;
    no caller-side locking is assumed.
    """
    
    async def initialize(self) -> None:
        """Create tables and indexes if they do not exist."""
    
    async def close(self) -> None:
        """Release connections held by the backend."""
    
    async def health_check(self) -> Dict[str, Any]:
        """Report backend connectivity."""
        return {"status": "healthy", "latency_ms": 0, "error": None}
    
    @abstractmethod
    async def insert_short_link(
        self,
        id: str,
        original_url: str,
        style_options: Optional[Dict[str, Any]] = None,
    ) -> ShortLinkRead:
        """
        Insert a new short link if ``id`` is not taken.
        
        Raises:
            DuplicateIdError: If ``id`` already exists
            StorageError: On any other failure
        """
        pass
    
    @abstractmethod
    async def get_short_link(self, id: str) -> Optional[ShortLinkRead]:
        """Get a short link by identifier, or None."""
        pass
    
    @abstractmethod
    async def insert_scan(
        self,
        qr_id: str,
        ip: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> int:
        """Append a scan event and return its storage-assigned id."""
        pass
    
    @abstractmethod
    async def count_scans(self, qr_id: str) -> int:
        """Total scans recorded for a link."""
        pass
    
    @abstractmethod
    async def count_distinct_ips(self, qr_id: str) -> int:
        """Distinct scanner addresses for a link (absent counts as one)."""
        pass
    
    @abstractmethod
    async def list_recent_scans(self, qr_id: str, limit: int) -> List[ScanRead]:
        """Up to ``limit`` scans for a link, newest first."""
        pass
    
    @abstractmethod
    async def list_short_links(self, limit: int = 50) -> List[ShortLinkSummary]:
        """Most recently created links with their scan counts."""
        pass
