"""Redirect service.

Resolves short identifiers to destinations and records scans as
detached background tasks, so the redirect never waits on or fails
because of the scan write.
"""

import asyncio
import logging
from typing import Optional, Set

from scanlink.core.scan_logger import log_scan_access
from scanlink.services.exceptions import InvalidIdFormatError, ShortLinkNotFoundError
from scanlink.services.id_generator import IdGenerator
from scanlink.storage.base import Storage

logger = logging.getLogger(__name__)

UNKNOWN_USER_AGENT = "Unknown"


class RedirectService:
    """
    Service resolving identifiers for redirection.
    
    One instance lives for the lifetime of the application so that
    pending scan writes can be drained on shutdown.
    """
    
    def __init__(self, storage: Storage, id_generator: Optional[IdGenerator] = None):
        self.storage = storage
        self.id_generator = id_generator or IdGenerator()
        self._pending: Set[asyncio.Task] = set()
    
    @property
    def pending_scans(self) -> int:
        return len(self._pending)
    
    async def resolve(
        self,
        id: str,
        ip: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> str:
        """
        Resolve an identifier to its destination URL and record a scan.
        
        The scan write is scheduled, not awaited.
        
        Raises:
            InvalidIdFormatError: If ``id`` is malformed (storage is not touched)
            ShortLinkNotFoundError: If no link exists for ``id``
            StorageError: If the lookup itself fails
        """
        if not self.id_generator.is_valid_format(id):
            raise InvalidIdFormatError(f"Invalid QR code ID: {id!r}")
        
        link = await self.storage.get_short_link(id)
        if link is None:
            raise ShortLinkNotFoundError(f"QR code not found: {id}")
        
        self._schedule_scan(id, ip, user_agent or UNKNOWN_USER_AGENT)
        return link.original_url
    
    def _schedule_scan(self, qr_id: str, ip: Optional[str], user_agent: str) -> None:
        task = asyncio.create_task(self._record_scan(qr_id, ip, user_agent))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
    
    async def _record_scan(self, qr_id: str, ip: Optional[str], user_agent: str) -> Optional[int]:
        try:
            scan_id = await self.storage.insert_scan(qr_id, ip, user_agent)
        except Exception:
            logger.exception(f"Error recording scan for {qr_id}")
            return None
        
        log_scan_access(qr_id, ip, user_agent)
        return scan_id
    
    async def drain(self) -> None:
        """Wait for every scheduled scan write to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
