"""Scan repository.

Database operations for the ``scans`` table: appending scan events and
the aggregate queries analytics are built from.
"""

from typing import List, Optional

from sqlalchemy import select, func, desc, distinct
from sqlalchemy.ext.asyncio import AsyncSession

from scanlink.models.scan import Scan
from scanlink.repositories.base import BaseRepository, RepositoryError


class ScanRepository(BaseRepository[Scan]):
    """
    Repository for Scan model database operations.
    
    All per-link queries filter on ``qr_id`` and are served by the
    ``idx_scans_qr_id`` index.
    """
    
    def __init__(self):
        """Initialize the repository with the Scan model type."""
        super().__init__(Scan)
    
    async def create_scan(
        self,
        db: AsyncSession,
        qr_id: str,
        ip: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Scan:
        """
        Append a scan event.
        
        Returns:
            The created Scan with its storage-assigned id
        """
        return await self.create(db, {
            "qr_id": qr_id,
            "ip": ip,
            "user_agent": user_agent,
        })
    
    async def count_for_link(self, db: AsyncSession, qr_id: str) -> int:
        """Total number of scans recorded for a link."""
        return await self.count(db, Scan.qr_id == qr_id)
    
    async def count_distinct_ips(self, db: AsyncSession, qr_id: str) -> int:
        """
        Number of distinct scanner addresses for a link.
        
        Addresses are compared as opaque strings; scans without an
        address are counted together as a single value.
        """
        try:
            query = (
                select(func.count(distinct(func.coalesce(Scan.ip, ""))))
                .where(Scan.qr_id == qr_id)
            )
            result = await db.execute(query)
            return result.scalar_one()
        except Exception as e:
            raise RepositoryError(f"Error counting distinct IPs for {qr_id}: {e}") from e
    
    async def get_recent_for_link(
        self,
        db: AsyncSession,
        qr_id: str,
        limit: int = 100,
    ) -> List[Scan]:
        """
        Get the most recent scans for a link, newest first.
        
        Args:
            db: Database session
            qr_id: Identifier of the short link
            limit: Maximum number of scans to return
            
        Returns:
            List of Scan entities
        """
        try:
            query = (
                select(Scan)
                .where(Scan.qr_id == qr_id)
                .order_by(desc(Scan.timestamp), desc(Scan.id))
                .limit(limit)
            )
            result = await db.execute(query)
            return list(result.scalars().all())
        except Exception as e:
            raise RepositoryError(f"Error retrieving recent scans for {qr_id}: {e}") from e
