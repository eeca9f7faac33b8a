"""Short link repository.

Database operations for the ``qr_codes`` table.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import select, func, desc
from sqlalchemy.ext.asyncio import AsyncSession

from scanlink.models.scan import Scan
from scanlink.models.short_link import ShortLink, ShortLinkSummary
from scanlink.repositories.base import BaseRepository, RepositoryError


class ShortLinkRepository(BaseRepository[ShortLink]):
    """
    Repository for ShortLink model database operations.
    
    Links are insert-only; there are no update or delete operations.
    """
    
    def __init__(self):
        """Initialize the repository with the ShortLink model type."""
        super().__init__(ShortLink)
    
    async def create_short_link(
        self,
        db: AsyncSession,
        id: str,
        original_url: str,
        style_options: Optional[Dict[str, Any]] = None,
    ) -> ShortLink:
        """
        Insert a new short link.
        
        Uniqueness of ``id`` is enforced by the primary key constraint
        within the INSERT itself.
        
        Raises:
            ConstraintViolationError: If the id already exists
            RepositoryError: On other database errors
        """
        return await self.create(db, {
            "id": id,
            "original_url": original_url,
            "style_options": ShortLink.dump_style_options(style_options),
        })
    
    async def list_with_scan_counts(self, db: AsyncSession, limit: int = 50) -> List[ShortLinkSummary]:
        """
        Get the most recently created links with their scan counts.
        
        Args:
            db: Database session
            limit: Maximum number of links to return
            
        Returns:
            List of ShortLinkSummary ordered by creation time (newest first)
        """
        try:
            scan_count = func.count(Scan.id).label("scan_count")
            query = (
                select(
                    ShortLink.id,
                    ShortLink.original_url,
                    ShortLink.created_at,
                    scan_count,
                )
                .outerjoin(Scan, Scan.qr_id == ShortLink.id)
                .group_by(ShortLink.id, ShortLink.original_url, ShortLink.created_at)
                .order_by(desc(ShortLink.created_at), desc(ShortLink.id))
                .limit(limit)
            )
            
            result = await db.execute(query)
            return [
                ShortLinkSummary(
                    id=row.id,
                    original_url=row.original_url,
                    created_at=row.created_at,
                    scan_count=row.scan_count or 0,
                )
                for row in result.all()
            ]
        except Exception as e:
            raise RepositoryError(f"Error listing short links: {e}") from e
