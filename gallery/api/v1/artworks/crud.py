"""
Artwork CRUD operations
Database operations for artworks
"""

from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func

from gallery.models import Artwork, OrderItem

class ArtworkCRUD:
    """Artwork CRUD operations"""

    @staticmethod
    def live_query():
        """Non-archived artworks in catalog order"""
        return (
            select(Artwork)
            .where(Artwork.is_deleted.is_(False))
            .order_by(Artwork.display_order, Artwork.id)
            .execution_options(populate_existing=True)
        )

    @staticmethod
    async def get_by_id(
        db: AsyncSession,
        artwork_id: int,
        include_deleted: bool = False
    ) -> Optional[Artwork]:
        """Get artwork by ID"""
        query = (
            select(Artwork)
            .where(Artwork.id == artwork_id)
            .execution_options(populate_existing=True)
        )
        if not include_deleted:
            query = query.where(Artwork.is_deleted.is_(False))

        result = await db.execute(query)
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_slug(
        db: AsyncSession,
        slug: str
    ) -> Optional[Artwork]:
        """Get live artwork by slug"""
        result = await db.execute(
            select(Artwork).where(
                Artwork.slug == slug,
                Artwork.is_deleted.is_(False)
            )
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_identifier(
        db: AsyncSession,
        identifier: str
    ) -> Optional[Artwork]:
        """Numeric identifiers are ids, anything else is a slug"""
        if identifier.isdigit():
            return await ArtworkCRUD.get_by_id(db, int(identifier))
        return await ArtworkCRUD.get_by_slug(db, identifier)

    @staticmethod
    async def list_live(db: AsyncSession) -> List[Artwork]:
        result = await db.execute(ArtworkCRUD.live_query())
        return list(result.scalars().all())

    @staticmethod
    async def next_display_order(db: AsyncSession) -> int:
        """Position after the last artwork"""
        current = await db.scalar(select(func.max(Artwork.display_order)))
        return 0 if current is None else current + 1

    @staticmethod
    async def has_order_history(db: AsyncSession, artwork_id: int) -> bool:
        found = await db.scalar(
            select(OrderItem.id).where(OrderItem.artwork_id == artwork_id).limit(1)
        )
        return found is not None
