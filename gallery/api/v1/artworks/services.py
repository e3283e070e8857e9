"""
Artwork service layer
Catalog mutations: create, update, delete and reorder
"""

from typing import List
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from gallery.core.exceptions import (
    NotFoundException, ValidationException, ConflictException
)
from gallery.models import Artwork
from gallery.utils.validators import sanitize_html
from .crud import ArtworkCRUD
from .schemas import ArtworkCreate, ArtworkUpdate

logger = logging.getLogger(__name__)

def _serialize_print_options(options) -> list:
    return [
        {"size": option.size, "price": str(option.price)}
        for option in options or []
    ]

def validate_sale_options(artwork: Artwork) -> None:
    """
    Check cross-field sale rules on the (merged) artwork state

    Raises:
        ValidationException: If prints or the original are offered without a price
    """
    if artwork.prints_available and not artwork.print_options:
        raise ValidationException(
            "At least one print option is required when prints are available",
            field="print_options"
        )
    if artwork.original_available and not artwork.original_sold and artwork.original_price is None:
        raise ValidationException(
            "original_price is required when the original is available",
            field="original_price"
        )

class ArtworkService:
    """Artwork service for business logic"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_artworks(self) -> List[Artwork]:
        return await ArtworkCRUD.list_live(self.db)

    async def get_artwork(self, identifier: str) -> Artwork:
        """
        Get artwork by id or slug

        Raises:
            NotFoundException: If missing or archived
        """
        artwork = await ArtworkCRUD.get_by_identifier(self.db, identifier)
        if not artwork:
            raise NotFoundException("Artwork not found")
        return artwork

    async def _commit(self) -> None:
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictException("Artwork conflicts with an existing one, retry")

    async def create_artwork(self, data: ArtworkCreate) -> Artwork:
        """
        Create artwork with a unique slug, appended to the end of the catalog

        Args:
            data: Artwork fields

        Returns:
            Created artwork
        """
        values = data.model_dump(exclude={"print_options"})
        if values.get("description"):
            values["description"] = sanitize_html(values["description"])

        artwork = Artwork(
            **values,
            print_options=_serialize_print_options(data.print_options),
            slug=await Artwork.generate_unique_slug(self.db, data.title),
            display_order=await ArtworkCRUD.next_display_order(self.db),
        )
        validate_sale_options(artwork)

        self.db.add(artwork)
        await self._commit()

        logger.info(f"Artwork created: {artwork.id} ({artwork.slug})")
        return await ArtworkCRUD.get_by_id(self.db, artwork.id)

    async def update_artwork(self, artwork_id: int, data: ArtworkUpdate) -> Artwork:
        """
        Apply a partial update

        The slug is regenerated only when the title changes.
        """
        artwork = await ArtworkCRUD.get_by_id(self.db, artwork_id)
        if not artwork:
            raise NotFoundException("Artwork not found")

        update_data = data.model_dump(exclude_unset=True, exclude={"print_options"})
        if "print_options" in data.model_fields_set:
            update_data["print_options"] = _serialize_print_options(data.print_options)
        if update_data.get("description"):
            update_data["description"] = sanitize_html(update_data["description"])
        if "images" in update_data and update_data["images"] is None:
            update_data["images"] = []

        title_changed = "title" in update_data and update_data["title"] != artwork.title

        for field, value in update_data.items():
            setattr(artwork, field, value)

        validate_sale_options(artwork)

        if title_changed:
            artwork.slug = await Artwork.generate_unique_slug(
                self.db, artwork.title, exclude_id=artwork.id
            )

        await self._commit()

        logger.info(f"Artwork updated: {artwork.id} ({artwork.slug})")
        return await ArtworkCRUD.get_by_id(self.db, artwork.id)

    async def delete_artwork(self, artwork_id: int) -> None:
        """
        Delete artwork

        Artworks referenced by past orders are archived so order history keeps
        its display data; others are removed.
        """
        artwork = await ArtworkCRUD.get_by_id(self.db, artwork_id)
        if not artwork:
            raise NotFoundException("Artwork not found")

        if await ArtworkCRUD.has_order_history(self.db, artwork_id):
            artwork.soft_delete()
            logger.info(f"Artwork archived (has order history): {artwork_id}")
        else:
            await self.db.delete(artwork)
            logger.info(f"Artwork deleted: {artwork_id}")

        await self._commit()

    async def reorder_artworks(self, artwork_ids: List[int]) -> List[Artwork]:
        """
        Apply a new catalog order in one transaction

        Listed artworks take positions 0..n-1 in the given order; unlisted
        ones follow, keeping their relative order.

        Raises:
            ValidationException: If an id is repeated
            NotFoundException: If an id is unknown or archived
        """
        if len(set(artwork_ids)) != len(artwork_ids):
            raise ValidationException("Artwork ids must not repeat", field="artwork_ids")

        artworks = await ArtworkCRUD.list_live(self.db)
        by_id = {artwork.id: artwork for artwork in artworks}

        missing = [artwork_id for artwork_id in artwork_ids if artwork_id not in by_id]
        if missing:
            raise NotFoundException(f"Artworks not found: {missing}")

        listed = set(artwork_ids)
        ordered = [by_id[artwork_id] for artwork_id in artwork_ids]
        ordered += [artwork for artwork in artworks if artwork.id not in listed]

        for position, artwork in enumerate(ordered):
            artwork.display_order = position

        await self._commit()

        logger.info(f"Catalog reordered: {artwork_ids}")
        return await ArtworkCRUD.list_live(self.db)
