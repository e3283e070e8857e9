"""Base models and mixins for database models"""

from sqlalchemy import Column, DateTime, Boolean, String, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import DeclarativeBase, declared_attr
from sqlalchemy.sql import func
from datetime import datetime, timezone
from typing import Optional

from gallery.utils.helpers import generate_slug

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

# Create declarative base
class Base(DeclarativeBase):
    pass

class TimestampedModel:
    """Mixin for adding created_at and updated_at timestamps"""

    @declared_attr
    def created_at(cls):
        return Column(
            DateTime(timezone=True),
            nullable=False,
            default=utcnow,
            server_default=func.now(),
            index=True
        )

    @declared_attr
    def updated_at(cls):
        return Column(
            DateTime(timezone=True),
            nullable=False,
            default=utcnow,
            server_default=func.now(),
            onupdate=utcnow
        )

class SoftDeleteModel:
    """Mixin for soft delete functionality"""

    @declared_attr
    def is_deleted(cls):
        return Column(
            Boolean,
            default=False,
            nullable=False,
            index=True
        )

    @declared_attr
    def deleted_at(cls):
        return Column(
            DateTime(timezone=True),
            nullable=True
        )

    def soft_delete(self):
        """Soft delete the record"""
        self.is_deleted = True
        self.deleted_at = utcnow()

class SluggedModel:
    """Mixin for URL-friendly slugs"""

    @declared_attr
    def slug(cls):
        return Column(
            String(255),
            nullable=False,
            unique=True,
            index=True
        )

    @classmethod
    async def generate_unique_slug(
        cls,
        db: AsyncSession,
        text: str,
        exclude_id: Optional[int] = None
    ) -> str:
        """
        Generate unique slug from text

        Appends -1, -2, ... to the base slug until no other row holds it.
        Soft-deleted rows still own their slug. A slug of digits only would
        read as an id, so it gets the table prefix (artwork-1984).
        """
        prefix = cls.__tablename__.rstrip("s")
        base_slug = generate_slug(text) or prefix
        if base_slug.isdigit():
            base_slug = f"{prefix}-{base_slug}"
        slug = base_slug
        counter = 1

        while True:
            query = select(cls.id).where(cls.slug == slug)
            if exclude_id is not None:
                query = query.where(cls.id != exclude_id)
            taken = await db.scalar(query.limit(1))
            if taken is None:
                return slug
            slug = f"{base_slug}-{counter}"
            counter += 1

__all__ = [
    'Base',
    'TimestampedModel',
    'SoftDeleteModel',
    'SluggedModel',
    'utcnow',
]
