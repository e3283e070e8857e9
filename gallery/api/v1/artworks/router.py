"""
Artwork API routes
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from gallery.core.database import get_db
from gallery.core.security import require_admin
from .schemas import (
    ArtworkCreate,
    ArtworkUpdate,
    ArtworkResponse,
    ArtworkReorderRequest,
    ArtworkReorderResponse
)
from .services import ArtworkService

router = APIRouter()

@router.get(
    "/",
    response_model=List[ArtworkResponse],
    summary="List artworks",
    description="Catalog in display order"
)
async def list_artworks(
    db: AsyncSession = Depends(get_db)
):
    """List artworks"""
    service = ArtworkService(db)
    return await service.list_artworks()

@router.post(
    "/",
    response_model=ArtworkResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create artwork",
    description="Create artwork (Admin only)"
)
async def create_artwork(
    artwork_data: ArtworkCreate,
    current_user: dict = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """Create artwork"""
    service = ArtworkService(db)
    artwork = await service.create_artwork(artwork_data)
    return ArtworkResponse.model_validate(artwork)

@router.post(
    "/reorder",
    response_model=ArtworkReorderResponse,
    summary="Reorder artworks",
    description="Set catalog display order (Admin only)"
)
async def reorder_artworks(
    reorder_data: ArtworkReorderRequest,
    current_user: dict = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """Reorder artworks"""
    service = ArtworkService(db)
    artworks = await service.reorder_artworks(reorder_data.artwork_ids)
    return ArtworkReorderResponse(
        items=[ArtworkResponse.model_validate(artwork) for artwork in artworks]
    )

@router.get(
    "/{identifier}",
    response_model=ArtworkResponse,
    summary="Get artwork",
    description="Get artwork by numeric id or slug"
)
async def get_artwork(
    identifier: str,
    db: AsyncSession = Depends(get_db)
):
    """Get artwork details"""
    service = ArtworkService(db)
    artwork = await service.get_artwork(identifier)
    return ArtworkResponse.model_validate(artwork)

@router.put(
    "/{artwork_id}",
    response_model=ArtworkResponse,
    summary="Update artwork",
    description="Partial update (Admin only)"
)
async def update_artwork(
    artwork_id: int,
    artwork_data: ArtworkUpdate,
    current_user: dict = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """Update artwork"""
    service = ArtworkService(db)
    artwork = await service.update_artwork(artwork_id, artwork_data)
    return ArtworkResponse.model_validate(artwork)

@router.delete(
    "/{artwork_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete artwork",
    description="Archive artworks with order history, remove others (Admin only)"
)
async def delete_artwork(
    artwork_id: int,
    current_user: dict = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """Delete artwork"""
    service = ArtworkService(db)
    await service.delete_artwork(artwork_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
