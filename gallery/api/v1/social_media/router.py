"""
Social media routes
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from gallery.core.database import get_db
from gallery.core.security import require_admin
from gallery.models import SocialPlatform
from .schemas import SocialMediaSettingResponse, SocialMediaSettingUpdate
from .services import SocialMediaService

router = APIRouter()

@router.get("/", response_model=List[SocialMediaSettingResponse])
async def list_social_media(
    db: AsyncSession = Depends(get_db)
):
    """All known platforms"""
    service = SocialMediaService(db)
    return await service.list_settings()

@router.get("/{platform}", response_model=SocialMediaSettingResponse)
async def get_social_media(
    platform: SocialPlatform,
    db: AsyncSession = Depends(get_db)
):
    service = SocialMediaService(db)
    return await service.get_setting(platform)

@router.put("/{platform}", response_model=SocialMediaSettingResponse)
async def update_social_media(
    platform: SocialPlatform,
    setting_data: SocialMediaSettingUpdate,
    current_user: dict = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """Set link and visibility (Admin only)"""
    service = SocialMediaService(db)
    return await service.upsert_setting(platform, setting_data)
