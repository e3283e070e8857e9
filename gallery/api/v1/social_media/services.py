"""Social media settings service"""

from typing import Dict, List
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gallery.models import SocialMediaSetting, SocialPlatform
from .schemas import SocialMediaSettingResponse, SocialMediaSettingUpdate

logger = logging.getLogger(__name__)

class SocialMediaService:
    """One setting per known platform; unconfigured platforms read as hidden"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _stored(self) -> Dict[SocialPlatform, SocialMediaSetting]:
        result = await self.db.execute(select(SocialMediaSetting))
        return {setting.platform: setting for setting in result.scalars().all()}

    async def list_settings(self) -> List[SocialMediaSettingResponse]:
        stored = await self._stored()
        return [
            SocialMediaSettingResponse.model_validate(stored[platform])
            if platform in stored
            else SocialMediaSettingResponse(platform=platform)
            for platform in SocialPlatform
        ]

    async def get_setting(self, platform: SocialPlatform) -> SocialMediaSettingResponse:
        result = await self.db.execute(
            select(SocialMediaSetting).where(SocialMediaSetting.platform == platform)
        )
        setting = result.scalar_one_or_none()
        if setting is None:
            return SocialMediaSettingResponse(platform=platform)
        return SocialMediaSettingResponse.model_validate(setting)

    async def upsert_setting(
        self,
        platform: SocialPlatform,
        data: SocialMediaSettingUpdate
    ) -> SocialMediaSettingResponse:
        result = await self.db.execute(
            select(SocialMediaSetting).where(SocialMediaSetting.platform == platform)
        )
        setting = result.scalar_one_or_none()

        if setting is None:
            setting = SocialMediaSetting(platform=platform)
            self.db.add(setting)

        setting.url = data.url
        setting.is_visible = data.is_visible
        await self.db.commit()

        logger.info(f"Social media setting updated: {platform.value} visible={data.is_visible}")
        return SocialMediaSettingResponse.model_validate(setting)
