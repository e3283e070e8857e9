"""Social media setting schemas"""

from pydantic import BaseModel, Field, model_validator
from typing import Optional

from gallery.models.social_media import SocialPlatform

class SocialMediaSettingResponse(BaseModel):
    platform: SocialPlatform
    url: Optional[str] = None
    is_visible: bool = False

    class Config:
        from_attributes = True

class SocialMediaSettingUpdate(BaseModel):
    url: Optional[str] = Field(None, max_length=500, pattern=r"^https?://\S+$")
    is_visible: bool = False

    @model_validator(mode="after")
    def visible_needs_url(self):
        if self.is_visible and not self.url:
            raise ValueError("A visible platform needs a url")
        return self
