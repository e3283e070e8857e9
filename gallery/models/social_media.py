"""Social media link settings"""

from sqlalchemy import Column, String, Integer, Boolean, Enum
import enum

from .base import Base, TimestampedModel

class SocialPlatform(str, enum.Enum):
    INSTAGRAM = "instagram"
    FACEBOOK = "facebook"
    X = "x"

class SocialMediaSetting(Base, TimestampedModel):
    """Per-platform link and visibility"""

    __tablename__ = "social_media_settings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    platform = Column(
        Enum(
            SocialPlatform,
            name="social_platform",
            values_callable=lambda enum_cls: [member.value for member in enum_cls]
        ),
        unique=True,
        nullable=False
    )
    url = Column(String(500), nullable=True)
    is_visible = Column(Boolean, default=False, nullable=False)
