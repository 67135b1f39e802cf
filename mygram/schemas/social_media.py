"""
MyGram Backend — Social Media Schemas
=======================================
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from mygram.schemas.common import UserSummary


class SocialMediaCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    social_media_url: str = Field(min_length=1)


class SocialMediaUpdate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    social_media_url: str = Field(min_length=1)


class SocialMediaView(BaseModel):
    id: int
    name: str
    social_media_url: str
    user_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class SocialMediaWithUser(SocialMediaView):
    user: Optional[UserSummary] = None


class SocialMediaDeleteResponse(BaseModel):
    social_media: SocialMediaView
    message: str = "Your social media has been successfully deleted"
