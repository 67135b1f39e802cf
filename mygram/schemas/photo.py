"""
MyGram Backend — Photo Schemas
================================

What:  Request and response models for /photos.
Who:   PhotoService builds the responses; routes declare them as
       `response_model` so OpenAPI docs stay accurate.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from mygram.schemas.common import UserSummary


class PhotoCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    caption: str = Field(default="", description="Optional caption")
    photo_url: str = Field(min_length=1)


class PhotoUpdate(BaseModel):
    """Full replacement of the editable fields; the owner never changes."""
    title: str = Field(min_length=1, max_length=255)
    caption: str = ""
    photo_url: str = Field(min_length=1)


class PhotoView(BaseModel):
    id: int
    title: str
    caption: str
    photo_url: str
    user_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class PhotoWithUser(PhotoView):
    user: Optional[UserSummary] = Field(default=None, description="Owner details")


class PhotoDeleteResponse(BaseModel):
    photo: PhotoView
    message: str = "Your photo has been successfully deleted"
