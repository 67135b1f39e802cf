"""
MyGram Backend — Comment Schemas
==================================
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from mygram.schemas.common import PhotoSummary, UserSummary


class CommentCreate(BaseModel):
    message: str = Field(min_length=1)
    photo_id: int = Field(gt=0, description="Photo being commented on")


class CommentUpdate(BaseModel):
    message: str = Field(min_length=1)


class CommentView(BaseModel):
    id: int
    message: str
    photo_id: int
    user_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class CommentDetail(CommentView):
    """Comment with its author and the photo it belongs to."""
    user: Optional[UserSummary] = None
    photo: Optional[PhotoSummary] = None


class CommentDeleteResponse(BaseModel):
    comment: CommentView
    message: str = "Your comment has been successfully deleted"
