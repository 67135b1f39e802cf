"""
MyGram Backend — Photo SQLAlchemy Model
=========================================

What:  ORM model representing the `photos` table.
Who:   Read and written by PhotoStore.

Ownership:
    `user_id` is set from the creating session and is never part of an
    update payload, so a photo's owner cannot change.
"""

from sqlalchemy import ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from mygram.database import Base
from mygram.models.base import IdType, IdentityMixin, SoftDeleteMixin, TimestampMixin


class Photo(IdentityMixin, TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "photos"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    caption: Mapped[str] = mapped_column(Text, nullable=False, default="")
    photo_url: Mapped[str] = mapped_column(Text, nullable=False)
    user_id: Mapped[int] = mapped_column(IdType, ForeignKey("users.id"), nullable=False)

    __table_args__ = (
        Index("idx_photos_user_id", "user_id"),
    )

    def __repr__(self) -> str:
        return f"<Photo(id={self.id}, user_id={self.user_id}, title='{self.title}')>"
