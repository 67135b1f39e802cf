"""
MyGram Backend — Social Media SQLAlchemy Model
================================================

What:  ORM model representing the `social_medias` table: links from a user
       to their profiles on other networks.
Who:   Read and written by SocialMediaStore.
"""

from sqlalchemy import ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from mygram.database import Base
from mygram.models.base import IdType, IdentityMixin, SoftDeleteMixin, TimestampMixin


class SocialMedia(IdentityMixin, TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "social_medias"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    social_media_url: Mapped[str] = mapped_column(Text, nullable=False)
    user_id: Mapped[int] = mapped_column(IdType, ForeignKey("users.id"), nullable=False)

    __table_args__ = (
        Index("idx_social_medias_user_id", "user_id"),
    )

    def __repr__(self) -> str:
        return f"<SocialMedia(id={self.id}, user_id={self.user_id}, name='{self.name}')>"
