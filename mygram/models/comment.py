"""
MyGram Backend — Comment SQLAlchemy Model
===========================================

What:  ORM model representing the `comments` table.
Who:   Read and written by CommentStore.
"""

from sqlalchemy import ForeignKey, Index, Text
from sqlalchemy.orm import Mapped, mapped_column

from mygram.database import Base
from mygram.models.base import IdType, IdentityMixin, SoftDeleteMixin, TimestampMixin


class Comment(IdentityMixin, TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "comments"

    message: Mapped[str] = mapped_column(Text, nullable=False)
    photo_id: Mapped[int] = mapped_column(IdType, ForeignKey("photos.id"), nullable=False)
    user_id: Mapped[int] = mapped_column(IdType, ForeignKey("users.id"), nullable=False)

    __table_args__ = (
        Index("idx_comments_photo_id", "photo_id"),
        Index("idx_comments_user_id", "user_id"),
    )

    def __repr__(self) -> str:
        return f"<Comment(id={self.id}, photo_id={self.photo_id}, user_id={self.user_id})>"
