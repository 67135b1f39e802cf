"""
MyGram Backend — User (Credential) SQLAlchemy Model
=====================================================

What:  ORM model representing the `users` table.
Who:   Read and written by UserStore; read by AuthService for login.

Table Design:
    - password_hash: bcrypt digest, never serialized by any response schema
    - dob: calendar date; age is derived from it at sign-up
    - email: unique among live rows via a partial unique index, so a
      soft-deleted account does not block re-registration

    The partial index is the real uniqueness guarantee. The check in
    AuthService.sign_up is a fast path; two concurrent sign-ups with the
    same email are settled here.
"""

from datetime import date

from sqlalchemy import Date, Index, String, text
from sqlalchemy.orm import Mapped, mapped_column

from mygram.database import Base
from mygram.models.base import IdentityMixin, SoftDeleteMixin, TimestampMixin


class User(IdentityMixin, TimestampMixin, SoftDeleteMixin, Base):
    """
    A registered account.

    Lifecycle:
        1. Created by sign-up (password hashed before insert)
        2. Edited only by its own session (PUT /users/{id})
        3. Soft-deleted only by its own session (DELETE /users/{id})
    """

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    dob: Mapped[date] = mapped_column(Date, nullable=False)

    __table_args__ = (
        Index(
            "uq_users_email_active",
            "email",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
            sqlite_where=text("deleted_at IS NULL"),
        ),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
