# Repositories package init
"""
MyGram Backend — Stores
=========================

What:  Persistence boundary between services and the database.

Store Inventory:
    - UserStore:        credentials (find_by_email, find_by_id, insert, update, soft_delete)
    - PhotoStore:       photos (+ list_by_user)
    - CommentStore:     comments (+ list_by_photo)
    - SocialMediaStore: social media links (+ list_by_user)
"""

from mygram.repositories.base import (
    CredentialStore,
    OwnedResource,
    OwnedResourceStore,
    SqlAlchemyStore,
)
from mygram.repositories.comments import CommentStore
from mygram.repositories.photos import PhotoStore
from mygram.repositories.social_medias import SocialMediaStore
from mygram.repositories.users import UserStore

__all__ = [
    "CommentStore",
    "CredentialStore",
    "OwnedResource",
    "OwnedResourceStore",
    "PhotoStore",
    "SocialMediaStore",
    "SqlAlchemyStore",
    "UserStore",
]
