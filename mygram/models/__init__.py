# Models package init
"""
MyGram Backend — ORM Models
=============================

Importing this package registers every table with `Base.metadata`
(used by Alembic and by the test suite's `create_all`).
"""

from mygram.models.comment import Comment
from mygram.models.photo import Photo
from mygram.models.social_media import SocialMedia
from mygram.models.user import User

__all__ = ["Comment", "Photo", "SocialMedia", "User"]
