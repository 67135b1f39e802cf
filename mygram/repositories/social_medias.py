"""
MyGram Backend — Social Media Store
=====================================

What:  SQLAlchemy store over the `social_medias` table.
"""

from typing import List

from mygram.models.social_media import SocialMedia
from mygram.repositories.base import SqlAlchemyStore


class SocialMediaStore(SqlAlchemyStore[SocialMedia]):
    model = SocialMedia

    async def list_by_user(self, user_id: int) -> List[SocialMedia]:
        return await self._scalars(
            self._live().where(SocialMedia.user_id == user_id).order_by(SocialMedia.id),
            "list_by_user",
        )
