"""
MyGram Backend — Photo Store
==============================

What:  SQLAlchemy store over the `photos` table.
"""

from typing import Iterable, List

from mygram.models.photo import Photo
from mygram.repositories.base import SqlAlchemyStore


class PhotoStore(SqlAlchemyStore[Photo]):
    model = Photo

    async def list_by_user(self, user_id: int) -> List[Photo]:
        return await self._scalars(
            self._live().where(Photo.user_id == user_id).order_by(Photo.id),
            "list_by_user",
        )

    async def find_many(self, photo_ids: Iterable[int]) -> List[Photo]:
        ids = sorted(set(photo_ids))
        if not ids:
            return []
        return await self._scalars(
            self._live().where(Photo.id.in_(ids)).order_by(Photo.id),
            "find_many",
        )
