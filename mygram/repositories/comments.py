"""
MyGram Backend — Comment Store
================================

What:  SQLAlchemy store over the `comments` table.
"""

from typing import List

from mygram.models.comment import Comment
from mygram.repositories.base import SqlAlchemyStore


class CommentStore(SqlAlchemyStore[Comment]):
    model = Comment

    async def list_by_photo(self, photo_id: int) -> List[Comment]:
        return await self._scalars(
            self._live().where(Comment.photo_id == photo_id).order_by(Comment.id),
            "list_by_photo",
        )
