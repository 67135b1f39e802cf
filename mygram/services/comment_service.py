"""
MyGram Backend — Comment Service
==================================

What:  CRUD for comments on photos.
Who:   /comments route handlers.

A comment can only be created on a live photo. Its owner is the session
that created it, not the photo's owner; only that session may edit or
delete it.
"""

import logging
from typing import Any, List, Optional

from mygram.exceptions import NotFoundError
from mygram.models.comment import Comment
from mygram.repositories.comments import CommentStore
from mygram.repositories.photos import PhotoStore
from mygram.repositories.users import UserStore
from mygram.schemas.comment import (
    CommentCreate,
    CommentDeleteResponse,
    CommentDetail,
    CommentUpdate,
    CommentView,
)
from mygram.schemas.common import PhotoSummary
from mygram.services.ownership import (
    OwnershipRule,
    bind_payload,
    parse_resource_id,
    require_session,
)
from mygram.services.token_service import AuthenticatedSession
from mygram.services.user_service import owner_summaries

logger = logging.getLogger(__name__)


class CommentService:
    def __init__(self, comments: CommentStore, photos: PhotoStore, users: UserStore):
        self.comments = comments
        self.photos = photos
        self.users = users
        self.ownership = OwnershipRule.for_owned_store(comments, resource="comment")

    async def _details(self, rows: List[Comment]) -> List[CommentDetail]:
        owners = await owner_summaries(self.users, (c.user_id for c in rows))
        photos = {
            p.id: PhotoSummary.model_validate(p)
            for p in await self.photos.find_many(c.photo_id for c in rows)
        }
        return [
            CommentDetail.model_validate(c).model_copy(
                update={"user": owners.get(c.user_id), "photo": photos.get(c.photo_id)}
            )
            for c in rows
        ]

    async def list_comments(self, raw_photo_id: Optional[Any] = None) -> List[CommentDetail]:
        """All comments, or those on one photo when `raw_photo_id` is given."""
        if raw_photo_id is None:
            rows = await self.comments.list_all()
        else:
            photo_id = parse_resource_id(raw_photo_id, field="photo_id")
            rows = await self.comments.list_by_photo(photo_id)
        return await self._details(rows)

    async def get_comment(self, raw_id: Any) -> CommentDetail:
        comment = await self.comments.find_by_id(parse_resource_id(raw_id))
        if comment is None:
            raise NotFoundError(resource="comment")
        return (await self._details([comment]))[0]

    async def create_comment(
        self,
        session: Optional[AuthenticatedSession],
        payload: CommentCreate,
    ) -> CommentView:
        caller = require_session(session)
        if await self.photos.find_by_id(payload.photo_id) is None:
            raise NotFoundError(resource="photo")
        comment = await self.comments.insert(
            Comment(
                message=payload.message,
                photo_id=payload.photo_id,
                user_id=caller.user_id,
            )
        )
        logger.info(
            "User id=%s commented on photo id=%s (comment id=%s)",
            caller.user_id, payload.photo_id, comment.id,
        )
        return CommentView.model_validate(comment)

    async def update_comment(
        self,
        raw_id: Any,
        session: Optional[AuthenticatedSession],
        body: Any,
    ) -> CommentView:
        async def edit(comment: Comment) -> CommentView:
            payload = bind_payload(CommentUpdate, body)
            updated = await self.comments.update(comment.id, {"message": payload.message})
            if updated is None:
                raise NotFoundError(resource="comment")
            return CommentView.model_validate(updated)

        return await self.ownership.apply(raw_id, session, "edit", edit)

    async def delete_comment(
        self,
        raw_id: Any,
        session: Optional[AuthenticatedSession],
    ) -> CommentDeleteResponse:
        async def delete(comment: Comment) -> CommentDeleteResponse:
            deleted = await self.comments.soft_delete(comment.id)
            if deleted is None:
                raise NotFoundError(resource="comment")
            logger.info("Comment id=%s deleted", comment.id)
            return CommentDeleteResponse(comment=CommentView.model_validate(deleted))

        return await self.ownership.apply(raw_id, session, "delete", delete)
