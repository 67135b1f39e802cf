"""
MyGram Backend — Photo Service
================================

What:  CRUD for photos.
Who:   /photos route handlers.

Reads are open to any authenticated session and carry the owner's
username/email. Updates and deletes go through the OwnershipRule before
anything is written; the owner of a photo is whoever created it.
"""

import logging
from typing import Any, List, Optional

from mygram.exceptions import NotFoundError
from mygram.models.photo import Photo
from mygram.repositories.photos import PhotoStore
from mygram.repositories.users import UserStore
from mygram.schemas.photo import (
    PhotoCreate,
    PhotoDeleteResponse,
    PhotoUpdate,
    PhotoView,
    PhotoWithUser,
)
from mygram.services.ownership import (
    OwnershipRule,
    bind_payload,
    parse_resource_id,
    require_session,
)
from mygram.services.token_service import AuthenticatedSession
from mygram.services.user_service import owner_summaries

logger = logging.getLogger(__name__)


class PhotoService:
    def __init__(self, photos: PhotoStore, users: UserStore):
        self.photos = photos
        self.users = users
        self.ownership = OwnershipRule.for_owned_store(photos, resource="photo")

    async def _with_owners(self, rows: List[Photo]) -> List[PhotoWithUser]:
        owners = await owner_summaries(self.users, (p.user_id for p in rows))
        return [
            PhotoWithUser.model_validate(p).model_copy(update={"user": owners.get(p.user_id)})
            for p in rows
        ]

    async def list_photos(self) -> List[PhotoWithUser]:
        return await self._with_owners(await self.photos.list_all())

    async def list_user_photos(self, raw_user_id: Any) -> List[PhotoWithUser]:
        user_id = parse_resource_id(raw_user_id, field="user_id")
        return await self._with_owners(await self.photos.list_by_user(user_id))

    async def get_photo(self, raw_id: Any) -> PhotoWithUser:
        photo = await self.photos.find_by_id(parse_resource_id(raw_id))
        if photo is None:
            raise NotFoundError(resource="photo")
        return (await self._with_owners([photo]))[0]

    async def create_photo(
        self,
        session: Optional[AuthenticatedSession],
        payload: PhotoCreate,
    ) -> PhotoView:
        caller = require_session(session)
        photo = await self.photos.insert(
            Photo(
                title=payload.title,
                caption=payload.caption,
                photo_url=payload.photo_url,
                user_id=caller.user_id,
            )
        )
        logger.info("User id=%s created photo id=%s", caller.user_id, photo.id)
        return PhotoView.model_validate(photo)

    async def update_photo(
        self,
        raw_id: Any,
        session: Optional[AuthenticatedSession],
        body: Any,
    ) -> PhotoView:
        """
        Replace the editable fields of the caller's photo.

        `body` is the raw JSON object; it is validated as PhotoUpdate only
        once the ownership checks have passed.
        """
        async def edit(photo: Photo) -> PhotoView:
            payload = bind_payload(PhotoUpdate, body)
            updated = await self.photos.update(photo.id, payload.model_dump())
            if updated is None:
                raise NotFoundError(resource="photo")
            logger.info("Photo id=%s updated", photo.id)
            return PhotoView.model_validate(updated)

        return await self.ownership.apply(raw_id, session, "edit", edit)

    async def delete_photo(
        self,
        raw_id: Any,
        session: Optional[AuthenticatedSession],
    ) -> PhotoDeleteResponse:
        async def delete(photo: Photo) -> PhotoDeleteResponse:
            deleted = await self.photos.soft_delete(photo.id)
            if deleted is None:
                raise NotFoundError(resource="photo")
            logger.info("Photo id=%s deleted", photo.id)
            return PhotoDeleteResponse(photo=PhotoView.model_validate(deleted))

        return await self.ownership.apply(raw_id, session, "delete", delete)
