"""
MyGram Backend — Social Media Service
=======================================

What:  CRUD for a user's links to other social networks.
Who:   /socialmedias route handlers.

Listing without a `user_id` returns the caller's own links.
"""

import logging
from typing import Any, List, Optional

from mygram.exceptions import NotFoundError
from mygram.models.social_media import SocialMedia
from mygram.repositories.social_medias import SocialMediaStore
from mygram.repositories.users import UserStore
from mygram.schemas.social_media import (
    SocialMediaCreate,
    SocialMediaDeleteResponse,
    SocialMediaUpdate,
    SocialMediaView,
    SocialMediaWithUser,
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


class SocialMediaService:
    def __init__(self, social_medias: SocialMediaStore, users: UserStore):
        self.social_medias = social_medias
        self.users = users
        self.ownership = OwnershipRule.for_owned_store(social_medias, resource="social media")

    async def _with_owners(self, rows: List[SocialMedia]) -> List[SocialMediaWithUser]:
        owners = await owner_summaries(self.users, (s.user_id for s in rows))
        return [
            SocialMediaWithUser.model_validate(s).model_copy(update={"user": owners.get(s.user_id)})
            for s in rows
        ]

    async def list_social_medias(
        self,
        session: Optional[AuthenticatedSession],
        raw_user_id: Optional[Any] = None,
    ) -> List[SocialMediaWithUser]:
        caller = require_session(session)
        if raw_user_id is None:
            user_id = caller.user_id
        else:
            user_id = parse_resource_id(raw_user_id, field="user_id")
        return await self._with_owners(await self.social_medias.list_by_user(user_id))

    async def get_social_media(self, raw_id: Any) -> SocialMediaWithUser:
        link = await self.social_medias.find_by_id(parse_resource_id(raw_id))
        if link is None:
            raise NotFoundError(resource="social media")
        return (await self._with_owners([link]))[0]

    async def create_social_media(
        self,
        session: Optional[AuthenticatedSession],
        payload: SocialMediaCreate,
    ) -> SocialMediaView:
        caller = require_session(session)
        link = await self.social_medias.insert(
            SocialMedia(
                name=payload.name,
                social_media_url=payload.social_media_url,
                user_id=caller.user_id,
            )
        )
        logger.info("User id=%s added social media id=%s", caller.user_id, link.id)
        return SocialMediaView.model_validate(link)

    async def update_social_media(
        self,
        raw_id: Any,
        session: Optional[AuthenticatedSession],
        body: Any,
    ) -> SocialMediaView:
        async def edit(link: SocialMedia) -> SocialMediaView:
            payload = bind_payload(SocialMediaUpdate, body)
            updated = await self.social_medias.update(link.id, payload.model_dump())
            if updated is None:
                raise NotFoundError(resource="social media")
            return SocialMediaView.model_validate(updated)

        return await self.ownership.apply(raw_id, session, "edit", edit)

    async def delete_social_media(
        self,
        raw_id: Any,
        session: Optional[AuthenticatedSession],
    ) -> SocialMediaDeleteResponse:
        async def delete(link: SocialMedia) -> SocialMediaDeleteResponse:
            deleted = await self.social_medias.soft_delete(link.id)
            if deleted is None:
                raise NotFoundError(resource="social media")
            logger.info("Social media id=%s deleted", link.id)
            return SocialMediaDeleteResponse(social_media=SocialMediaView.model_validate(deleted))

        return await self.ownership.apply(raw_id, session, "delete", delete)
