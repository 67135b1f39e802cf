"""
MyGram Backend — Social Media Route Handlers
==============================================

Endpoints (all require a bearer token):
    GET    /socialmedias[?user_id=]   links of a user (default: the caller)
    GET    /socialmedias/{id}
    POST   /socialmedias
    PUT    /socialmedias/{id}         owner only
    DELETE /socialmedias/{id}         owner only
"""

from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, Query, status

from mygram.dependencies import get_current_session, get_social_media_service
from mygram.schemas.common import ErrorResponse
from mygram.schemas.social_media import (
    SocialMediaCreate,
    SocialMediaDeleteResponse,
    SocialMediaView,
    SocialMediaWithUser,
)
from mygram.services.social_media_service import SocialMediaService
from mygram.services.token_service import AuthenticatedSession

router = APIRouter(prefix="/socialmedias", tags=["Social Medias"])

_ERRORS = {
    400: {"description": "Invalid id or body", "model": ErrorResponse},
    401: {"description": "Missing or invalid session token", "model": ErrorResponse},
    404: {"description": "Social media not found", "model": ErrorResponse},
}
_OWNER_ERRORS = {**_ERRORS, 403: {"description": "Not the link owner", "model": ErrorResponse}}


@router.get("", response_model=List[SocialMediaWithUser], responses=_ERRORS, summary="List social media links")
async def list_social_medias(
    user_id: Optional[str] = Query(default=None, description="Owner id (defaults to the caller)"),
    session: AuthenticatedSession = Depends(get_current_session),
    social_medias: SocialMediaService = Depends(get_social_media_service),
) -> List[SocialMediaWithUser]:
    return await social_medias.list_social_medias(session, user_id)


@router.get(
    "/{social_media_id}",
    response_model=SocialMediaWithUser,
    responses=_ERRORS,
    summary="Get a social media link",
)
async def get_social_media(
    social_media_id: str,
    _: AuthenticatedSession = Depends(get_current_session),
    social_medias: SocialMediaService = Depends(get_social_media_service),
) -> SocialMediaWithUser:
    return await social_medias.get_social_media(social_media_id)


@router.post(
    "",
    response_model=SocialMediaView,
    status_code=status.HTTP_201_CREATED,
    responses=_ERRORS,
    summary="Add a social media link",
)
async def create_social_media(
    payload: SocialMediaCreate,
    session: AuthenticatedSession = Depends(get_current_session),
    social_medias: SocialMediaService = Depends(get_social_media_service),
) -> SocialMediaView:
    return await social_medias.create_social_media(session, payload)


@router.put(
    "/{social_media_id}",
    response_model=SocialMediaView,
    responses=_OWNER_ERRORS,
    summary="Edit your social media link",
)
async def update_social_media(
    social_media_id: str,
    body: Any = Body(default=None, description="SocialMediaUpdate fields"),
    session: AuthenticatedSession = Depends(get_current_session),
    social_medias: SocialMediaService = Depends(get_social_media_service),
) -> SocialMediaView:
    return await social_medias.update_social_media(social_media_id, session, body)


@router.delete(
    "/{social_media_id}",
    response_model=SocialMediaDeleteResponse,
    responses=_OWNER_ERRORS,
    summary="Delete your social media link",
)
async def delete_social_media(
    social_media_id: str,
    session: AuthenticatedSession = Depends(get_current_session),
    social_medias: SocialMediaService = Depends(get_social_media_service),
) -> SocialMediaDeleteResponse:
    return await social_medias.delete_social_media(social_media_id, session)
