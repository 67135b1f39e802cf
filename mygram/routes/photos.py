"""
MyGram Backend — Photo Route Handlers
=======================================

Endpoints (all require a bearer token):
    GET    /photos                  every photo with its owner
    GET    /photos/user?user_id=    photos of one user
    GET    /photos/{id}
    POST   /photos                  owner = caller
    PUT    /photos/{id}             owner only
    DELETE /photos/{id}             owner only

`/photos/user` is declared before `/photos/{photo_id}` so it is not
captured as an id.

The PUT body is passed through unvalidated; PhotoService binds it to
PhotoUpdate after the ownership checks.
"""

from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, Query, status

from mygram.dependencies import get_current_session, get_photo_service
from mygram.schemas.common import ErrorResponse
from mygram.schemas.photo import (
    PhotoCreate,
    PhotoDeleteResponse,
    PhotoView,
    PhotoWithUser,
)
from mygram.services.photo_service import PhotoService
from mygram.services.token_service import AuthenticatedSession

router = APIRouter(prefix="/photos", tags=["Photos"])

_ERRORS = {
    400: {"description": "Invalid id or body", "model": ErrorResponse},
    401: {"description": "Missing or invalid session token", "model": ErrorResponse},
    404: {"description": "Photo not found", "model": ErrorResponse},
}
_OWNER_ERRORS = {**_ERRORS, 403: {"description": "Not the photo owner", "model": ErrorResponse}}


@router.get("", response_model=List[PhotoWithUser], summary="List photos")
async def list_photos(
    _: AuthenticatedSession = Depends(get_current_session),
    photos: PhotoService = Depends(get_photo_service),
) -> List[PhotoWithUser]:
    return await photos.list_photos()


@router.get("/user", response_model=List[PhotoWithUser], responses=_ERRORS, summary="List a user's photos")
async def list_user_photos(
    user_id: Optional[str] = Query(default=None, description="Owner id"),
    _: AuthenticatedSession = Depends(get_current_session),
    photos: PhotoService = Depends(get_photo_service),
) -> List[PhotoWithUser]:
    return await photos.list_user_photos(user_id)


@router.get("/{photo_id}", response_model=PhotoWithUser, responses=_ERRORS, summary="Get a photo")
async def get_photo(
    photo_id: str,
    _: AuthenticatedSession = Depends(get_current_session),
    photos: PhotoService = Depends(get_photo_service),
) -> PhotoWithUser:
    return await photos.get_photo(photo_id)


@router.post(
    "",
    response_model=PhotoView,
    status_code=status.HTTP_201_CREATED,
    responses=_ERRORS,
    summary="Upload a photo",
)
async def create_photo(
    payload: PhotoCreate,
    session: AuthenticatedSession = Depends(get_current_session),
    photos: PhotoService = Depends(get_photo_service),
) -> PhotoView:
    return await photos.create_photo(session, payload)


@router.put("/{photo_id}", response_model=PhotoView, responses=_OWNER_ERRORS, summary="Edit your photo")
async def update_photo(
    photo_id: str,
    body: Any = Body(default=None, description="PhotoUpdate fields"),
    session: AuthenticatedSession = Depends(get_current_session),
    photos: PhotoService = Depends(get_photo_service),
) -> PhotoView:
    return await photos.update_photo(photo_id, session, body)


@router.delete(
    "/{photo_id}",
    response_model=PhotoDeleteResponse,
    responses=_OWNER_ERRORS,
    summary="Delete your photo",
)
async def delete_photo(
    photo_id: str,
    session: AuthenticatedSession = Depends(get_current_session),
    photos: PhotoService = Depends(get_photo_service),
) -> PhotoDeleteResponse:
    return await photos.delete_photo(photo_id, session)
