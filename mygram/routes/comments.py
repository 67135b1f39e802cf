"""
MyGram Backend — Comment Route Handlers
=========================================

Endpoints (all require a bearer token):
    GET    /comments[?photo_id=]    all comments, or those on one photo
    GET    /comments/{id}           with author and photo summaries
    POST   /comments                photo must exist
    PUT    /comments/{id}           author only
    DELETE /comments/{id}           author only
"""

from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, Query, status

from mygram.dependencies import get_comment_service, get_current_session
from mygram.schemas.comment import (
    CommentCreate,
    CommentDeleteResponse,
    CommentDetail,
    CommentView,
)
from mygram.schemas.common import ErrorResponse
from mygram.services.comment_service import CommentService
from mygram.services.token_service import AuthenticatedSession

router = APIRouter(prefix="/comments", tags=["Comments"])

_ERRORS = {
    400: {"description": "Invalid id or body", "model": ErrorResponse},
    401: {"description": "Missing or invalid session token", "model": ErrorResponse},
    404: {"description": "Comment or photo not found", "model": ErrorResponse},
}
_OWNER_ERRORS = {**_ERRORS, 403: {"description": "Not the comment author", "model": ErrorResponse}}


@router.get("", response_model=List[CommentDetail], responses=_ERRORS, summary="List comments")
async def list_comments(
    photo_id: Optional[str] = Query(default=None, description="Only comments on this photo"),
    _: AuthenticatedSession = Depends(get_current_session),
    comments: CommentService = Depends(get_comment_service),
) -> List[CommentDetail]:
    return await comments.list_comments(photo_id)


@router.get("/{comment_id}", response_model=CommentDetail, responses=_ERRORS, summary="Get a comment")
async def get_comment(
    comment_id: str,
    _: AuthenticatedSession = Depends(get_current_session),
    comments: CommentService = Depends(get_comment_service),
) -> CommentDetail:
    return await comments.get_comment(comment_id)


@router.post(
    "",
    response_model=CommentView,
    status_code=status.HTTP_201_CREATED,
    responses=_ERRORS,
    summary="Comment on a photo",
)
async def create_comment(
    payload: CommentCreate,
    session: AuthenticatedSession = Depends(get_current_session),
    comments: CommentService = Depends(get_comment_service),
) -> CommentView:
    return await comments.create_comment(session, payload)


@router.put("/{comment_id}", response_model=CommentView, responses=_OWNER_ERRORS, summary="Edit your comment")
async def update_comment(
    comment_id: str,
    body: Any = Body(default=None, description="CommentUpdate fields"),
    session: AuthenticatedSession = Depends(get_current_session),
    comments: CommentService = Depends(get_comment_service),
) -> CommentView:
    return await comments.update_comment(comment_id, session, body)


@router.delete(
    "/{comment_id}",
    response_model=CommentDeleteResponse,
    responses=_OWNER_ERRORS,
    summary="Delete your comment",
)
async def delete_comment(
    comment_id: str,
    session: AuthenticatedSession = Depends(get_current_session),
    comments: CommentService = Depends(get_comment_service),
) -> CommentDeleteResponse:
    return await comments.delete_comment(comment_id, session)
