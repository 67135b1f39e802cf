"""
MyGram Backend — User Route Handlers
======================================

What:  Registration, login, and account CRUD under /users.
How:   Thin handlers; AuthService and UserService do the work.

Endpoints:
    POST   /users/register   public     → 201 {"user": {...}}
    POST   /users/login      public     → 200 {"token": "..."}
    GET    /users            bearer     → 200 [...]
    GET    /users/{id}       bearer     → 200 {...}
    PUT    /users/{id}       bearer     → 200 {...}          (self only)
    DELETE /users/{id}       bearer     → 200 {"user", "message"} (self only)

Path ids are declared as plain strings so a non-numeric id is reported by
the ownership rule (400 "invalid required param") rather than by schema
validation. PUT bodies are taken as raw JSON for the same reason: they are
validated only after the ownership checks pass.
"""

from typing import Any, List

from fastapi import APIRouter, Body, Depends, status

from mygram.dependencies import get_auth_service, get_current_session, get_user_service
from mygram.schemas.common import ErrorResponse
from mygram.schemas.user import (
    SignUpResponse,
    TokenResponse,
    UserDeleteResponse,
    UserLogin,
    UserSignUp,
    UserView,
)
from mygram.services.auth_service import AuthService
from mygram.services.token_service import AuthenticatedSession
from mygram.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])

_AUTH_ERRORS = {
    400: {"description": "Invalid id or body", "model": ErrorResponse},
    401: {"description": "Missing or invalid session token", "model": ErrorResponse},
    403: {"description": "Not the account owner", "model": ErrorResponse},
    404: {"description": "User not found", "model": ErrorResponse},
}


@router.post(
    "/register",
    response_model=SignUpResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Invalid dob, age, password or email", "model": ErrorResponse},
        409: {"description": "Email already registered", "model": ErrorResponse},
    },
    summary="Register a new account",
)
async def register(
    payload: UserSignUp,
    auth: AuthService = Depends(get_auth_service),
) -> SignUpResponse:
    return SignUpResponse(user=await auth.sign_up(payload))


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={
        401: {"description": "Wrong password", "model": ErrorResponse},
        404: {"description": "Unknown email", "model": ErrorResponse},
    },
    summary="Exchange email and password for a session token",
)
async def login(
    payload: UserLogin,
    auth: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    return TokenResponse(token=await auth.login(payload.email, payload.password))


@router.get(
    "",
    response_model=List[UserView],
    dependencies=[Depends(get_current_session)],
    summary="List users",
)
async def list_users(users: UserService = Depends(get_user_service)) -> List[UserView]:
    return await users.list_users()


@router.get(
    "/{user_id}",
    response_model=UserView,
    responses=_AUTH_ERRORS,
    dependencies=[Depends(get_current_session)],
    summary="Get a user by id",
)
async def get_user(user_id: str, users: UserService = Depends(get_user_service)) -> UserView:
    return await users.get_user(user_id)


@router.put(
    "/{user_id}",
    response_model=UserView,
    responses={**_AUTH_ERRORS, 409: {"description": "Email already registered", "model": ErrorResponse}},
    summary="Edit your own account",
)
async def edit_user(
    user_id: str,
    body: Any = Body(default=None, description="UserUpdate fields"),
    session: AuthenticatedSession = Depends(get_current_session),
    users: UserService = Depends(get_user_service),
) -> UserView:
    return await users.edit_user(user_id, session, body)


@router.delete(
    "/{user_id}",
    response_model=UserDeleteResponse,
    responses=_AUTH_ERRORS,
    summary="Delete your own account",
)
async def delete_user(
    user_id: str,
    session: AuthenticatedSession = Depends(get_current_session),
    users: UserService = Depends(get_user_service),
) -> UserDeleteResponse:
    return await users.delete_user(user_id, session)
