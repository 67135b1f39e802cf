"""
MyGram Backend — FastAPI Dependency Wiring
============================================

What:  Builds the services each route needs and resolves the caller's session.
How:   FastAPI `Depends` chains. `settings` is read here and nowhere in the
       core: the hasher and token service receive their values through
       their constructors and are cached once per process.
Who:   Route handlers in mygram/routes.

Session resolution:
    Authorization: Bearer <token>
        → TokenService.verify(token)        (401 on any token failure)
        → SessionClaim.session()            (typed AuthenticatedSession)

    A missing header, or a scheme other than Bearer, is UnauthorizedError.

Tests override `get_db_session`, `get_token_service` or `get_password_hasher`
through `app.dependency_overrides`.
"""

from datetime import timedelta
from functools import lru_cache
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from mygram.config import settings
from mygram.database import get_db_session
from mygram.exceptions import UnauthorizedError
from mygram.repositories import CommentStore, PhotoStore, SocialMediaStore, UserStore
from mygram.services.auth_service import AuthService
from mygram.services.comment_service import CommentService
from mygram.services.password_service import PasswordHasher
from mygram.services.photo_service import PhotoService
from mygram.services.social_media_service import SocialMediaService
from mygram.services.token_service import AuthenticatedSession, TokenService
from mygram.services.user_service import UserService

bearer_scheme = HTTPBearer(auto_error=False, description="Session token from POST /users/login")


# ── Process-wide components ───────────────────────────────────────────────


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=settings.bcrypt_rounds)


@lru_cache
def get_token_service() -> TokenService:
    return TokenService(
        secret=settings.jwt_secret,
        ttl=timedelta(seconds=settings.token_ttl_seconds),
        issuer=settings.token_issuer,
        audience=settings.token_audience,
        subject=settings.token_subject,
        algorithm=settings.jwt_algorithm,
    )


# ── Session ───────────────────────────────────────────────────────────────


async def get_current_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> AuthenticatedSession:
    """
    Resolve the bearer token into the caller's session.

    Raises:
        UnauthorizedError: No bearer token supplied.
        AuthenticationError subclasses from TokenService.verify.
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError()
    return tokens.verify(credentials.credentials).session()


# ── Per-request services ──────────────────────────────────────────────────


def get_auth_service(
    db: AsyncSession = Depends(get_db_session),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService(
        users=UserStore(db),
        hasher=hasher,
        tokens=tokens,
        min_age=settings.min_signup_age,
        min_password_length=settings.min_password_length,
    )


def get_user_service(
    db: AsyncSession = Depends(get_db_session),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> UserService:
    return UserService(
        users=UserStore(db),
        hasher=hasher,
        min_age=settings.min_signup_age,
        min_password_length=settings.min_password_length,
    )


def get_photo_service(db: AsyncSession = Depends(get_db_session)) -> PhotoService:
    return PhotoService(photos=PhotoStore(db), users=UserStore(db))


def get_comment_service(db: AsyncSession = Depends(get_db_session)) -> CommentService:
    return CommentService(comments=CommentStore(db), photos=PhotoStore(db), users=UserStore(db))


def get_social_media_service(db: AsyncSession = Depends(get_db_session)) -> SocialMediaService:
    return SocialMediaService(social_medias=SocialMediaStore(db), users=UserStore(db))
