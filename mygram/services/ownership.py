"""
MyGram Backend — Ownership Authorization Rule
===============================================

What:  The single check that guards every update/delete of an owned resource.
How:   Parameterized by a loader (`async id -> resource | None`) and an owner
       accessor (`resource -> owner id`). Steps run in a fixed order, and the
       first failing step decides the error:

           1. path id is a positive integer        → BadRequestError   (400)
           2. a session with a positive identity   → UnauthorizedError (401)
           3. the resource exists                  → NotFoundError     (404)
           4. session identity == owner identity   → ForbiddenError    (403)
           5. the mutation runs (update bodies are bound here, see
              `bind_payload`)

Who:   PhotoService, CommentService, SocialMediaService (owner = `user_id`)
       and UserService (owner = the user's own id).

Because the resource is loaded before the owner comparison, a missing id is
always reported as 404, even to a caller who could never have owned it.
"""

import logging
from typing import Any, Awaitable, Callable, Generic, Optional, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as SchemaValidationError

from mygram.exceptions import (
    BadRequestError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
)
from mygram.repositories.base import OwnedResource, OwnedResourceStore
from mygram.services.token_service import AuthenticatedSession

logger = logging.getLogger(__name__)

ResourceT = TypeVar("ResourceT")
ResultT = TypeVar("ResultT")
SchemaT = TypeVar("SchemaT", bound=BaseModel)


def parse_resource_id(raw_id: Any, field: str = "id") -> int:
    """
    Parse a path parameter into a positive integer id.

    Accepts ints and decimal strings; rejects bools, signs, blanks and zero.

    Raises:
        BadRequestError: The value is not a positive integer.
    """
    if isinstance(raw_id, bool):
        raise BadRequestError(field=field)
    if isinstance(raw_id, int):
        value = raw_id
    elif isinstance(raw_id, str) and raw_id.isascii() and raw_id.isdigit():
        value = int(raw_id)
    else:
        raise BadRequestError(field=field)
    if value <= 0:
        raise BadRequestError(field=field)
    return value


def require_session(session: Optional[AuthenticatedSession]) -> AuthenticatedSession:
    """Return the session, or raise UnauthorizedError if it has no usable identity."""
    if session is None:
        raise UnauthorizedError()
    user_id = session.user_id
    if isinstance(user_id, bool) or not isinstance(user_id, int) or user_id <= 0:
        raise UnauthorizedError()
    return session


def bind_payload(schema: Type[SchemaT], body: Any) -> SchemaT:
    """
    Validate a raw JSON request body into `schema`.

    Update services call this from inside the mutation step, after the
    ownership checks have passed.

    Raises:
        BadRequestError: The body does not match the schema. The message
            names the first offending field, as in `title: Field required`.
    """
    if isinstance(body, schema):
        return body
    try:
        return schema.model_validate(body)
    except SchemaValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ()))
        message = first.get("msg", "Invalid request")
        raise BadRequestError(
            message=f"{field}: {message}" if field else message,
            field=field or None,
        ) from e


class OwnershipRule(Generic[ResourceT]):
    """
    Generic owner check for one kind of resource.

    Args:
        loader:   Fetches a live resource by id, None when absent.
        owner_of: Returns the owner identity of a loaded resource.
        resource: Label used in messages ("photo", "comment", ...).
        id_of:    Returns the resource's own id (defaults to `.id`).
    """

    def __init__(
        self,
        loader: Callable[[int], Awaitable[Optional[ResourceT]]],
        owner_of: Callable[[ResourceT], int],
        resource: str,
        id_of: Callable[[ResourceT], Any] = lambda r: getattr(r, "id", None),
    ):
        self.loader = loader
        self.owner_of = owner_of
        self.resource = resource
        self.id_of = id_of

    @classmethod
    def for_owned_store(
        cls,
        store: OwnedResourceStore[OwnedResource],
        resource: str,
    ) -> "OwnershipRule[OwnedResource]":
        """Rule for rows whose owner is their `user_id` column."""
        return cls(
            loader=store.find_by_id,
            owner_of=lambda row: row.user_id,
            resource=resource,
        )

    async def enforce(
        self,
        raw_id: Any,
        session: Optional[AuthenticatedSession],
        action: str = "edit",
    ) -> ResourceT:
        """
        Run steps 1-4 and return the loaded resource.

        Raises:
            BadRequestError, UnauthorizedError, NotFoundError, ForbiddenError
        """
        resource_id = parse_resource_id(raw_id)
        caller = require_session(session)

        resource = await self.loader(resource_id)
        if resource is None or not self.id_of(resource):
            raise NotFoundError(resource=self.resource)

        if self.owner_of(resource) != caller.user_id:
            logger.info(
                "Denied %s on %s id=%s: user=%s is not the owner",
                action, self.resource, resource_id, caller.user_id,
            )
            raise ForbiddenError(resource=self.resource, action=action)
        return resource

    async def apply(
        self,
        raw_id: Any,
        session: Optional[AuthenticatedSession],
        action: str,
        mutate: Callable[[ResourceT], Awaitable[ResultT]],
    ) -> ResultT:
        """Enforce ownership, then run `mutate` on the loaded resource."""
        resource = await self.enforce(raw_id, session, action)
        return await mutate(resource)
