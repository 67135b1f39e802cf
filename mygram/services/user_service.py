"""
MyGram Backend — User Service
===============================

What:  Listing, lookup, self-edit and self-delete of accounts.
Who:   /users route handlers.

Only the account's own session may edit or delete it. That check is the
shared OwnershipRule with the owner accessor returning the user's own id,
so the usual order applies: bad id → 400, no session → 401, unknown id → 404,
someone else's id → 403.

Edited fields go through the same validators as sign-up.
"""

import logging
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from mygram.exceptions import EmailTakenError, UserNotFoundError
from mygram.models.user import User
from mygram.repositories.users import UserStore
from mygram.schemas.common import UserSummary
from mygram.schemas.user import UserDeleteResponse, UserUpdate, UserView
from mygram.services.auth_service import check_age, check_email, check_password, parse_dob
from mygram.services.ownership import OwnershipRule, bind_payload, parse_resource_id
from mygram.services.password_service import PasswordHasher
from mygram.services.token_service import AuthenticatedSession

logger = logging.getLogger(__name__)


async def owner_summaries(users: UserStore, user_ids: Iterable[int]) -> Dict[int, UserSummary]:
    """Map each live owner id to its summary; deleted owners are absent."""
    return {
        user.id: UserSummary.model_validate(user)
        for user in await users.find_many(user_ids)
    }


class UserService:
    def __init__(
        self,
        users: UserStore,
        hasher: PasswordHasher,
        min_age: int = 8,
        min_password_length: int = 6,
    ):
        self.users = users
        self.hasher = hasher
        self.min_age = min_age
        self.min_password_length = min_password_length
        self.ownership = OwnershipRule(
            loader=users.find_by_id,
            owner_of=lambda user: user.id,
            resource="user",
        )

    async def list_users(self) -> List[UserView]:
        return [UserView.model_validate(u) for u in await self.users.list_all()]

    async def get_user(self, raw_id: Any) -> UserView:
        user = await self.users.find_by_id(parse_resource_id(raw_id))
        if user is None:
            raise UserNotFoundError()
        return UserView.model_validate(user)

    async def edit_user(
        self,
        raw_id: Any,
        session: Optional[AuthenticatedSession],
        body: Any,
        today: Optional[date] = None,
    ) -> UserView:
        """
        Update the caller's own account.

        `body` is the raw JSON object; it is validated as UserUpdate only
        once the ownership checks have passed.

        Raises:
            BadRequestError, UnauthorizedError, UserNotFound/NotFoundError,
            ForbiddenError, the sign-up validation errors, EmailTakenError
        """
        today = today or date.today()

        async def edit(user: User) -> UserView:
            payload = bind_payload(UserUpdate, body)
            fields: Dict[str, Any] = {}

            if payload.dob is not None:
                dob = parse_dob(payload.dob)
                check_age(dob, today, self.min_age)
                fields["dob"] = dob
            if payload.password is not None:
                check_password(payload.password, self.min_password_length)
            if payload.email is not None and payload.email != user.email:
                check_email(payload.email)
                existing = await self.users.find_by_email(payload.email)
                if existing is not None and existing.id != user.id:
                    raise EmailTakenError()
                fields["email"] = payload.email
            if payload.username is not None:
                fields["username"] = payload.username
            if payload.password is not None:
                fields["password_hash"] = self.hasher.hash(payload.password)

            if not fields:
                return UserView.model_validate(user)

            updated = await self.users.update(user.id, fields)
            if updated is None:
                raise UserNotFoundError()
            logger.info("User id=%s updated fields=%s", user.id, sorted(fields))
            return UserView.model_validate(updated)

        return await self.ownership.apply(raw_id, session, "edit", edit)

    async def delete_user(
        self,
        raw_id: Any,
        session: Optional[AuthenticatedSession],
    ) -> UserDeleteResponse:
        async def delete(user: User) -> UserDeleteResponse:
            deleted = await self.users.soft_delete(user.id)
            if deleted is None:
                raise UserNotFoundError()
            logger.info("User id=%s deleted their account", user.id)
            return UserDeleteResponse(user=UserView.model_validate(deleted))

        return await self.ownership.apply(raw_id, session, "delete", delete)
