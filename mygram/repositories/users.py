"""
MyGram Backend — Credential Store
===================================

What:  SQLAlchemy implementation of `CredentialStore` over the `users` table.
Who:   AuthService (sign-up, login) and UserService (list, edit, delete).

Email lookups are exact, case-sensitive matches on the stored value.
A unique-index violation on flush is reported as EmailTakenError; this is
what settles two concurrent sign-ups that both passed the service's
pre-check.
"""

import logging
from typing import Iterable, List, Optional

from sqlalchemy.exc import IntegrityError

from mygram.exceptions import EmailTakenError
from mygram.models.user import User
from mygram.repositories.base import SqlAlchemyStore

logger = logging.getLogger(__name__)


class UserStore(SqlAlchemyStore[User]):
    model = User

    async def _flush(self) -> None:
        try:
            await self.db.flush()
        except IntegrityError as e:
            logger.warning("Email uniqueness violated at the storage layer: %s", type(e).__name__)
            raise EmailTakenError() from e

    async def find_by_email(self, email: str) -> Optional[User]:
        with self._guard("find_by_email"):
            result = await self.db.execute(
                self._live().where(User.email == email)
            )
            return result.scalars().first()

    async def find_many(self, user_ids: Iterable[int]) -> List[User]:
        """Live users among `user_ids`, in id order."""
        ids = sorted(set(user_ids))
        if not ids:
            return []
        return await self._scalars(
            self._live().where(User.id.in_(ids)).order_by(User.id),
            "find_many",
        )
