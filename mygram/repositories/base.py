"""
MyGram Backend — Store Contracts and Shared SQLAlchemy Store
==============================================================

What:  The persistence boundary consumed by the services.
How:   `CredentialStore` and `OwnedResourceStore` are Protocols, so services
       and tests can swap in any implementation (in-memory fakes in tests).
       `SqlAlchemyStore` implements the common part once over an
       AsyncSession: live-row lookups, insert, partial update, soft delete.

Conventions:
    - A missing or soft-deleted row is returned as None, never raised.
      Callers decide whether None means 404.
    - Stores flush but never commit; the request-scoped session from
      `get_db_session` commits once the whole request succeeds.
    - Unexpected SQLAlchemy failures become DatabaseError with the
      operation name in the context.
"""

import logging
from contextlib import contextmanager
from typing import Any, Generic, Iterator, List, Mapping, Optional, Protocol, Type, TypeVar

from sqlalchemy import Select, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from mygram.exceptions import DatabaseError
from mygram.models.base import utcnow
from mygram.models.user import User

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")
ResourceT = TypeVar("ResourceT", covariant=True)


class OwnedResource(Protocol):
    """Anything with an identity and an owner identity."""

    id: int
    user_id: int


class CredentialStore(Protocol):
    async def find_by_email(self, email: str) -> Optional[User]: ...
    async def find_by_id(self, user_id: int) -> Optional[User]: ...
    async def insert(self, user: User) -> User: ...
    async def update(self, user_id: int, fields: Mapping[str, Any]) -> Optional[User]: ...
    async def soft_delete(self, user_id: int) -> Optional[User]: ...


class OwnedResourceStore(Protocol[ResourceT]):
    async def find_by_id(self, resource_id: int) -> Optional[ResourceT]: ...
    async def update(self, resource_id: int, fields: Mapping[str, Any]) -> Optional[ResourceT]: ...
    async def soft_delete(self, resource_id: int) -> Optional[ResourceT]: ...


class SqlAlchemyStore(Generic[ModelT]):
    """
    Shared CRUD over one mapped class.

    Subclasses set `model` and add their own finders on top of `_live()`.
    """

    model: Type[ModelT]

    def __init__(self, db: AsyncSession):
        self.db = db

    @contextmanager
    def _guard(self, operation: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            logger.error(
                "Database error in %s.%s: %s",
                type(self).__name__, operation, str(e),
            )
            raise DatabaseError(
                context={"operation": operation, "error_type": type(e).__name__},
            ) from e

    async def _flush(self) -> None:
        await self.db.flush()

    def _live(self) -> Select:
        """SELECT over rows that are not soft-deleted."""
        return select(self.model).where(self.model.deleted_at.is_(None))

    async def _scalars(self, query: Select, operation: str) -> List[ModelT]:
        with self._guard(operation):
            result = await self.db.execute(query)
            return list(result.scalars().all())

    async def find_by_id(self, resource_id: int) -> Optional[ModelT]:
        with self._guard("find_by_id"):
            result = await self.db.execute(
                self._live().where(self.model.id == resource_id)
            )
            return result.scalar_one_or_none()

    async def list_all(self) -> List[ModelT]:
        return await self._scalars(self._live().order_by(self.model.id), "list_all")

    async def insert(self, row: ModelT) -> ModelT:
        with self._guard("insert"):
            self.db.add(row)
            await self._flush()
        return row

    async def update(self, resource_id: int, fields: Mapping[str, Any]) -> Optional[ModelT]:
        row = await self.find_by_id(resource_id)
        if row is None:
            return None
        with self._guard("update"):
            for name, value in fields.items():
                setattr(row, name, value)
            await self._flush()
        return row

    async def soft_delete(self, resource_id: int) -> Optional[ModelT]:
        row = await self.find_by_id(resource_id)
        if row is None:
            return None
        with self._guard("soft_delete"):
            row.deleted_at = utcnow()
            await self._flush()
        return row
