"""
MyGram Backend — Store Unit Tests
===================================

What:  SQLAlchemy stores against a mocked AsyncSession.

What we test:
    ✅ Missing rows come back as None
    ✅ Soft delete stamps deleted_at instead of removing the row
    ✅ Unique-index violations on users become EmailTakenError
    ✅ Other SQLAlchemy failures become DatabaseError
"""

from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from mygram.exceptions import DatabaseError, EmailTakenError
from mygram.models.photo import Photo
from mygram.models.user import User
from mygram.repositories import PhotoStore, UserStore


def _result_with(row):
    result = MagicMock()
    result.scalar_one_or_none.return_value = row
    return result


class TestPhotoStore:

    @pytest.mark.asyncio
    async def test_find_by_id_returns_none_when_missing(self, mock_db_session):
        mock_db_session.execute.return_value = _result_with(None)
        assert await PhotoStore(mock_db_session).find_by_id(1) is None

    @pytest.mark.asyncio
    async def test_soft_delete_sets_deleted_at(self, mock_db_session):
        photo = Photo(id=1, title="t", caption="", photo_url="u", user_id=1)
        mock_db_session.execute.return_value = _result_with(photo)

        deleted = await PhotoStore(mock_db_session).soft_delete(1)

        assert deleted is photo
        assert photo.deleted_at is not None
        mock_db_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_applies_fields(self, mock_db_session):
        photo = Photo(id=1, title="old", caption="", photo_url="u", user_id=1)
        mock_db_session.execute.return_value = _result_with(photo)

        await PhotoStore(mock_db_session).update(1, {"title": "new"})

        assert photo.title == "new"
        assert photo.user_id == 1

    @pytest.mark.asyncio
    async def test_update_of_missing_row_returns_none(self, mock_db_session):
        mock_db_session.execute.return_value = _result_with(None)
        assert await PhotoStore(mock_db_session).update(9, {"title": "x"}) is None
        mock_db_session.flush.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_query_failure_becomes_database_error(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("connection lost"))
        )
        with pytest.raises(DatabaseError) as exc_info:
            await PhotoStore(mock_db_session).find_by_id(1)
        assert exc_info.value.context["operation"] == "find_by_id"


class TestUserStore:

    @pytest.mark.asyncio
    async def test_unique_violation_becomes_email_taken(self, mock_db_session):
        mock_db_session.flush = AsyncMock(
            side_effect=IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))
        )
        user = User(username="a", email="a@mygram.io", password_hash="h", dob=date(2000, 1, 1))

        with pytest.raises(EmailTakenError):
            await UserStore(mock_db_session).insert(user)

    @pytest.mark.asyncio
    async def test_find_many_skips_query_for_no_ids(self, mock_db_session):
        assert await UserStore(mock_db_session).find_many([]) == []
        mock_db_session.execute.assert_not_awaited()
