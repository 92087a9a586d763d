"""
VerseNotes Backend — User Service Unit Tests
==============================================

What:  Tests for signup/login business rules with a mocked session.

What we test:
    ✅ Missing fields raise ValidationError before touching the database
    ✅ Duplicate email (lookup) raises ConflictError
    ✅ Duplicate email (unique constraint race) raises ConflictError
    ✅ Other database failures become StorageError
    ✅ Unknown email and wrong password produce the same AuthError
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from versenotes.exceptions import AuthError, ConflictError, StorageError, ValidationError
from versenotes.services.user_service import UserService


class _PgUniqueViolation(Exception):
    """Stands in for the asyncpg adapter's error carrying a SQLSTATE."""
    sqlstate = "23505"


def _lookup_result(value):
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    return result


class TestSignup:
    """Tests for UserService.signup."""

    @pytest.fixture(autouse=True)
    def _service(self, hasher):
        self.service = UserService(hasher)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "email,password",
        [(None, "p1"), ("a@x.com", None), ("", "p1"), ("a@x.com", "")],
    )
    async def test_missing_fields(self, mock_db_session, email, password):
        with pytest.raises(ValidationError, match="Email and password are required"):
            await self.service.signup(mock_db_session, email, password)
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_success_hashes_password(self, mock_db_session):
        mock_db_session.execute.return_value = _lookup_result(None)

        def assign_id():
            added = mock_db_session.add.call_args[0][0]
            added.id = 1

        mock_db_session.flush = AsyncMock(side_effect=assign_id)

        result = await self.service.signup(mock_db_session, "a@x.com", "p1")

        assert result.success is True
        assert result.user_id == 1
        assert result.email == "a@x.com"
        stored = mock_db_session.add.call_args[0][0]
        assert stored.password != "p1"
        assert stored.password.startswith("$2")

    @pytest.mark.asyncio
    async def test_existing_email_conflicts(self, mock_db_session):
        mock_db_session.execute.return_value = _lookup_result(1)

        with pytest.raises(ConflictError, match="Email already registered"):
            await self.service.signup(mock_db_session, "a@x.com", "other")
        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_unique_violation_on_insert_conflicts(self, mock_db_session):
        """Lookup saw nothing, but a concurrent signup won the insert."""
        mock_db_session.execute.return_value = _lookup_result(None)
        mock_db_session.flush = AsyncMock(
            side_effect=IntegrityError("INSERT INTO users", {}, _PgUniqueViolation())
        )

        with pytest.raises(ConflictError, match="Email already registered"):
            await self.service.signup(mock_db_session, "a@x.com", "p1")

    @pytest.mark.asyncio
    async def test_other_integrity_error_is_storage_error(self, mock_db_session):
        mock_db_session.execute.return_value = _lookup_result(None)
        mock_db_session.flush = AsyncMock(
            side_effect=IntegrityError("INSERT INTO users", {}, Exception("NOT NULL constraint failed"))
        )

        with pytest.raises(StorageError, match="Server error during signup"):
            await self.service.signup(mock_db_session, "a@x.com", "p1")

    @pytest.mark.asyncio
    async def test_connection_failure_is_storage_error(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("connection refused"))
        )

        with pytest.raises(StorageError, match="Server error during signup"):
            await self.service.signup(mock_db_session, "a@x.com", "p1")


class TestLogin:
    """Tests for UserService.login."""

    @pytest.fixture(autouse=True)
    def _service(self, hasher):
        self.service = UserService(hasher)
        self.hasher = hasher

    def _user(self, password: str):
        user = MagicMock()
        user.id = 7
        user.email = "a@x.com"
        user.password = self.hasher.hash_sync(password)
        return user

    @pytest.mark.asyncio
    async def test_missing_fields(self, mock_db_session):
        with pytest.raises(ValidationError):
            await self.service.login(mock_db_session, "a@x.com", None)

    @pytest.mark.asyncio
    async def test_success(self, mock_db_session):
        mock_db_session.execute.return_value = _lookup_result(self._user("p1"))

        result = await self.service.login(mock_db_session, "a@x.com", "p1")

        assert result.success is True
        assert result.user_id == 7
        assert result.email == "a@x.com"

    @pytest.mark.asyncio
    async def test_unknown_email_and_wrong_password_same_message(self, mock_db_session):
        mock_db_session.execute.return_value = _lookup_result(None)
        with pytest.raises(AuthError) as unknown:
            await self.service.login(mock_db_session, "nobody@x.com", "p1")

        mock_db_session.execute.return_value = _lookup_result(self._user("p1"))
        with pytest.raises(AuthError) as wrong:
            await self.service.login(mock_db_session, "a@x.com", "wrong")

        assert unknown.value.message == wrong.value.message == "Invalid email or password"

    @pytest.mark.asyncio
    async def test_database_failure(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("server closed the connection"))
        )

        with pytest.raises(StorageError, match="Server error during login"):
            await self.service.login(mock_db_session, "a@x.com", "p1")
