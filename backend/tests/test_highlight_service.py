"""
VerseNotes Backend — Highlight Service Unit Tests
===================================================

What:  Presence checks, access-policy gating and delete reporting.
How:   Mocked session; the policy is swapped for a denying implementation.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from versenotes.exceptions import AuthError, StorageError, ValidationError
from versenotes.services.access_policy import AccessPolicy, PermissiveAccessPolicy
from versenotes.services.highlight_service import HighlightService


class DenyAllPolicy(AccessPolicy):
    async def can_list_highlights(self, user_id: int) -> bool:
        return False

    async def can_delete_highlight(self, highlight_id: int) -> bool:
        return False


class TestCreateHighlight:

    def setup_method(self):
        self.service = HighlightService()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "fields",
        [
            {"user_id": None, "verse_ref": "John 3:16", "word": "loved", "note": "n"},
            {"user_id": 0, "verse_ref": "John 3:16", "word": "loved", "note": "n"},
            {"user_id": 1, "verse_ref": "", "word": "loved", "note": "n"},
            {"user_id": 1, "verse_ref": "John 3:16", "word": None, "note": "n"},
            {"user_id": 1, "verse_ref": "John 3:16", "word": "loved", "note": ""},
        ],
    )
    async def test_all_fields_required(self, mock_db_session, fields):
        with pytest.raises(ValidationError, match="All fields are required"):
            await self.service.create_highlight(mock_db_session, **fields)
        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_returns_id(self, mock_db_session):
        def assign_id():
            mock_db_session.add.call_args[0][0].id = 42

        mock_db_session.flush = AsyncMock(side_effect=assign_id)

        result = await self.service.create_highlight(
            mock_db_session, user_id=1, verse_ref="John 3:16", word="loved", note="n"
        )

        assert result.highlight_id == 42
        assert result.message == "Highlight saved"

    @pytest.mark.asyncio
    async def test_storage_failure(self, mock_db_session):
        mock_db_session.flush = AsyncMock(
            side_effect=OperationalError("INSERT", {}, Exception("disk I/O error"))
        )

        with pytest.raises(StorageError, match="Server error saving highlight"):
            await self.service.create_highlight(
                mock_db_session, user_id=1, verse_ref="John 3:16", word="loved", note="n"
            )


class TestDeleteHighlight:

    @pytest.mark.asyncio
    async def test_reports_whether_row_matched(self, mock_db_session):
        service = HighlightService(PermissiveAccessPolicy())

        mock_db_session.execute.return_value = MagicMock(rowcount=1)
        hit = await service.delete_highlight(mock_db_session, 5)

        mock_db_session.execute.return_value = MagicMock(rowcount=0)
        miss = await service.delete_highlight(mock_db_session, 999)

        assert hit.success is True and hit.deleted is True
        assert miss.success is True and miss.deleted is False
        assert miss.message == "Highlight deleted"

    @pytest.mark.asyncio
    async def test_policy_denial(self, mock_db_session):
        service = HighlightService(DenyAllPolicy())

        with pytest.raises(AuthError, match="Not permitted"):
            await service.delete_highlight(mock_db_session, 5)
        mock_db_session.execute.assert_not_awaited()


class TestListHighlights:

    @pytest.mark.asyncio
    async def test_policy_denial(self, mock_db_session):
        service = HighlightService(DenyAllPolicy())

        with pytest.raises(AuthError, match="Not permitted"):
            await service.list_highlights(mock_db_session, 7)
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_storage_failure(self, mock_db_session):
        service = HighlightService()
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("connection reset"))
        )

        with pytest.raises(StorageError, match="Server error fetching highlights"):
            await service.list_highlights(mock_db_session, 7)
