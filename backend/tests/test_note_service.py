"""
Notes API — Note Service Unit Tests
=====================================

What:  Tests for NoteService decision logic with the store mocked out.
How:   `mock_gateway` yields `mock_connection`, whose `query` is an AsyncMock
       returning QueryResult objects or raising.

What we test:
    ✅ Not-found mapping for each single-note operation
    ✅ Store failures wrapped in DatabaseError, connection still released
    ✅ Pool exhaustion propagates as ServiceUnavailableError
    ✅ Patch stops after the existence check when the note is missing
    ✅ Non-integer id on get never reaches the store
    ✅ Out-of-range ids are not found without a store round-trip
"""

import pytest
from sqlalchemy.exc import OperationalError

from notes_api.database import QueryResult
from notes_api.exceptions import DatabaseError, NotFoundError, ServiceUnavailableError
from notes_api.schemas.note import NoteCreate, NoteUpdate
from notes_api.services.note_service import NoteService


def _store_failure():
    return OperationalError("SELECT ...", {}, Exception("connection lost"))


class TestNoteServiceRead:

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_list_notes_empty(self, mock_gateway, mock_connection):
        mock_connection.query.return_value = QueryResult(rows=[])

        result = await self.service.list_notes(mock_gateway)

        assert result == []
        assert mock_gateway.released == 1

    @pytest.mark.asyncio
    async def test_get_note_found(self, mock_gateway, mock_connection, sample_note_row):
        mock_connection.query.return_value = QueryResult(rows=[sample_note_row])

        result = await self.service.get_note(mock_gateway, "7")

        assert result.id == 7
        assert result.title == "Groceries"
        assert result.content == "milk, eggs"

    @pytest.mark.asyncio
    async def test_get_note_not_found(self, mock_gateway, mock_connection):
        mock_connection.query.return_value = QueryResult(rows=[])

        with pytest.raises(NotFoundError, match="Note not found"):
            await self.service.get_note(mock_gateway, "999999")

    @pytest.mark.asyncio
    async def test_get_note_non_integer_skips_store(self, mock_gateway, mock_connection):
        with pytest.raises(NotFoundError):
            await self.service.get_note(mock_gateway, "abc")

        mock_connection.query.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("note_id", ["1_0", " 7", "7.0", "2147483648"])
    async def test_get_note_unmatchable_id_skips_store(
        self, mock_gateway, mock_connection, note_id
    ):
        with pytest.raises(NotFoundError):
            await self.service.get_note(mock_gateway, note_id)

        mock_connection.query.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_get_by_title_empty_is_not_found(self, mock_gateway, mock_connection):
        mock_connection.query.return_value = QueryResult(rows=[])

        with pytest.raises(NotFoundError, match="No notes found with the given title"):
            await self.service.get_notes_by_title(mock_gateway, "missing")

    @pytest.mark.asyncio
    async def test_store_failure_becomes_database_error(self, mock_gateway, mock_connection):
        mock_connection.query.side_effect = _store_failure()

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.list_notes(mock_gateway)

        # No driver detail in the client-facing message
        assert "connection lost" not in exc_info.value.message
        assert mock_gateway.released == 1

    @pytest.mark.asyncio
    async def test_pool_exhaustion_propagates(self, mock_gateway):
        def exhausted():
            raise ServiceUnavailableError(retry_after=3)

        mock_gateway.acquire = exhausted

        with pytest.raises(ServiceUnavailableError):
            await self.service.list_notes(mock_gateway)


class TestNoteServiceWrite:

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_create_returns_insert_id(self, mock_gateway, mock_connection):
        mock_connection.query.return_value = QueryResult(affected_rows=1, insert_id=42)

        result = await self.service.create_note(
            mock_gateway, NoteCreate(title="t", content="c")
        )

        assert result.note_id == 42
        assert result.model_dump(by_alias=True) == {
            "message": "Note added successfully",
            "noteId": 42,
        }

    @pytest.mark.asyncio
    async def test_create_store_failure(self, mock_gateway, mock_connection):
        mock_connection.query.side_effect = _store_failure()

        with pytest.raises(DatabaseError, match="Error adding note"):
            await self.service.create_note(mock_gateway, NoteCreate(title="t", content="c"))

    @pytest.mark.asyncio
    async def test_replace_zero_rows_is_not_found(self, mock_gateway, mock_connection):
        mock_connection.query.return_value = QueryResult(affected_rows=0)

        with pytest.raises(NotFoundError):
            await self.service.replace_note(mock_gateway, 5, NoteUpdate(title="A"))

    @pytest.mark.asyncio
    async def test_replace_binds_omitted_field_as_null(self, mock_gateway, mock_connection):
        mock_connection.query.return_value = QueryResult(affected_rows=1)

        await self.service.replace_note(mock_gateway, 5, NoteUpdate(title="A"))

        statement = mock_connection.query.await_args.args[0]
        params = statement.compile().params
        assert params["title"] == "A"
        assert params["content"] is None

    @pytest.mark.asyncio
    async def test_patch_missing_note_stops_before_update(
        self, mock_gateway, mock_connection
    ):
        mock_connection.query.return_value = QueryResult(rows=[])

        with pytest.raises(NotFoundError):
            await self.service.patch_note(mock_gateway, 5, NoteUpdate(title="B"))

        assert mock_connection.query.await_count == 1
        assert mock_gateway.released == 1

    @pytest.mark.asyncio
    async def test_patch_runs_check_then_update(self, mock_gateway, mock_connection):
        mock_connection.query.side_effect = [
            QueryResult(rows=[{"id": 5}], affected_rows=1),
            QueryResult(affected_rows=1),
        ]

        result = await self.service.patch_note(mock_gateway, 5, NoteUpdate(title="B"))

        assert result.message == "Note updated successfully"
        update_statement = mock_connection.query.await_args_list[1].args[0]
        assert "coalesce" in str(update_statement).lower()

    @pytest.mark.asyncio
    async def test_patch_update_failure_after_check(self, mock_gateway, mock_connection):
        mock_connection.query.side_effect = [
            QueryResult(rows=[{"id": 5}], affected_rows=1),
            _store_failure(),
        ]

        with pytest.raises(DatabaseError, match="Error updating note"):
            await self.service.patch_note(mock_gateway, 5, NoteUpdate(content="x"))

        assert mock_gateway.released == 1

    @pytest.mark.asyncio
    async def test_delete_zero_rows_is_not_found(self, mock_gateway, mock_connection):
        mock_connection.query.return_value = QueryResult(affected_rows=0)

        with pytest.raises(NotFoundError):
            await self.service.delete_note(mock_gateway, 5)

    @pytest.mark.asyncio
    async def test_delete_success(self, mock_gateway, mock_connection):
        mock_connection.query.return_value = QueryResult(affected_rows=1)

        result = await self.service.delete_note(mock_gateway, 5)

        assert result.message == "Note deleted successfully"

    @pytest.mark.asyncio
    async def test_out_of_range_id_skips_store(self, mock_gateway, mock_connection):
        huge = "99999999999999999999999"

        with pytest.raises(NotFoundError):
            await self.service.replace_note(mock_gateway, huge, NoteUpdate(title="A"))
        with pytest.raises(NotFoundError):
            await self.service.patch_note(mock_gateway, 2 ** 31, NoteUpdate(title="A"))
        with pytest.raises(NotFoundError):
            await self.service.delete_note(mock_gateway, huge)

        mock_connection.query.assert_not_awaited()
        assert mock_gateway.released == 0

    @pytest.mark.asyncio
    async def test_signed_string_id_is_converted(self, mock_gateway, mock_connection):
        mock_connection.query.return_value = QueryResult(affected_rows=1)

        await self.service.delete_note(mock_gateway, "+5")

        statement = mock_connection.query.await_args.args[0]
        assert 5 in statement.compile().params.values()
