"""
Notes API — Note Service (Business Logic)
===========================================

What:  The six note operations: list, get by id, get by title, create,
       replace (PUT), partial update (PATCH), delete.
Why:   Encapsulates store access and not-found decisions, independent of HTTP.
How:   Each call acquires one pooled connection from the PersistenceGateway,
       runs one parameterized statement (PATCH runs two), and releases the
       connection on the way out, whatever happens.
Who:   Called by route handlers after request validation has passed.

Replace vs Patch:
    PUT   UPDATE notes SET title = :title, content = :content WHERE id = :id
          An omitted field is bound as NULL, so the column is cleared.
    PATCH SELECT ... WHERE id = :id, then
          UPDATE notes SET title = COALESCE(:title, title),
                           content = COALESCE(:content, content) WHERE id = :id
          An omitted field keeps its stored value, column by column.

Error Handling Strategy:
    NotFoundError and ServiceUnavailableError propagate as-is. Any other
    failure is logged and wrapped in DatabaseError (hides internal details).
"""

import logging
import re
from typing import List, Optional, Union

from sqlalchemy import Text, delete, func, insert, literal, select, update

from notes_api.database import PersistenceGateway
from notes_api.exceptions import DatabaseError, NotesAPIError, NotFoundError
from notes_api.models.note import NOTE_ID_MAX, NOTE_ID_MIN, Note
from notes_api.schemas.note import (
    MessageResponse,
    NoteCreate,
    NoteCreatedResponse,
    NoteResponse,
    NoteUpdate,
)

logger = logging.getLogger(__name__)

_INTEGER_ID = re.compile(r"[+-]?[0-9]+")


def _store_id(note_id: Union[int, str]) -> int:
    """
    Convert a note id to a value the id column can hold.

    A string that is not a plain signed integer, or an integer outside the
    column's range, cannot match any row and raises NotFoundError before the
    store sees it.
    """
    if isinstance(note_id, str):
        if not _INTEGER_ID.fullmatch(note_id):
            raise NotFoundError(context={"note_id": note_id})
        note_id = int(note_id)
    if not NOTE_ID_MIN <= note_id <= NOTE_ID_MAX:
        raise NotFoundError(context={"note_id": note_id})
    return note_id


def _coalesce(value: Optional[str], column):
    """COALESCE(:value, column) with the bind typed as TEXT."""
    return func.coalesce(literal(value, Text), column)


class NoteService:
    """
    Business logic layer for note operations.

    Stateless: the gateway is passed into every call.
    """

    async def list_notes(self, gateway: PersistenceGateway) -> List[NoteResponse]:
        """
        Return every note in store-default order. An empty store is not an error.
        """
        try:
            async with gateway.acquire() as conn:
                result = await conn.query(select(Note))
        except NotesAPIError:
            raise
        except Exception as e:
            logger.error("Database error listing notes: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Error retrieving notes",
                context={"error_type": type(e).__name__},
            )

        return [NoteResponse.model_validate(row) for row in result.rows]

    async def get_note(self, gateway: PersistenceGateway, note_id: str) -> NoteResponse:
        """
        Retrieve a single note by id.

        The id arrives unvalidated. A value that is not an integer cannot
        match any row, so it is reported as not found without a store
        round-trip, keeping the response at 404 rather than 400.

        Raises:
            NotFoundError: No row matches (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        numeric_id = _store_id(note_id)

        try:
            async with gateway.acquire() as conn:
                result = await conn.query(select(Note).where(Note.id == numeric_id))
        except NotesAPIError:
            raise
        except Exception as e:
            logger.error("Database error fetching note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Error retrieving note",
                context={"note_id": note_id},
            )

        if not result.rows:
            raise NotFoundError(context={"note_id": note_id})
        return NoteResponse.model_validate(result.rows[0])

    async def get_notes_by_title(
        self, gateway: PersistenceGateway, title: str
    ) -> List[NoteResponse]:
        """
        Return all notes whose stored title equals `title` exactly.

        Stored titles are escaped, so a raw `<b>` only matches `&lt;b&gt;`
        when the client sends the escaped form.

        Raises:
            NotFoundError: Zero matches (unlike list_notes, which returns [])
        """
        try:
            async with gateway.acquire() as conn:
                result = await conn.query(select(Note).where(Note.title == title))
        except NotesAPIError:
            raise
        except Exception as e:
            logger.error("Database error fetching notes by title: %s", str(e))
            raise DatabaseError(
                message="Error retrieving notes",
                context={"error_type": type(e).__name__},
            )

        if not result.rows:
            raise NotFoundError(
                message="No notes found with the given title",
                context={"title": title},
            )
        return [NoteResponse.model_validate(row) for row in result.rows]

    async def create_note(
        self, gateway: PersistenceGateway, payload: NoteCreate
    ) -> NoteCreatedResponse:
        """
        Insert a note. `payload` is already trimmed and escaped.

        Returns:
            NoteCreatedResponse carrying the store-assigned id
        """
        try:
            async with gateway.acquire() as conn:
                result = await conn.query(
                    insert(Note).values(title=payload.title, content=payload.content)
                )
        except NotesAPIError:
            raise
        except Exception as e:
            logger.error("Database error adding note: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Error adding note",
                context={"error_type": type(e).__name__},
            )

        logger.info("Note %s created", result.insert_id)
        return NoteCreatedResponse(note_id=result.insert_id)

    async def replace_note(
        self, gateway: PersistenceGateway, note_id: Union[int, str], payload: NoteUpdate
    ) -> MessageResponse:
        """
        Full update: both columns take the supplied values, None included.

        Raises:
            NotFoundError: Zero rows affected
        """
        note_id = _store_id(note_id)
        statement = (
            update(Note)
            .where(Note.id == note_id)
            .values(title=payload.title, content=payload.content)
        )
        try:
            async with gateway.acquire() as conn:
                result = await conn.query(statement)
        except NotesAPIError:
            raise
        except Exception as e:
            logger.error("Database error updating note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Error updating note",
                context={"note_id": note_id},
            )

        if result.affected_rows == 0:
            raise NotFoundError(context={"note_id": note_id})
        logger.info("Note %s replaced", note_id)
        return MessageResponse(message="Note updated successfully")

    async def patch_note(
        self, gateway: PersistenceGateway, note_id: Union[int, str], payload: NoteUpdate
    ) -> MessageResponse:
        """
        Partial update: each supplied column changes, each omitted one stays.

        Checks existence first and stops with NotFoundError before any write.
        The read and the write are separate statements on the same connection
        with no transaction around them; if the write fails the error is
        reported as DatabaseError.
        """
        note_id = _store_id(note_id)
        try:
            async with gateway.acquire() as conn:
                existing = await conn.query(select(Note.id).where(Note.id == note_id))
                if not existing.rows:
                    raise NotFoundError(context={"note_id": note_id})

                await conn.query(
                    update(Note)
                    .where(Note.id == note_id)
                    .values(
                        title=_coalesce(payload.title, Note.title),
                        content=_coalesce(payload.content, Note.content),
                    )
                )
        except NotesAPIError:
            raise
        except Exception as e:
            logger.error("Database error patching note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Error updating note",
                context={"note_id": note_id},
            )

        logger.info("Note %s patched", note_id)
        return MessageResponse(message="Note updated successfully")

    async def delete_note(
        self, gateway: PersistenceGateway, note_id: Union[int, str]
    ) -> MessageResponse:
        """
        Raises:
            NotFoundError: Zero rows affected (already deleted or never existed)
        """
        note_id = _store_id(note_id)
        try:
            async with gateway.acquire() as conn:
                result = await conn.query(delete(Note).where(Note.id == note_id))
        except NotesAPIError:
            raise
        except Exception as e:
            logger.error("Database error deleting note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Error deleting note",
                context={"note_id": note_id},
            )

        if result.affected_rows == 0:
            raise NotFoundError(context={"note_id": note_id})
        logger.info("Note %s deleted", note_id)
        return MessageResponse(message="Note deleted successfully")


# ── Singleton Instance ────────────────────────────────────────────────────
note_service = NoteService()
