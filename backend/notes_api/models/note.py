"""
Notes API — Note SQLAlchemy Model
===================================

What:  ORM model representing the `notes` table.
Why:   Statements are built from the mapped table, so every value reaches the
       store as a bound parameter.
Who:   Used by NoteService to build statements and by Alembic for schema management.

Table Design:
    - id: Integer autoincrement primary key, assigned by the store on insert
      (32-bit: NOTE_ID_MIN..NOTE_ID_MAX)
    - title / content: TEXT, nullable. A full replace (PUT) that omits a field
      stores NULL in that column, so NOT NULL cannot be enforced here.
"""

from typing import Optional

from sqlalchemy import Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from notes_api.database import Base

# Range of the INTEGER id column
NOTE_ID_MIN = -(2 ** 31)
NOTE_ID_MAX = 2 ** 31 - 1


class Note(Base):
    """
    A single note.

    Lifecycle:
        1. Created by POST /api/notes (store assigns id)
        2. Replaced by PUT (omitted fields become NULL)
           or patched by PATCH (omitted fields keep their value)
        3. Removed by DELETE; no soft-delete
    """

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    # Stored already trimmed and HTML-escaped
    title: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    content: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Exact-match lookups by title
    __table_args__ = (
        Index("idx_notes_title", "title"),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r})>"
