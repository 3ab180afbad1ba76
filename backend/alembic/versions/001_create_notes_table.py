"""Create notes table

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates the `notes` table: integer autoincrement id, title, content.
Why:   title and content are nullable; a full replace that omits a field
       stores NULL.

Rollback: downgrade() drops the table (destructive: all notes are lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "notes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.Text(), nullable=True),
        sa.Column("content", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )

    # Exact-match lookups by title (GET /api/notes/title/{title})
    op.create_index(
        "idx_notes_title",
        "notes",
        ["title"],
    )


def downgrade() -> None:
    op.drop_index("idx_notes_title", table_name="notes")
    op.drop_table("notes")
