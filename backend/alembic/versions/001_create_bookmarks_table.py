"""Create bookmarks table

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates the `bookmarks` table.
How:   Portable column types only (Integer, Text), so the same revision runs
       on PostgreSQL in production and SQLite in local experiments.

Rollback: downgrade() drops the table (destructive: all bookmarks are lost).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "bookmarks",
        sa.Column(
            "id",
            sa.Integer(),
            autoincrement=True,
            nullable=False,
            comment="Identifier assigned by the database",
        ),
        sa.Column(
            "title",
            sa.Text(),
            nullable=False,
            comment="Display title; may contain client markup, sanitized on output",
        ),
        sa.Column(
            "url",
            sa.Text(),
            nullable=False,
            comment="Absolute http(s) URL, validated on write",
        ),
        # No CHECK constraint: the 0..5 range is a write-time rule
        sa.Column(
            "rating",
            sa.Integer(),
            nullable=False,
            comment="Integer rating between 0 and 5",
        ),
        sa.Column(
            "description",
            sa.Text(),
            nullable=False,
            comment="Free text; may contain client markup, sanitized on output",
        ),
        sa.PrimaryKeyConstraint("id"),
        # SQLite reuses the highest deleted rowid without AUTOINCREMENT
        sqlite_autoincrement=True,
    )


def downgrade() -> None:
    op.drop_table("bookmarks")
