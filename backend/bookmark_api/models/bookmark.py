"""
Bookmarks API — Bookmark SQLAlchemy Model
==========================================

What:  ORM model representing the `bookmarks` table.
Why:   Maps Python objects to database rows for type-safe database operations.
How:   Inherits from the shared DeclarativeBase; Alembic reads this for migrations.
Who:   Used by the SQLAlchemy repository and by Alembic.

Table Design:
    - Integer primary key: assigned by the database, never reused or mutated
    - title / url / description: TEXT, no artificial length limits
    - rating: INTEGER; the 0..5 range is enforced at write time by the
      validation layer, not by a CHECK constraint, so rows imported before a
      rule change remain readable
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from bookmark_api.database import Base


class Bookmark(Base):
    """
    A saved link with a title, a 0-5 rating and a free-text description.

    Lifecycle:
        1. Inserted with all four fields populated
        2. Partially updated any number of times (id never changes)
        3. Hard-deleted; the id is not handed out again
    """

    __tablename__ = "bookmarks"
    # SQLite reuses the highest deleted rowid without AUTOINCREMENT
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Identifier assigned by the database",
    )

    title: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Display title; may contain client markup, sanitized on output",
    )

    url: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Absolute http(s) URL, validated on write",
    )

    rating: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Integer rating between 0 and 5",
    )

    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Free text; may contain client markup, sanitized on output",
    )

    def __repr__(self) -> str:
        return f"<Bookmark(id={self.id}, title='{self.title}', rating={self.rating})>"
