"""
Jotter Backend — Note SQLAlchemy Model
========================================

What:  ORM model representing the `notes` table.
How:   Inherits from the shared DeclarativeBase; Alembic reads this for migrations.
Who:   Used by NoteRepository for owner-scoped CRUD.

Table Design:
    - UUID primary key: non-sequential, so ids cannot be enumerated
    - user_id: owning user, fixed at creation; every query filters on it
    - title / content: stored trimmed, never empty
    - updated_at: bumped on every edit; the list endpoint sorts on it

    Composite index on (user_id, updated_at DESC):
        Serves the one list query: "this user's notes, most recently edited first".
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from jotter.database import Base
from jotter.models.user import utcnow

TITLE_MAX_LENGTH = 255


class Note(Base):
    """
    A personal note owned by exactly one user.

    Lifecycle:
        1. Created via POST /notes with owner = caller
        2. Title and content replaced in place via PUT (updated_at bumped)
        3. Removed via DELETE
    """

    __tablename__ = "notes"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    __table_args__ = (
        Index("idx_notes_user_updated_at", "user_id", text("updated_at DESC")),
    )

    def __repr__(self) -> str:
        """Developer-friendly string representation for debugging."""
        return f"<Note(id={self.id}, user_id={self.user_id}, title='{self.title[:20]}')>"
