"""
VerseNotes Backend — Highlight SQLAlchemy Model
=================================================

What:  ORM model representing the `highlights` table.
Who:   Used by HighlightService (create, list per user, delete by id).

Table Design Rationale:
    - verse_ref: free-form location string (e.g. "John 3:16"); not parsed
    - word: the highlighted word or phrase
    - note: free text attached to the highlight
    - Highlights belong to a user, NOT to a post

Query Patterns:
    - List a user's highlights, newest first:
      SELECT * FROM highlights WHERE user_id = :uid ORDER BY created_at DESC
      → idx_highlights_user_created covers both the filter and the sort
    - Delete by primary key
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from versenotes.database import Base

if TYPE_CHECKING:
    from versenotes.models.user import User


class Highlight(Base):
    """
    A word or phrase a user highlighted at a verse reference, with a note.

    Lifecycle:
        Created by POST /api/highlights, removed by DELETE /api/highlights/{id}.
        Never updated.
    """

    __tablename__ = "highlights"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    verse_ref: Mapped[str] = mapped_column(String(255), nullable=False)
    word: Mapped[str] = mapped_column(String(255), nullable=False)
    note: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    user: Mapped["User"] = relationship(back_populates="highlights")

    __table_args__ = (
        Index("idx_highlights_user_created", user_id, created_at.desc()),
    )

    def __repr__(self) -> str:
        return (
            f"<Highlight(id={self.id}, user_id={self.user_id}, "
            f"verse_ref='{self.verse_ref}')>"
        )
