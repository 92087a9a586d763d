"""
VerseNotes Backend — Post SQLAlchemy Model
============================================

What:  ORM model representing the `posts` table.
Who:   Used by PostService (create, list-with-author).

Query Patterns:
    - List all posts with author email, newest first:
      SELECT p.id, p.content, u.email, p.created_at
      FROM posts p JOIN users u ON p.user_id = u.id
      ORDER BY p.created_at DESC
      → idx_posts_created_at avoids a sort on every listing
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, Integer, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from versenotes.database import Base

if TYPE_CHECKING:
    from versenotes.models.user import User


class Post(Base):
    """A piece of text content published by a user. Immutable once created."""

    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Many posts → one user; deleting the user deletes their posts
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    content: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    user: Mapped["User"] = relationship(back_populates="posts")

    __table_args__ = (
        Index("idx_posts_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, user_id={self.user_id}, created_at='{self.created_at}')>"
