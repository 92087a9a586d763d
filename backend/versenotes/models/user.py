"""
VerseNotes Backend — User SQLAlchemy Model
============================================

What:  ORM model representing the `users` table.
Who:   Used by UserService for signup/login and as the parent of posts and
       highlights.

Table Design Rationale:
    - Integer autoincrement primary key: ids are handed to clients as userId
    - email: UNIQUE at the storage layer; this constraint, not the pre-insert
      lookup, is what guarantees uniqueness under concurrent signups
    - password: bcrypt hash (60 chars), never the plaintext
    - created_at: assigned on insert
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING, List

from sqlalchemy import DateTime, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from versenotes.database import Base

if TYPE_CHECKING:
    from versenotes.models.highlight import Highlight
    from versenotes.models.post import Post


class User(Base):
    """
    A registered account.

    Lifecycle:
        Created by POST /api/signup. Never updated or deleted through the API;
        deleting a row directly in the database cascades to posts/highlights.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)

    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="bcrypt hash of the user's password",
    )

    # Python-side default gives microsecond precision on every backend;
    # server_default covers rows inserted outside the application
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    # passive_deletes: let the database's ON DELETE CASCADE do the work
    posts: Mapped[List["Post"]] = relationship(
        back_populates="user", passive_deletes=True
    )
    highlights: Mapped[List["Highlight"]] = relationship(
        back_populates="user", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
