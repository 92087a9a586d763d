"""
VerseNotes Backend — Highlight Service
========================================

What:  Save, list and delete per-user highlights.
Who:   Called by the /api/highlights route handlers.

Access control:
    Listing and deletion are gated by the injected AccessPolicy. With the
    default PermissiveAccessPolicy any caller may list any user's highlights
    and delete any highlight by id.

Deletion semantics:
    DELETE runs unconditionally. The response is success=true whether or not
    a row matched; `deleted` carries the matched/not-matched distinction.
"""

import logging

from sqlalchemy import delete, desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from versenotes.exceptions import AuthError, StorageError, ValidationError
from versenotes.models import Highlight
from versenotes.schemas.highlight import (
    HighlightCreateResponse,
    HighlightDeleteResponse,
    HighlightItem,
    HighlightListResponse,
)
from versenotes.services.access_policy import AccessPolicy, PermissiveAccessPolicy

logger = logging.getLogger(__name__)


class HighlightService:
    """
    Business logic for highlights.

    Args:
        policy: Access decisions for list/delete. Defaults to permissive.
    """

    def __init__(self, policy: AccessPolicy | None = None):
        self.policy = policy or PermissiveAccessPolicy()

    async def create_highlight(
        self,
        db: AsyncSession,
        user_id: int | None,
        verse_ref: str | None,
        word: str | None,
        note: str | None,
    ) -> HighlightCreateResponse:
        """Insert one highlight; all four fields are required (0 and "" count as missing)."""
        if not user_id or not verse_ref or not word or not note:
            raise ValidationError(
                message="All fields are required",
                fields=["userId", "verseRef", "word", "note"],
            )

        try:
            highlight = Highlight(
                user_id=user_id,
                verse_ref=verse_ref,
                word=word,
                note=note,
            )
            db.add(highlight)
            await db.flush()
        except Exception as e:
            logger.error("Highlight error: %s", str(e))
            raise StorageError(
                message="Server error saving highlight",
                context={"user_id": user_id, "error_type": type(e).__name__},
            )

        return HighlightCreateResponse(message="Highlight saved", highlight_id=highlight.id)

    async def list_highlights(self, db: AsyncSession, user_id: int) -> HighlightListResponse:
        """
        A user's highlights, newest first.

        No existence check on user_id: an unknown user yields an empty list.
        """
        if not await self.policy.can_list_highlights(user_id):
            raise AuthError(message="Not permitted", context={"user_id": user_id})

        query = (
            select(Highlight)
            .where(Highlight.user_id == user_id)
            .order_by(desc(Highlight.created_at), desc(Highlight.id))
        )
        try:
            result = await db.execute(query)
            highlights = result.scalars().all()
        except Exception as e:
            logger.error("Get highlights error: %s", str(e), exc_info=True)
            raise StorageError(
                message="Server error fetching highlights",
                context={"user_id": user_id, "error_type": type(e).__name__},
            )

        return HighlightListResponse(
            highlights=[HighlightItem.model_validate(h) for h in highlights]
        )

    async def delete_highlight(self, db: AsyncSession, highlight_id: int) -> HighlightDeleteResponse:
        """Delete by id. No ownership check beyond the access policy."""
        if not await self.policy.can_delete_highlight(highlight_id):
            raise AuthError(message="Not permitted", context={"highlight_id": highlight_id})

        try:
            result = await db.execute(delete(Highlight).where(Highlight.id == highlight_id))
        except Exception as e:
            logger.error("Delete highlight error: %s", str(e), exc_info=True)
            raise StorageError(
                message="Server error deleting highlight",
                context={"highlight_id": highlight_id, "error_type": type(e).__name__},
            )

        deleted = result.rowcount > 0
        if not deleted:
            logger.info("Delete requested for missing highlight %s", highlight_id)
        return HighlightDeleteResponse(message="Highlight deleted", deleted=deleted)
