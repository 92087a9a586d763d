"""
VerseNotes Backend — Highlight Route Handlers
===============================================

What:  Save, list and delete highlights.

Path parameters:
    GET uses /api/highlights/{user_id}; DELETE uses /api/highlights/{highlight_id}.
    They share a path shape but not a method, so there is no ambiguity.
    Both are declared as int; a non-integer segment is reported through the
    request-validation handler as success=false.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from versenotes.database import get_db_session
from versenotes.dependencies import get_highlight_service
from versenotes.schemas.highlight import (
    HighlightCreateRequest,
    HighlightCreateResponse,
    HighlightDeleteResponse,
    HighlightListResponse,
)
from versenotes.services.highlight_service import HighlightService

router = APIRouter(prefix="/api", tags=["Highlights"])


@router.post(
    "/highlights",
    response_model=HighlightCreateResponse,
    summary="Save a highlight",
)
async def create_highlight(
    payload: HighlightCreateRequest,
    db: AsyncSession = Depends(get_db_session),
    highlights: HighlightService = Depends(get_highlight_service),
) -> HighlightCreateResponse:
    return await highlights.create_highlight(
        db=db,
        user_id=payload.user_id,
        verse_ref=payload.verse_ref,
        word=payload.word,
        note=payload.note,
    )


@router.get(
    "/highlights/{user_id}",
    response_model=HighlightListResponse,
    summary="List a user's highlights, newest first",
)
async def list_highlights(
    user_id: int,
    db: AsyncSession = Depends(get_db_session),
    highlights: HighlightService = Depends(get_highlight_service),
) -> HighlightListResponse:
    """An unknown user_id returns an empty list, not an error."""
    return await highlights.list_highlights(db=db, user_id=user_id)


@router.delete(
    "/highlights/{highlight_id}",
    response_model=HighlightDeleteResponse,
    summary="Delete a highlight by id",
)
async def delete_highlight(
    highlight_id: int,
    db: AsyncSession = Depends(get_db_session),
    highlights: HighlightService = Depends(get_highlight_service),
) -> HighlightDeleteResponse:
    """
    Always success=true when the statement runs; check `deleted` to learn
    whether the id existed.
    """
    return await highlights.delete_highlight(db=db, highlight_id=highlight_id)
