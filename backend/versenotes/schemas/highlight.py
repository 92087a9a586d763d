"""
VerseNotes Backend — Highlight Schemas
========================================

What:  Request/response bodies for the /api/highlights endpoints.

Field naming:
    Request bodies use camelCase (userId, verseRef) as sent by the web client.
    Listed highlights are returned with their column names (user_id,
    verse_ref, created_at), exactly as stored.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from versenotes.schemas.common import ApiResponse, blank_to_none


class HighlightCreateRequest(BaseModel):
    user_id: Optional[int] = Field(default=None, alias="userId")
    verse_ref: Optional[str] = Field(
        default=None, alias="verseRef", description="Verse/location reference, e.g. 'John 3:16'"
    )
    word: Optional[str] = Field(default=None, description="Highlighted word or phrase")
    note: Optional[str] = Field(default=None, description="Free-text note")

    model_config = {"populate_by_name": True}

    @field_validator("user_id", mode="before")
    @classmethod
    def empty_user_id_is_missing(cls, v):
        return blank_to_none(v)


class HighlightCreateResponse(ApiResponse):
    message: str = Field(default="Highlight saved")
    highlight_id: int = Field(alias="highlightId")


class HighlightItem(BaseModel):
    id: int
    user_id: int
    verse_ref: str
    word: str
    note: str
    created_at: datetime

    model_config = {"from_attributes": True}


class HighlightListResponse(ApiResponse):
    highlights: List[HighlightItem] = Field(description="The user's highlights, newest first")


class HighlightDeleteResponse(ApiResponse):
    """
    Deletion always reports success when the statement ran.

    `deleted` tells the caller whether a row actually matched; deleting an
    id that does not exist yields success=true, deleted=false.
    """
    message: str = Field(default="Highlight deleted")
    deleted: bool = Field(description="Whether a highlight with that id existed")
