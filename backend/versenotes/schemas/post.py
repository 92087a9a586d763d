"""
VerseNotes Backend — Post Schemas
===================================

What:  Request/response bodies for POST /api/posts and GET /api/posts.

userId is "integer-like": pydantic's lax mode accepts 7 and "7" alike, and
"" is read as absent. Anything else that is not an integer is reported
through the request-validation handler in main.py.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from versenotes.schemas.common import ApiResponse, blank_to_none


class PostCreateRequest(BaseModel):
    content: Optional[str] = Field(default=None, description="Post text")
    user_id: Optional[int] = Field(default=None, alias="userId", description="Author id")

    model_config = {"populate_by_name": True}

    @field_validator("user_id", mode="before")
    @classmethod
    def empty_user_id_is_missing(cls, v):
        return blank_to_none(v)


class PostCreateResponse(ApiResponse):
    message: str = Field(default="Post created successfully")
    post_id: int = Field(alias="postId")
    created_at: datetime = Field(alias="createdAt")


class PostItem(BaseModel):
    """One row of the post feed: the post plus its author's email."""
    id: int
    content: str
    email: str
    created_at: datetime

    model_config = {"from_attributes": True}


class PostListResponse(ApiResponse):
    posts: List[PostItem] = Field(description="All posts, newest first")
