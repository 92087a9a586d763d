"""
VerseNotes Backend — Post Route Handlers
==========================================

What:  POST /api/posts (create) and GET /api/posts (full feed).
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from versenotes.database import get_db_session
from versenotes.dependencies import get_post_service
from versenotes.schemas.post import PostCreateRequest, PostCreateResponse, PostListResponse
from versenotes.services.post_service import PostService

router = APIRouter(prefix="/api", tags=["Posts"])


@router.post(
    "/posts",
    response_model=PostCreateResponse,
    summary="Publish a post",
)
async def create_post(
    payload: PostCreateRequest,
    db: AsyncSession = Depends(get_db_session),
    posts: PostService = Depends(get_post_service),
) -> PostCreateResponse:
    return await posts.create_post(db=db, content=payload.content, user_id=payload.user_id)


@router.get(
    "/posts",
    response_model=PostListResponse,
    summary="List all posts, newest first",
    description="Every post with its author's email. Not paginated.",
)
async def list_posts(
    db: AsyncSession = Depends(get_db_session),
    posts: PostService = Depends(get_post_service),
) -> PostListResponse:
    return await posts.list_posts(db=db)
