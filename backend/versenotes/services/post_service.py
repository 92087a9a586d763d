"""
VerseNotes Backend — Post Service
===================================

What:  Create posts and list the full post feed.
Who:   Called by the /api/posts route handlers.

Feed query:
    SELECT p.id, p.content, u.email, p.created_at
    FROM posts p JOIN users u ON p.user_id = u.id
    ORDER BY p.created_at DESC, p.id DESC

    No pagination: every call returns every post.
"""

import logging

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from versenotes.exceptions import StorageError, ValidationError
from versenotes.models import Post, User
from versenotes.schemas.post import PostCreateResponse, PostItem, PostListResponse

logger = logging.getLogger(__name__)


class PostService:
    """Stateless; receives the request's session on every call."""

    async def create_post(
        self,
        db: AsyncSession,
        content: str | None,
        user_id: int | None,
    ) -> PostCreateResponse:
        """
        Insert one post for `user_id`.

        Empty content and a user_id of 0 count as missing. A nonexistent
        user_id violates the foreign key and is reported as a generic
        StorageError, not as "user not found".
        """
        if not content or not user_id:
            raise ValidationError(
                message="Content and userId are required",
                fields=["content", "userId"],
            )

        try:
            post = Post(user_id=user_id, content=content)
            db.add(post)
            await db.flush()
        except Exception as e:
            logger.error("Post error: %s", str(e))
            raise StorageError(
                message="Server error creating post",
                context={"user_id": user_id, "error_type": type(e).__name__},
            )

        logger.info("Post %s created by user %s", post.id, user_id)
        return PostCreateResponse(
            message="Post created successfully",
            post_id=post.id,
            created_at=post.created_at,
        )

    async def list_posts(self, db: AsyncSession) -> PostListResponse:
        """All posts joined with their author's email, newest first."""
        query = (
            select(Post.id, Post.content, User.email, Post.created_at)
            .join(User, Post.user_id == User.id)
            .order_by(desc(Post.created_at), desc(Post.id))
        )
        try:
            result = await db.execute(query)
            rows = result.all()
        except Exception as e:
            logger.error("Get posts error: %s", str(e), exc_info=True)
            raise StorageError(
                message="Server error fetching posts",
                context={"error_type": type(e).__name__},
            )

        return PostListResponse(posts=[PostItem.model_validate(row) for row in rows])
