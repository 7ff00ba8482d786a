"""
Comment Repository.

Data access layer for comments. Owns the mapping between Comment
records and rows of the ``comments`` table.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from guestbook.core.utils import utc_now
from guestbook.models.comment import Comment
from guestbook.repositories.base import BaseRepository

RECENT_COMMENTS_LIMIT = 10


class CommentRepository(BaseRepository[Comment]):
    """Repository for the Comment model."""

    model = Comment

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def find_by_id(self, comment_id: int) -> Comment:
        """
        Get a comment by ID.

        Raises:
            NotFoundError: If no row has this ID
        """
        return await self.get_by_id(comment_id)

    async def list_recent(self, limit: int = RECENT_COMMENTS_LIMIT) -> list[Comment]:
        """
        Get the newest comments first.

        Args:
            limit: Maximum number of comments to return

        Returns:
            Up to ``limit`` comments ordered by creation time, newest first
        """
        result = await self.session.execute(
            select(Comment)
            .order_by(Comment.created.desc(), Comment.id.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def insert(self, comment: Comment) -> Comment:
        """
        Insert a comment.

        Stamps ``created`` and ``updated`` with the same instant and
        populates the generated ``id`` on the record.
        """
        now = utc_now()
        comment.created = now
        comment.updated = now
        return await self.add(comment)
