"""
Comment Service.

Business logic layer for comments: validates submissions and drives the
repository. Each call is one linear request/response transaction.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from guestbook.models.comment import Comment
from guestbook.repositories.comment import RECENT_COMMENTS_LIMIT, CommentRepository
from guestbook.schemas.comment import CommentCreate
from guestbook.services.base import BaseService
from guestbook.validation import validate


class CommentService(BaseService):
    """Service for comment retrieval and submission."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = CommentRepository(session)

    async def get_comment(self, comment_id: int) -> Comment:
        """
        Get a comment by ID.

        Raises:
            NotFoundError: If the comment does not exist
            DatabaseError: If the lookup fails
        """
        return await self._execute_db_operation(
            "find_by_id",
            self.repo.find_by_id(comment_id),
        )

    async def list_comments(self) -> list[Comment]:
        """
        List the most recent comments, newest first.

        Raises:
            DatabaseError: If the query fails
        """
        return await self._execute_db_operation(
            "list_recent",
            self.repo.list_recent(limit=RECENT_COMMENTS_LIMIT),
        )

    async def create_comment(self, data: CommentCreate) -> Comment:
        """
        Validate and store a new comment.

        Args:
            data: Decoded submission

        Returns:
            The stored comment with its generated ID

        Raises:
            ValidationError: If the submission violates field constraints
            DatabaseError: If the insert fails
        """
        validate(data)

        comment = await self._execute_db_operation(
            "insert",
            self.repo.insert(Comment(name=data.display_name, text=data.text)),
        )

        self._log_operation("Comment inserted", comment_id=comment.id)
        return comment
