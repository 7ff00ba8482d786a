"""
FastAPI Dependencies.

Shared dependencies for request handling.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from guestbook.core.database import get_db_session
from guestbook.services.comment import CommentService

# Type alias for database session dependency
DbSession = Annotated[AsyncSession, Depends(get_db_session)]


def get_comment_service(db: DbSession) -> CommentService:
    """Build a CommentService bound to the request's session."""
    return CommentService(db)


CommentServiceDep = Annotated[CommentService, Depends(get_comment_service)]
