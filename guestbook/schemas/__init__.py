# Pydantic schemas package
from guestbook.schemas.base import ErrorResponse
from guestbook.schemas.comment import CommentCreate, CommentResponse

__all__ = [
    "CommentCreate",
    "CommentResponse",
    "ErrorResponse",
]
