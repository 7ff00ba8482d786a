"""
Comment Model.

Database model for guestbook comments. Column names, lengths and the
name default come from the shared field table.
"""

from sqlalchemy import CheckConstraint, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from guestbook.models.base import Base, TimestampMixin
from guestbook.validation.fields import COMMENT_FIELDS

_ID = COMMENT_FIELDS["id"]
_NAME = COMMENT_FIELDS["name"]
_TEXT = COMMENT_FIELDS["text"]


class Comment(TimestampMixin, Base):
    """
    Comment database model.

    Storage constraints back up request validation: every row has a
    non-empty text of at most 399 characters and a name of at most 200.
    """

    __tablename__ = "comments"
    __table_args__ = (
        CheckConstraint(
            f'length("{_NAME.column}") <= {_NAME.storage_length}',
            name="ck_comments_name_length",
        ),
        CheckConstraint(
            f'length("{_TEXT.column}") BETWEEN 1 AND {_TEXT.storage_length}',
            name="ck_comments_text_length",
        ),
    )

    id: Mapped[int] = mapped_column(
        _ID.column,
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    name: Mapped[str] = mapped_column(
        _NAME.column,
        String(_NAME.storage_length),
        nullable=False,
        default=_NAME.default,
        server_default=_NAME.default,
    )
    text: Mapped[str] = mapped_column(
        _TEXT.column,
        String(_TEXT.storage_length),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Comment(id={self.id}, name={self.name!r})>"
