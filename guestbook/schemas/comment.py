"""
Comment Schemas.

Pydantic schemas for decoding comment requests and encoding responses.
Constraint checks live in guestbook.validation, not here: decoding only
fixes the shape and types of the body.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from guestbook.validation.fields import DEFAULT_COMMENT_NAME


class CommentCreate(BaseModel):
    """Decoded body of a comment submission. Unknown fields are ignored."""

    name: str | None = Field(
        default=None,
        description="Author name; blank means anonymous",
        examples=["job"],
    )
    text: str | None = Field(
        default=None,
        description="Comment text",
        examples=["hello"],
    )

    model_config = ConfigDict(extra="ignore")

    @property
    def display_name(self) -> str:
        """Name to store, falling back to the anonymous placeholder."""
        return self.name or DEFAULT_COMMENT_NAME


class CommentResponse(BaseModel):
    """Schema for a comment in API responses."""

    id: int = Field(description="Comment identifier")
    name: str = Field(description="Author name")
    text: str = Field(description="Comment text")
    created: datetime = Field(description="Creation timestamp")
    updated: datetime = Field(description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)
