"""
Base Schemas.

Response shapes shared by all endpoints.
"""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Validation failure body: ``{"error": "<combined message>"}``."""

    error: str
