# Field table and constraint checks for comments
from guestbook.validation.fields import (
    COMMENT_FIELDS,
    DEFAULT_COMMENT_NAME,
    Constraint,
    FieldSpec,
)
from guestbook.validation.validator import collect_errors, validate

__all__ = [
    "COMMENT_FIELDS",
    "DEFAULT_COMMENT_NAME",
    "Constraint",
    "FieldSpec",
    "collect_errors",
    "validate",
]
