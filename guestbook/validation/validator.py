"""
Field Validator.

Checks a candidate record against the constraints declared in the field
table. Pure: reads values, never touches persistence.
"""

from collections.abc import Mapping
from typing import Any

from guestbook.core.exceptions import ValidationError
from guestbook.validation.fields import COMMENT_FIELDS, MAX, REQUIRED, Constraint, FieldSpec
from guestbook.validation.messages import MESSAGE_SEPARATOR, render_message


def _field_value(candidate: Any, name: str) -> Any:
    if isinstance(candidate, Mapping):
        return candidate.get(name)
    return getattr(candidate, name, None)


def _violates(constraint: Constraint, value: Any) -> bool:
    if constraint.kind == REQUIRED:
        return value is None or value == ""
    if constraint.kind == MAX:
        return value is not None and len(value) > constraint.param
    return False


def collect_errors(
    candidate: Any,
    fields: Mapping[str, FieldSpec] = COMMENT_FIELDS,
) -> list[str]:
    """
    Collect one message per field whose constraints are violated.

    Constraints are checked in declared order and the first violation
    wins, so a missing required value does not also report its length.

    Args:
        candidate: Mapping or object exposing the field values
        fields: Field table to validate against

    Returns:
        Messages in field table order, empty when the candidate is valid
    """
    messages = []
    for spec in fields.values():
        value = _field_value(candidate, spec.name)
        for constraint in spec.constraints:
            if _violates(constraint, value):
                messages.append(render_message(spec, constraint))
                break
    return messages


def validate(
    candidate: Any,
    fields: Mapping[str, FieldSpec] = COMMENT_FIELDS,
) -> None:
    """
    Validate a candidate record.

    Raises:
        ValidationError: With all messages joined by ", "
    """
    messages = collect_errors(candidate, fields)
    if messages:
        raise ValidationError(MESSAGE_SEPARATOR.join(messages))
