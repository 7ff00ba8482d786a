"""
Localized Validation Messages.

Lookup table from constraint kind to a Japanese message template.
Templates receive ``field`` (display name) and ``param`` (constraint limit).
"""

from guestbook.validation.fields import MAX, REQUIRED, Constraint, FieldSpec

MESSAGE_TEMPLATES: dict[str, str] = {
    REQUIRED: "{field}は必須フィールドです",
    MAX: "{field}の長さは最大でも{param}文字でなければなりません",
}

MESSAGE_SEPARATOR = ", "


def render_message(spec: FieldSpec, constraint: Constraint) -> str:
    """Render the message for a violated constraint on a field."""
    template = MESSAGE_TEMPLATES[constraint.kind]
    return template.format(field=spec.label, param=constraint.param)
