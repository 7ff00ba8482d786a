"""
Comment Field Table.

Explicit per-field mapping shared by the validation layer and the
persistence model:

    field name -> column name, constraints, default, display name,
                  storage length

Validation reads ``constraints`` and ``display_name``; the SQLAlchemy model
reads ``column``, ``storage_length`` and ``default``.
"""

from dataclasses import dataclass, field

REQUIRED = "required"
MAX = "max"


@dataclass(frozen=True)
class Constraint:
    """A single declared rule: ``required`` or ``max`` with its limit."""

    kind: str
    param: int | None = None

    def __post_init__(self) -> None:
        if self.kind not in (REQUIRED, MAX):
            raise ValueError(f"Unknown constraint kind: {self.kind}")
        if self.kind == MAX and self.param is None:
            raise ValueError("max constraint needs a limit")


@dataclass(frozen=True)
class FieldSpec:
    """How one Comment field is validated, labelled and stored."""

    name: str
    column: str
    display_name: str | None = None
    storage_length: int | None = None
    default: str | None = None
    constraints: tuple[Constraint, ...] = field(default_factory=tuple)

    @property
    def label(self) -> str:
        """Name used in validation messages."""
        return self.display_name or self.name


DEFAULT_COMMENT_NAME = "名無し"

COMMENT_FIELDS: dict[str, FieldSpec] = {
    "id": FieldSpec(name="id", column="id"),
    "name": FieldSpec(
        name="name",
        column="name",
        display_name="お名前",
        storage_length=200,
        default=DEFAULT_COMMENT_NAME,
    ),
    # max=20 is the client-facing limit; storage allows 399
    "text": FieldSpec(
        name="text",
        column="text",
        display_name="コメント",
        storage_length=399,
        constraints=(Constraint(REQUIRED), Constraint(MAX, 20)),
    ),
    "created": FieldSpec(name="created", column="created"),
    "updated": FieldSpec(name="updated", column="updated"),
}
