"""Validation result types — field errors and the collection that groups them.

A failed validation is an expected outcome, not an exception: validators
return a ``ValidationErrors`` instance and the caller decides what to do
with it. An empty collection means the candidate passed.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class FieldError:
    """A single rule violation on one field."""

    field: str

    kind: ClassVar[str] = "invalid"

    @property
    def message(self) -> str:
        return "is invalid"

    @property
    def full_message(self) -> str:
        """Human-readable message prefixed with the field name, e.g. ``Title can't be blank``."""
        return f"{self.field.replace('_', ' ').capitalize()} {self.message}"

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "kind": self.kind, "message": self.message}


@dataclass(frozen=True)
class PresenceError(FieldError):
    """The field is missing, empty or whitespace only."""

    kind: ClassVar[str] = "presence"

    @property
    def message(self) -> str:
        return "can't be blank"


@dataclass(frozen=True)
class LengthError(FieldError):
    """The field value is longer than the allowed maximum."""

    maximum: int = 0
    count: int = 0

    kind: ClassVar[str] = "length"

    @property
    def message(self) -> str:
        unit = "character" if self.maximum == 1 else "characters"
        return f"is too long (maximum is {self.maximum} {unit})"


@dataclass(frozen=True)
class UniquenessError(FieldError):
    """Another record already holds an equal (case-folded) value."""

    value: str = ""
    conflicting_id: int | None = None

    kind: ClassVar[str] = "uniqueness"

    @property
    def message(self) -> str:
        return "has already been taken"


class ValidationErrors:
    """Ordered collection of ``FieldError`` objects for one candidate record."""

    def __init__(self, errors: Iterable[FieldError] = ()):
        self._errors: list[FieldError] = list(errors)

    def add(self, error: FieldError) -> None:
        self._errors.append(error)

    def extend(self, errors: Iterable[FieldError]) -> None:
        self._errors.extend(errors)

    @property
    def valid(self) -> bool:
        return not self._errors

    def on(self, field: str) -> list[FieldError]:
        """All errors recorded against ``field``, in evaluation order."""
        return [e for e in self._errors if e.field == field]

    def has(self, field: str, error_type: type[FieldError] | None = None) -> bool:
        errors = self.on(field)
        if error_type is None:
            return bool(errors)
        return any(isinstance(e, error_type) for e in errors)

    def full_messages(self) -> list[str]:
        return [e.full_message for e in self._errors]

    def to_dict(self) -> dict[str, list[str]]:
        """Group messages by field: ``{"title": ["can't be blank"]}``."""
        grouped: dict[str, list[str]] = {}
        for error in self._errors:
            grouped.setdefault(error.field, []).append(error.message)
        return grouped

    def __iter__(self) -> Iterator[FieldError]:
        return iter(self._errors)

    def __len__(self) -> int:
        return len(self._errors)

    def __bool__(self) -> bool:
        return bool(self._errors)

    def __repr__(self) -> str:
        return f"<ValidationErrors({self.full_messages()!r})>"
