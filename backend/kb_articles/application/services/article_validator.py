"""Field-level validation for Article candidates prior to persistence."""

import logging
from collections.abc import Callable

from kb_articles.application.interfaces import ArticleRepository
from kb_articles.domain.entities import Article, TITLE_MAX_LENGTH
from kb_articles.domain.validation import (
    FieldError,
    LengthError,
    PresenceError,
    UniquenessError,
    ValidationErrors,
)

logger = logging.getLogger(__name__)

FieldRule = Callable[[str, object], FieldError | None]


def _is_blank(value: object) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def check_presence(field: str, value: object) -> FieldError | None:
    """Fail on ``None``, empty or whitespace-only values."""
    if _is_blank(value):
        return PresenceError(field)
    return None


def max_length(maximum: int) -> FieldRule:
    """Build a rule rejecting strings longer than ``maximum`` characters.

    ``None`` is left to the presence rule so an absent value is reported once.
    """

    def check_length(field: str, value: object) -> FieldError | None:
        if isinstance(value, str) and len(value) > maximum:
            return LengthError(field, maximum=maximum, count=len(value))
        return None

    return check_length


class ArticleValidator:
    """Checks an Article against its title rules and collects every violation.

    Local rules run as an ordered chain of ``(field, rule)`` pairs; the
    uniqueness rule runs last because it needs a read from the store. The
    uniqueness check is a fast path for a friendly error only; the storage
    layer's unique index is what keeps titles unique under concurrent writers.
    """

    def __init__(self, max_title_length: int = TITLE_MAX_LENGTH):
        self._max_title_length = max_title_length
        self._rules: tuple[tuple[str, FieldRule], ...] = (
            ("title", check_presence),
            ("title", max_length(max_title_length)),
        )

    @property
    def max_title_length(self) -> int:
        return self._max_title_length

    async def validate(self, candidate: Article, store: ArticleRepository) -> ValidationErrors:
        """Return all rule violations for ``candidate``; empty means valid."""
        errors = ValidationErrors()
        for field, rule in self._rules:
            error = rule(field, getattr(candidate, field))
            if error is not None:
                errors.add(error)

        if not errors.has("title", PresenceError):
            existing = await store.find_by_title_case_insensitive(
                candidate.title, exclude_id=candidate.id
            )
            if existing is not None:
                errors.add(
                    UniquenessError("title", value=candidate.title, conflicting_id=existing.id)
                )

        if errors:
            logger.debug(
                "Article id=%s title=%r rejected: %s",
                candidate.id,
                candidate.title,
                "; ".join(errors.full_messages()),
            )
        return errors
