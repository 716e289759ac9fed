"""Domain entities — pure Python business objects, no framework dependencies."""

from dataclasses import dataclass, field
from datetime import datetime, timezone

TITLE_MAX_LENGTH = 10


@dataclass
class Article:
    """Core domain entity representing an article.

    ``title`` may be ``None`` while the article is still a candidate; the
    validator rejects blank titles before anything is persisted.
    """

    title: str | None
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def update(self, title: str | None = None) -> None:
        """Update article fields and refresh the updated_at timestamp."""
        if title is not None:
            self.title = title
        self.updated_at = datetime.now(timezone.utc)
