"""Domain-specific exceptions — framework-independent."""

from kb_articles.domain.validation import ValidationErrors


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class DuplicateEntityError(Exception):
    """Raised when attempting to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}='{value}' already exists")


class RecordInvalidError(Exception):
    """Raised when a write is refused because the record failed validation.

    Carries the full ``ValidationErrors`` so callers can report every field
    error at once.
    """

    def __init__(self, entity_type: str, errors: ValidationErrors):
        self.entity_type = entity_type
        self.errors = errors
        super().__init__(
            f"{entity_type} is invalid: {', '.join(errors.full_messages())}"
        )
