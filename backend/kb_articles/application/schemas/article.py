"""Pydantic DTOs (Data Transfer Objects) for the Article feature."""

from datetime import datetime

from pydantic import BaseModel, Field

from kb_articles.domain.validation import ValidationErrors


class ArticleCreate(BaseModel):
    """Schema for creating a new article.

    Title rules are enforced by ``ArticleValidator`` rather than by field
    constraints, so a missing title reaches the validator and is reported
    together with any other violations.
    """

    title: str | None = Field(None, examples=["Welcome"])


class ArticleUpdate(BaseModel):
    """Schema for updating an existing article — all fields optional."""

    title: str | None = None


class ArticleResponse(BaseModel):
    """Schema returned to the client."""

    id: int
    title: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class FieldErrorSchema(BaseModel):
    field: str
    kind: str
    message: str


class ValidationErrorResponse(BaseModel):
    """Every field error of a rejected write, plus the joined full messages."""

    errors: list[FieldErrorSchema]
    messages: list[str]

    @classmethod
    def from_errors(cls, errors: ValidationErrors) -> "ValidationErrorResponse":
        return cls(
            errors=[FieldErrorSchema(**e.to_dict()) for e in errors],
            messages=errors.full_messages(),
        )
