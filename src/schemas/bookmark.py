"""Pydantic schemas for bookmark endpoints."""
from pydantic import BaseModel, ConfigDict, field_validator

from core.sanitizer import sanitize


class BookmarkCreate(BaseModel):
    """Validated data for creating a new bookmark."""

    title: str
    url: str
    description: str | None = None
    rating: float


class BookmarkUpdate(BaseModel):
    """
    Validated data for a partial bookmark update.

    Every field is optional. Only fields present in `model_fields_set` were
    supplied by the caller; use `model_dump(exclude_unset=True)` to get them.
    """

    title: str | None = None
    url: str | None = None
    description: str | None = None
    rating: float | None = None


class BookmarkResponse(BaseModel):
    """
    Schema for bookmark responses.

    Title and description are sanitized on the way out, so every read path and
    the create response share the same escaping.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    url: str
    description: str | None
    rating: float

    @field_validator("title", "description")
    @classmethod
    def sanitize_text(cls, v: str | None) -> str | None:
        """Escape HTML markup in free-text fields."""
        return sanitize(v)
