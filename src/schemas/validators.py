"""
Validation of raw bookmark payloads and route parameters.

Request bodies arrive as plain JSON objects. Validation is an explicit, ordered
sequence of checks so that the first failure is deterministic: presence of the
required fields first (title, url, rating), then per-field checks in
`FIELD_CHECKS` order.
"""
import re
from collections.abc import Callable
from typing import Annotated, Any

from pydantic import AnyUrl, TypeAdapter, UrlConstraints, ValidationError

from schemas.bookmark import BookmarkCreate, BookmarkUpdate
from services.exceptions import (
    BookmarkNotFoundError,
    EmptyUpdateError,
    InvalidFieldError,
    InvalidRatingError,
    InvalidUrlError,
    MissingFieldError,
)

MIN_RATING = 0
MAX_RATING = 5

# Primary keys are 32-bit signed integers in the bookmarks table
MAX_BOOKMARK_ID = 2**31 - 1
BOOKMARK_ID_PATTERN = re.compile(r"[0-9]+")

REQUIRED_FIELDS: tuple[str, ...] = ("title", "url", "rating")
UPDATABLE_FIELDS: tuple[str, ...] = ("title", "url", "description", "rating")

# No length cap, unlike pydantic's HttpUrl
_http_url = TypeAdapter(
    Annotated[AnyUrl, UrlConstraints(allowed_schemes=["http", "https"], host_required=True)],
)


def _is_missing(value: Any) -> bool:
    """A value is missing when it is null or a blank string."""
    return value is None or (isinstance(value, str) and not value.strip())


def check_title(value: Any) -> str:
    """Validate a bookmark title."""
    if _is_missing(value):
        raise MissingFieldError("title")
    if not isinstance(value, str):
        raise InvalidFieldError("title", "must be a string")
    return value


def check_url(value: Any) -> str:
    """
    Validate that a URL is absolute with an http or https scheme.

    The URL is stored as submitted; parsing only decides whether it is acceptable.
    Whitespace anywhere in the value is rejected, since the parser would otherwise
    trim or encode it and the stored value would differ from the parsed one.
    """
    if _is_missing(value):
        raise MissingFieldError("url")
    if not isinstance(value, str) or any(c.isspace() for c in value):
        raise InvalidUrlError()
    try:
        _http_url.validate_python(value)
    except ValidationError as e:
        raise InvalidUrlError() from e
    return value


def check_rating(value: Any) -> float:
    """Validate that a rating is a number between MIN_RATING and MAX_RATING inclusive."""
    if value is None:
        raise MissingFieldError("rating")
    # bool is an int subclass, but true/false are not ratings
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise InvalidRatingError()
    # NaN compares false both ways, so it falls out of range too
    if not MIN_RATING <= value <= MAX_RATING:
        raise InvalidRatingError()
    return value


def check_description(value: Any) -> str | None:
    """Validate an optional description."""
    if value is not None and not isinstance(value, str):
        raise InvalidFieldError("description", "must be a string")
    return value


FIELD_CHECKS: list[tuple[str, Callable[[Any], Any]]] = [
    ("title", check_title),
    ("rating", check_rating),
    ("url", check_url),
    ("description", check_description),
]


def validate_create(payload: dict[str, Any]) -> BookmarkCreate:
    """
    Validate a create payload.

    Args:
        payload: The decoded JSON request body.

    Returns:
        The bookmark record to insert, restricted to known fields.

    Raises:
        MissingFieldError: For the first of title, url, rating that is absent.
        InvalidRatingError: If rating is not a number in range.
        InvalidUrlError: If url is not an absolute http(s) URL.
        InvalidFieldError: If title or description is not a string.
    """
    for field in REQUIRED_FIELDS:
        if _is_missing(payload.get(field)):
            raise MissingFieldError(field)

    values = {
        field: check(payload.get(field))
        for field, check in FIELD_CHECKS
    }
    return BookmarkCreate(**values)


def validate_update(payload: dict[str, Any]) -> BookmarkUpdate:
    """
    Validate a partial update payload.

    Only fields present in the payload are checked and returned; unknown fields
    are dropped. Presence is decided by key, not by truthiness, so a rating of
    0 or an explicit null description count as supplied.

    Raises:
        EmptyUpdateError: If none of the updatable fields are present.
        BookmarkValidationError: If a present field fails its check.
    """
    present = [field for field in UPDATABLE_FIELDS if field in payload]
    if not present:
        raise EmptyUpdateError()

    values = {
        field: check(payload[field])
        for field, check in FIELD_CHECKS
        if field in present
    }
    return BookmarkUpdate(**values)


def parse_bookmark_id(raw: str) -> int:
    """
    Parse a bookmark ID route parameter.

    Anything that is not a non-negative decimal integer within the primary key
    range cannot identify a bookmark, so it is reported as not found.
    """
    if not BOOKMARK_ID_PATTERN.fullmatch(raw):
        raise BookmarkNotFoundError(raw)
    bookmark_id = int(raw)
    if bookmark_id > MAX_BOOKMARK_ID:
        raise BookmarkNotFoundError(raw)
    return bookmark_id
