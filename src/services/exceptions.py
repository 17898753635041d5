"""Shared exceptions for service layer operations."""


class BookmarkNotFoundError(Exception):
    """Raised when no bookmark matches the requested ID."""

    message = "Bookmark Not Found"

    def __init__(self, bookmark_id: int | str) -> None:
        self.bookmark_id = bookmark_id
        super().__init__(self.message)


class BookmarkValidationError(Exception):
    """
    Base exception for client-input errors in bookmark payloads.

    The exception message is returned to the caller verbatim, so subclasses
    build it from the offending field only.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class MissingFieldError(BookmarkValidationError):
    """Raised when a required field is absent, null, or blank."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"'{field}' is required")


class InvalidRatingError(BookmarkValidationError):
    """Raised when a rating is not a number in the inclusive range 0-5."""

    def __init__(self) -> None:
        self.field = "rating"
        super().__init__("'rating' must be a number between 0 and 5")


class InvalidUrlError(BookmarkValidationError):
    """Raised when a URL is not an absolute http(s) URL."""

    def __init__(self) -> None:
        self.field = "url"
        super().__init__("'url' must be a valid URL")


class InvalidFieldError(BookmarkValidationError):
    """Raised when a field has the wrong type."""

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        super().__init__(f"'{field}' {reason}")


class EmptyUpdateError(BookmarkValidationError):
    """Raised when an update carries none of the updatable fields."""

    def __init__(self) -> None:
        super().__init__(
            "Request body must contain either 'title', 'url', 'description', or 'rating'",
        )


class MalformedBodyError(BookmarkValidationError):
    """Raised when a request body is not a JSON object."""

    message = "Request body must be a JSON object"

    def __init__(self) -> None:
        super().__init__(self.message)
