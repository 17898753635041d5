"""HTML sanitization for user-supplied text returned by the API."""
from bleach.sanitizer import Cleaner

# No markup is allowed through; disallowed tags are escaped rather than stripped so
# the caller still sees what was submitted.
_CLEANER = Cleaner(tags=set(), attributes={}, protocols=set(), strip=False, strip_comments=True)


def sanitize(text: str | None) -> str | None:
    """
    Escape HTML-significant markup in a text value.

    Idempotent: existing character entities are preserved, so sanitizing
    already-sanitized text returns it unchanged.
    """
    if text is None:
        return None
    return _CLEANER.clean(text)
