"""FastAPI dependencies for injection."""
from typing import Any

from fastapi import Request

from db.session import get_async_session
from services.exceptions import MalformedBodyError

__all__ = [
    "get_async_session",
    "read_json_object",
]


def _is_json_media_type(content_type: str) -> bool:
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or (
        media_type.startswith("application/") and media_type.endswith("+json")
    )


async def read_json_object(request: Request) -> dict[str, Any]:
    """
    Decode the request body as a JSON object.

    An empty body is treated as `{}`. The body is read by the handler rather
    than declared as a typed parameter, so route-level checks (such as the
    bookmark existing) can run before the body is judged.

    Raises:
        MalformedBodyError:
            If the body has a non-JSON content type, is not valid JSON, or
            decodes to anything other than an object.
    """
    body = await request.body()
    if not body:
        return {}
    content_type = request.headers.get("content-type")
    if content_type is not None and not _is_json_media_type(content_type):
        raise MalformedBodyError()
    try:
        payload = await request.json()
    except ValueError as e:
        raise MalformedBodyError() from e
    if not isinstance(payload, dict):
        raise MalformedBodyError()
    return payload
