"""Bookmark CRUD endpoints."""
from typing import Any

from fastapi import APIRouter, Depends, Request, Response
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, read_json_object
from models.bookmark import Bookmark
from schemas.bookmark import BookmarkCreate, BookmarkResponse, BookmarkUpdate
from schemas.errors import ErrorResponse, UnauthorizedResponse
from schemas.validators import parse_bookmark_id, validate_create, validate_update
from services import bookmark_service

router = APIRouter(
    prefix="/api/bookmarks",
    tags=["bookmarks"],
    responses={401: {"model": UnauthorizedResponse, "description": "Missing or invalid token"}},
)

NOT_FOUND_RESPONSE = {404: {"model": ErrorResponse, "description": "Bookmark not found"}}
BAD_REQUEST_RESPONSE = {400: {"model": ErrorResponse, "description": "Invalid bookmark data"}}


def json_request_body(model: type[BaseModel]) -> dict[str, Any]:
    """
    OpenAPI request body for a handler that reads its own JSON body.

    Bodies are decoded as plain JSON objects and validated by schemas.validators so
    that field errors are reported one at a time, in a fixed order.
    """
    return {
        "requestBody": {
            "content": {"application/json": {"schema": model.model_json_schema()}},
        },
    }


# Handlers return ORM rows; response_model validation sanitizes them exactly once.


@router.get("", response_model=list[BookmarkResponse])
async def list_bookmarks(
    db: AsyncSession = Depends(get_async_session),
) -> list[Bookmark]:
    """List all bookmarks."""
    return await bookmark_service.list_bookmarks(db)


@router.post(
    "",
    response_model=BookmarkResponse,
    status_code=201,
    responses=BAD_REQUEST_RESPONSE,
    openapi_extra=json_request_body(BookmarkCreate),
)
async def create_bookmark(
    response: Response,
    payload: dict[str, Any] = Depends(read_json_object),
    db: AsyncSession = Depends(get_async_session),
) -> Bookmark:
    """
    Create a new bookmark.

    Requires **title**, **url** and **rating** (0-5); **description** is optional.
    Unknown fields are ignored. The new bookmark's location is returned in the
    `Location` header.
    """
    data = validate_create(payload)
    bookmark = await bookmark_service.create_bookmark(db, data)
    response.headers["Location"] = f"{router.prefix}/{bookmark.id}"
    return bookmark


@router.get("/{bookmark_id}", response_model=BookmarkResponse, responses=NOT_FOUND_RESPONSE)
async def get_bookmark(
    bookmark_id: str,
    db: AsyncSession = Depends(get_async_session),
) -> Bookmark:
    """Get a single bookmark by ID."""
    return await bookmark_service.get_bookmark(db, parse_bookmark_id(bookmark_id))


@router.patch(
    "/{bookmark_id}",
    status_code=204,
    responses={**NOT_FOUND_RESPONSE, **BAD_REQUEST_RESPONSE},
    openapi_extra=json_request_body(BookmarkUpdate),
)
async def update_bookmark(
    bookmark_id: str,
    request: Request,
    db: AsyncSession = Depends(get_async_session),
) -> None:
    """
    Update some or all of a bookmark's fields.

    At least one of **title**, **url**, **description** or **rating** must be
    supplied; fields that are not supplied keep their current values.
    """
    parsed_id = parse_bookmark_id(bookmark_id)
    # Existence is checked before the body so unknown IDs always report 404
    await bookmark_service.get_bookmark(db, parsed_id)
    data = validate_update(await read_json_object(request))
    await bookmark_service.update_bookmark(db, parsed_id, data)


@router.delete("/{bookmark_id}", status_code=204, responses=NOT_FOUND_RESPONSE)
async def delete_bookmark(
    bookmark_id: str,
    db: AsyncSession = Depends(get_async_session),
) -> None:
    """Delete a bookmark."""
    await bookmark_service.delete_bookmark(db, parse_bookmark_id(bookmark_id))
