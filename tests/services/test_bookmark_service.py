"""Tests for bookmark service layer functionality."""
import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from models.bookmark import Bookmark
from schemas.bookmark import BookmarkCreate, BookmarkUpdate
from services.bookmark_service import (
    create_bookmark,
    delete_bookmark,
    get_bookmark,
    list_bookmarks,
    update_bookmark,
)
from services.exceptions import BookmarkNotFoundError


@pytest.fixture
async def test_bookmark(db_session: AsyncSession) -> Bookmark:
    """Create a test bookmark."""
    bookmark = Bookmark(
        title="Example",
        url="https://example.com",
        description="An example site",
        rating=4,
    )
    db_session.add(bookmark)
    await db_session.flush()
    await db_session.refresh(bookmark)
    return bookmark


async def test__list_bookmarks__empty(db_session: AsyncSession) -> None:
    """Test that an empty table yields an empty list."""
    assert await list_bookmarks(db_session) == []


async def test__list_bookmarks__ordered_by_id(db_session: AsyncSession) -> None:
    """Test that bookmarks come back in insertion (ID) order."""
    created = [
        await create_bookmark(
            db_session,
            BookmarkCreate(title=f"B{i}", url=f"https://example.com/{i}", rating=i),
        )
        for i in range(3)
    ]

    result = await list_bookmarks(db_session)
    assert [b.id for b in result] == [b.id for b in created]


async def test__create_bookmark__assigns_id(db_session: AsyncSession) -> None:
    """Test that the store assigns an ID and persists every field."""
    bookmark = await create_bookmark(
        db_session,
        BookmarkCreate(
            title="New",
            url="https://new.example.com",
            description="fresh",
            rating=2.5,
        ),
    )
    assert bookmark.id is not None

    result = await db_session.execute(select(Bookmark).where(Bookmark.id == bookmark.id))
    stored = result.scalar_one()
    assert stored.title == "New"
    assert stored.url == "https://new.example.com"
    assert stored.description == "fresh"
    assert stored.rating == 2.5


async def test__create_bookmark__stores_raw_markup(db_session: AsyncSession) -> None:
    """Test that text is stored as submitted; escaping happens on output."""
    bookmark = await create_bookmark(
        db_session,
        BookmarkCreate(title="<b>bold</b>", url="https://example.com", rating=1),
    )
    assert bookmark.title == "<b>bold</b>"


async def test__create_bookmark__storage_errors_pass_through(db_session: AsyncSession) -> None:
    """Test that constraint violations surface as storage exceptions."""
    # Bypasses validation to hit the table's rating CHECK constraint
    data = BookmarkCreate.model_construct(
        title="Bad", url="https://example.com", description=None, rating=42,
    )
    with pytest.raises(IntegrityError):
        await create_bookmark(db_session, data)


async def test__get_bookmark__found(
    db_session: AsyncSession,
    test_bookmark: Bookmark,
) -> None:
    """Test fetching an existing bookmark."""
    bookmark = await get_bookmark(db_session, test_bookmark.id)
    assert bookmark.id == test_bookmark.id
    assert bookmark.title == "Example"


async def test__get_bookmark__not_found(db_session: AsyncSession) -> None:
    """Test that a missing ID raises BookmarkNotFoundError."""
    with pytest.raises(BookmarkNotFoundError) as exc_info:
        await get_bookmark(db_session, 999)
    assert exc_info.value.bookmark_id == 999


async def test__update_bookmark__applies_only_supplied_fields(
    db_session: AsyncSession,
    test_bookmark: Bookmark,
) -> None:
    """Test that unset fields keep their values."""
    updated = await update_bookmark(
        db_session,
        test_bookmark.id,
        BookmarkUpdate(title="Renamed"),
    )
    assert updated.title == "Renamed"
    assert updated.url == "https://example.com"
    assert updated.description == "An example site"
    assert updated.rating == 4


async def test__update_bookmark__explicit_none_clears_description(
    db_session: AsyncSession,
    test_bookmark: Bookmark,
) -> None:
    """Test that an explicitly supplied None is written."""
    updated = await update_bookmark(
        db_session,
        test_bookmark.id,
        BookmarkUpdate(description=None),
    )
    assert updated.description is None
    assert updated.title == "Example"


async def test__update_bookmark__not_found(db_session: AsyncSession) -> None:
    """Test that updating a missing ID raises BookmarkNotFoundError."""
    with pytest.raises(BookmarkNotFoundError):
        await update_bookmark(db_session, 999, BookmarkUpdate(title="x"))


async def test__delete_bookmark__removes_row(
    db_session: AsyncSession,
    test_bookmark: Bookmark,
) -> None:
    """Test that the row is permanently removed."""
    bookmark_id = test_bookmark.id

    await delete_bookmark(db_session, bookmark_id)

    result = await db_session.execute(select(Bookmark).where(Bookmark.id == bookmark_id))
    assert result.scalar_one_or_none() is None
    with pytest.raises(BookmarkNotFoundError):
        await get_bookmark(db_session, bookmark_id)


async def test__delete_bookmark__not_found(db_session: AsyncSession) -> None:
    """Test that deleting a missing ID raises BookmarkNotFoundError."""
    with pytest.raises(BookmarkNotFoundError):
        await delete_bookmark(db_session, 999)
