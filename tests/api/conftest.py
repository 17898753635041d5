"""Shared fixtures for API tests."""
import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from models.bookmark import Bookmark

# ID that is never assigned in tests
MISSING_ID = 123456

MALICIOUS_TITLE = "Naughty <script>alert('xss');</script>"
MALICIOUS_DESCRIPTION = 'Bad image <img src="https://url.to.file.which/does-not.exist">'
SANITIZED_TITLE = "Naughty &lt;script&gt;alert('xss');&lt;/script&gt;"
SANITIZED_DESCRIPTION = 'Bad image &lt;img src="https://url.to.file.which/does-not.exist"&gt;'


def make_bookmarks_data() -> list[dict]:
    """Bookmark rows used to seed the table."""
    return [
        {
            "title": "Thinkful",
            "url": "https://www.thinkful.com",
            "description": "Think outside the classroom",
            "rating": 5,
        },
        {
            "title": "Google",
            "url": "https://www.google.com",
            "description": "Where we find everything else",
            "rating": 4,
        },
        {
            "title": "MDN",
            "url": "https://developer.mozilla.org",
            "description": "The only place to find web documentation",
            "rating": 5,
        },
    ]


def as_response(bookmark: Bookmark) -> dict:
    """Expected JSON for a stored (markup-free) bookmark."""
    return {
        "id": bookmark.id,
        "title": bookmark.title,
        "url": bookmark.url,
        "description": bookmark.description,
        "rating": bookmark.rating,
    }


@pytest.fixture
async def bookmarks(db_session: AsyncSession) -> list[Bookmark]:
    """Insert the seed bookmarks."""
    rows = [Bookmark(**data) for data in make_bookmarks_data()]
    db_session.add_all(rows)
    await db_session.flush()
    for row in rows:
        await db_session.refresh(row)
    return rows


@pytest.fixture
async def malicious_bookmark(db_session: AsyncSession) -> Bookmark:
    """Insert a bookmark whose text fields carry markup."""
    bookmark = Bookmark(
        title=MALICIOUS_TITLE,
        url="https://www.hackers.com",
        description=MALICIOUS_DESCRIPTION,
        rating=1,
    )
    db_session.add(bookmark)
    await db_session.flush()
    await db_session.refresh(bookmark)
    return bookmark
