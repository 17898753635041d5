"""Bookmark model for storing saved links."""
from sqlalchemy import CheckConstraint, Float, Text
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class Bookmark(Base):
    """Bookmark model - stores a URL with a title, optional description and a 0-5 rating."""

    __tablename__ = "bookmarks"
    __table_args__ = (
        CheckConstraint("rating >= 0 AND rating <= 5", name="ck_bookmarks_rating_range"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    rating: Mapped[float] = mapped_column(Float, nullable=False)

    def __repr__(self) -> str:
        return f"<Bookmark id={self.id} url={self.url!r}>"
