"""Book data models."""

from datetime import datetime, timezone
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Book(BaseModel):
    """A book on the user's shelf.

    Only ``id``, ``is_favorite`` and ``last_read_date`` drive the catalog
    logic; the remaining fields are display metadata passed through as-is.
    """

    id: str = Field(default_factory=lambda: str(uuid4()))
    title: str
    author: str = ""
    cover_image: str = ""
    file_path: str = ""
    is_favorite: bool = False
    last_read_date: datetime | None = None  # None until first opened
    added_at: datetime = Field(default_factory=_utcnow)

    @field_validator("last_read_date", "added_at")
    @classmethod
    def _assume_utc(cls, value: datetime | None) -> datetime | None:
        # Naive and aware datetimes cannot be compared, so pin naive ones to UTC
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class NewBook(BaseModel):
    """Fields collected by the "add book" form."""

    title: str = Field(min_length=1)
    author: str = ""
    cover_image: str = ""
    file_path: str = ""

    @field_validator("title", "author", "cover_image", "file_path", mode="before")
    @classmethod
    def _strip(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    def to_book(self) -> Book:
        """Create a fresh, unread, non-favorite Book from this request."""
        return Book(**self.model_dump())
