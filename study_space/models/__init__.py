"""Data models for the Study Space library."""

from study_space.models.book import Book, NewBook
from study_space.models.category import CATEGORY_ICONS, BookCategory

__all__ = [
    "Book",
    "BookCategory",
    "CATEGORY_ICONS",
    "NewBook",
]
