"""Category filtering and lookup over the book collection."""

import heapq
from collections.abc import Sequence
from datetime import datetime, timezone

from study_space.models.book import Book
from study_space.models.category import BookCategory

RECENTS_LIMIT = 5

# Sort key for books that have never been opened
_NEVER_READ = datetime.min.replace(tzinfo=timezone.utc)


def last_read_key(book: Book) -> datetime:
    """Return the recency sort key, treating a missing date as the minimum."""
    return book.last_read_date if book.last_read_date is not None else _NEVER_READ


def select_view(
    books: Sequence[Book],
    category: BookCategory | None,
    recents_limit: int = RECENTS_LIMIT,
) -> list[Book]:
    """Return the books to display for a sidebar category.

    ``None`` behaves like ``BookCategory.ALL``. The input is never mutated
    and the result is a new list.

    Args:
        books: The full collection, in library order.
        category: The selected category.
        recents_limit: Maximum size of the Recents view.

    Returns:
        All: every book in its given order.
        Favorites: the favorite books in their original relative order.
        Recents: up to ``recents_limit`` books, most recently read first.
            Never-read books sort last and ties keep their original order.
    """
    if category is None or category is BookCategory.ALL:
        return list(books)
    if category is BookCategory.FAVORITES:
        return [book for book in books if book.is_favorite]
    if category is BookCategory.RECENTS:
        # nlargest is stable, equivalent to sorted(..., reverse=True)[:n]
        return heapq.nlargest(recents_limit, books, key=last_read_key)
    raise ValueError(f"Unknown category: {category!r}")


def find_book(books: Sequence[Book], book_id: str | None) -> Book | None:
    """Return the first book whose id matches, or None."""
    if book_id is None:
        return None
    return next((book for book in books if book.id == book_id), None)
