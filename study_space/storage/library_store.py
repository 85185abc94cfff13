"""SQLite-backed store of the user's books."""

import logging
import sqlite3
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path

from study_space.models.book import Book, NewBook
from study_space.storage.database import get_connection, initialize_database

logger = logging.getLogger(__name__)

Listener = Callable[[], None]

_COLUMNS = (
    "id, title, author, cover_image, file_path, "
    "is_favorite, last_read_date, added_at"
)


class BookNotFoundError(KeyError):
    """Raised when a mutation targets a book id the store does not hold."""

    def __init__(self, book_id: str) -> None:
        super().__init__(book_id)
        self.book_id = book_id

    def __str__(self) -> str:
        return f"Book not found: {self.book_id}"


def _row_to_book(row: sqlite3.Row) -> Book:
    last_read = row["last_read_date"]
    return Book(
        id=row["id"],
        title=row["title"],
        author=row["author"] or "",
        cover_image=row["cover_image"] or "",
        file_path=row["file_path"] or "",
        is_favorite=bool(row["is_favorite"]),
        last_read_date=datetime.fromisoformat(last_read) if last_read else None,
        added_at=datetime.fromisoformat(row["added_at"]),
    )


class LibraryStore:
    """Persists Book records and notifies listeners after every change.

    Books are listed in the order they were added. Each operation opens
    its own connection, so a store is cheap to create and share.

    Args:
        db_path: Path to the SQLite database file. The schema is created
                 on first use.
    """

    def __init__(self, db_path: str | Path) -> None:
        self._db_path = Path(db_path)
        self._listeners: list[Listener] = []
        initialize_database(self._db_path)

    # ── Reading ─────────────────────────────────────────────────────────────

    def list_books(self) -> list[Book]:
        """Return every book in library order."""
        conn = get_connection(self._db_path)
        try:
            rows = conn.execute(
                f"SELECT {_COLUMNS} FROM books ORDER BY position"
            ).fetchall()
        finally:
            conn.close()
        return [_row_to_book(row) for row in rows]

    def get_book(self, book_id: str) -> Book | None:
        """Return the book with the given id, or None."""
        conn = get_connection(self._db_path)
        try:
            row = conn.execute(
                f"SELECT {_COLUMNS} FROM books WHERE id = ?", (book_id,)
            ).fetchone()
        finally:
            conn.close()
        return _row_to_book(row) if row is not None else None

    # ── Writing ─────────────────────────────────────────────────────────────

    def add_book(self, book: NewBook | Book) -> Book:
        """Add a book to the library.

        Args:
            book: A form request or a complete Book record.

        Returns:
            The stored Book.

        Raises:
            ValueError: If a book with the same id already exists.
        """
        record = book.to_book() if isinstance(book, NewBook) else book
        conn = get_connection(self._db_path)
        try:
            conn.execute(
                f"INSERT INTO books ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    record.id,
                    record.title,
                    record.author,
                    record.cover_image,
                    record.file_path,
                    int(record.is_favorite),
                    record.last_read_date.isoformat() if record.last_read_date else None,
                    record.added_at.isoformat(),
                ),
            )
            conn.commit()
        except sqlite3.IntegrityError as exc:
            raise ValueError(f"Book already exists: {record.id}") from exc
        finally:
            conn.close()

        logger.info("Added book %s (%s)", record.id, record.title)
        self._notify()
        return record

    def remove_book(self, book_id: str) -> None:
        """Delete a book.

        Raises:
            BookNotFoundError: If no book has this id.
        """
        self._execute_update("DELETE FROM books WHERE id = ?", (book_id,), book_id)
        logger.info("Removed book %s", book_id)
        self._notify()

    def toggle_favorite(self, book_id: str) -> Book:
        """Flip a book's favorite flag.

        Returns:
            The updated Book.

        Raises:
            BookNotFoundError: If no book has this id.
        """
        self._execute_update(
            "UPDATE books SET is_favorite = 1 - is_favorite WHERE id = ?",
            (book_id,),
            book_id,
        )
        book = self._require(book_id)
        logger.debug("Book %s favorite=%s", book_id, book.is_favorite)
        self._notify()
        return book

    def mark_read(self, book_id: str, when: datetime | None = None) -> Book:
        """Record that a book was opened.

        Args:
            book_id: The book being opened.
            when: Time of reading; defaults to now (UTC).

        Returns:
            The updated Book.

        Raises:
            BookNotFoundError: If no book has this id.
        """
        read_at = when or datetime.now(timezone.utc)
        if read_at.tzinfo is None:
            read_at = read_at.replace(tzinfo=timezone.utc)
        self._execute_update(
            "UPDATE books SET last_read_date = ? WHERE id = ?",
            (read_at.isoformat(), book_id),
            book_id,
        )
        book = self._require(book_id)
        self._notify()
        return book

    # ── Change notification ─────────────────────────────────────────────────

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a callback run after every change.

        Exceptions raised by a listener are logged and do not reach the
        caller of the mutation.

        Returns:
            A function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        # Runs after commit: a failing listener is logged and the rest still run
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception("Library listener %r failed", listener)

    # ── Helpers ─────────────────────────────────────────────────────────────

    def _execute_update(self, sql: str, params: tuple, book_id: str) -> None:
        conn = get_connection(self._db_path)
        try:
            updated = conn.execute(sql, params).rowcount
            conn.commit()
        finally:
            conn.close()
        if updated == 0:
            raise BookNotFoundError(book_id)

    def _require(self, book_id: str) -> Book:
        book = self.get_book(book_id)
        if book is None:
            raise BookNotFoundError(book_id)
        return book
