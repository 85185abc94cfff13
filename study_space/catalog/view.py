"""State of the library screen.

The presentation layer reads this object and calls its methods in response
to user input. The visible book list is derived from the store and the
selected category and is recomputed whenever either one changes.
"""

import logging

from study_space.catalog.filter import RECENTS_LIMIT, find_book, select_view
from study_space.catalog.storefront import parse_storefront_url
from study_space.config import AppConfig
from study_space.models.book import Book, NewBook
from study_space.models.category import BookCategory
from study_space.storage.library_store import LibraryStore

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Library"


class LibraryViewState:
    """Selection, sheet and filtered-view state for the library screen.

    Args:
        store: The library store to read from and write through.
        storefront_url: Address of the external storefront page.
        recents_limit: Maximum number of books in the Recents view.
        default_category: Category selected when the screen opens.
    """

    def __init__(
        self,
        store: LibraryStore,
        storefront_url: str | None = None,
        recents_limit: int = RECENTS_LIMIT,
        default_category: BookCategory | None = BookCategory.ALL,
    ) -> None:
        self._store = store
        self._recents_limit = recents_limit
        self._storefront_url = parse_storefront_url(storefront_url)
        self.selected_category: BookCategory | None = default_category
        self.selected_book_id: str | None = None
        self.showing_add_book = False
        self.showing_storefront = False

        self._library: list[Book] = []
        self._books: list[Book] = []
        self.refresh()
        self._unsubscribe = store.subscribe(self.refresh)

    @classmethod
    def from_config(cls, store: LibraryStore, config: AppConfig) -> "LibraryViewState":
        """Build the view state from an AppConfig."""
        return cls(
            store,
            storefront_url=config.storefront.url,
            recents_limit=config.library.recents_limit,
            default_category=config.library.default_category,
        )

    # ── Derived state ───────────────────────────────────────────────────────

    @property
    def books(self) -> list[Book]:
        """Books visible in the grid for the selected category."""
        return list(self._books)

    @property
    def title(self) -> str:
        if self.selected_category is None:
            return DEFAULT_TITLE
        return self.selected_category.value

    @property
    def selected_book(self) -> Book | None:
        """The book shown in the detail view, if any."""
        return find_book(self._library, self.selected_book_id)

    @property
    def storefront_url(self) -> str | None:
        return self._storefront_url

    def refresh(self) -> None:
        """Reload the library and recompute the visible books."""
        self._library = self._store.list_books()
        self._recompute()

    def _recompute(self) -> None:
        self._books = select_view(
            self._library, self.selected_category, self._recents_limit
        )

    # ── Sidebar and grid ────────────────────────────────────────────────────

    def select_category(self, category: BookCategory | None) -> None:
        self.selected_category = category
        self._recompute()

    def toggle_favorite(self, book_id: str) -> Book:
        return self._store.toggle_favorite(book_id)

    # ── Detail view ─────────────────────────────────────────────────────────

    def select_book(self, book_id: str) -> Book | None:
        """Open a book's detail view and record it as read.

        Returns:
            The opened book, or None if the id is not in the library.
        """
        if find_book(self._library, book_id) is None:
            logger.warning("Ignoring selection of unknown book %s", book_id)
            return None
        self.selected_book_id = book_id
        self._store.mark_read(book_id)
        return self.selected_book

    def close_book(self) -> None:
        self.selected_book_id = None

    # ── Sheets ──────────────────────────────────────────────────────────────

    def show_add_book(self) -> None:
        self.showing_add_book = True

    def dismiss_add_book(self) -> None:
        self.showing_add_book = False

    def add_book(self, request: NewBook) -> Book:
        """Add a book from the form and close the sheet."""
        book = self._store.add_book(request)
        self.showing_add_book = False
        return book

    def show_storefront(self) -> bool:
        """Open the storefront overlay if its URL is usable.

        Returns:
            True if the overlay is now showing.
        """
        self.showing_storefront = self._storefront_url is not None
        return self.showing_storefront

    def dismiss_storefront(self) -> None:
        self.showing_storefront = False

    def close(self) -> None:
        """Stop listening to the store."""
        self._unsubscribe()
