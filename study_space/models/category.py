"""Library sidebar categories."""

from enum import Enum


class BookCategory(str, Enum):
    """The filters offered in the library sidebar."""

    RECENTS = "Recents"
    FAVORITES = "Favorites"
    ALL = "All"

    @property
    def icon(self) -> str:
        """Symbol name shown next to the category label."""
        return CATEGORY_ICONS[self]


CATEGORY_ICONS: dict[BookCategory, str] = {
    BookCategory.RECENTS: "clock",
    BookCategory.FAVORITES: "star.fill",
    BookCategory.ALL: "books.vertical",
}
