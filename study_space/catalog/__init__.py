"""Catalog filtering and library screen state."""

from study_space.catalog.filter import find_book, last_read_key, select_view
from study_space.catalog.storefront import parse_storefront_url
from study_space.catalog.view import LibraryViewState

__all__ = [
    "LibraryViewState",
    "find_book",
    "last_read_key",
    "parse_storefront_url",
    "select_view",
]
