"""Persistence for the book library."""

from study_space.storage.database import get_connection, initialize_database
from study_space.storage.library_store import BookNotFoundError, LibraryStore

__all__ = ["BookNotFoundError", "LibraryStore", "get_connection", "initialize_database"]
