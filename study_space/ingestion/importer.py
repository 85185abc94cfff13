"""Bulk import of books from JSON, YAML and CSV lists."""

import csv
import io
import json
import logging
from pathlib import Path

import chardet
import yaml
from pydantic import ValidationError

from study_space.models.book import Book, NewBook
from study_space.storage.library_store import LibraryStore

logger = logging.getLogger(__name__)

# Supported file extensions mapped to format identifiers
SUPPORTED_FORMATS: dict[str, str] = {
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".csv": "csv",
}


class BookImporter:
    """Reads lists of books to add to the library.

    JSON and YAML files hold a list of objects (or an object with a
    ``books`` list); CSV files have a header row naming the fields.
    Entries that do not describe a valid book are skipped.
    """

    def load(self, file_path: str | Path) -> list[NewBook]:
        """Parse a book list file into add-book requests.

        Args:
            file_path: Path to the file.

        Returns:
            The valid entries, in file order.

        Raises:
            FileNotFoundError: If file_path does not exist.
            ValueError: If the file format is not supported, the file
                cannot be parsed, or it does not contain a list of books.
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        file_format = self._detect_format(path)
        text = self._read_text(path)

        dispatch = {
            "json": self._parse_json,
            "yaml": self._parse_yaml,
            "csv": self._parse_csv,
        }
        entries = dispatch[file_format](text)

        books: list[NewBook] = []
        for index, entry in enumerate(entries):
            try:
                books.append(NewBook.model_validate(entry))
            except ValidationError as exc:
                logger.warning(
                    "Skipping entry %d in %s: %s", index, path, exc.errors()[0]["msg"]
                )
        logger.info("Loaded %d of %d books from %s", len(books), len(entries), path)
        return books

    def import_into(self, store: LibraryStore, file_path: str | Path) -> list[Book]:
        """Load a book list and add every valid entry to the store."""
        return [store.add_book(request) for request in self.load(file_path)]

    def _detect_format(self, file_path: Path) -> str:
        ext = file_path.suffix.lower()
        if ext not in SUPPORTED_FORMATS:
            raise ValueError(
                f"Unsupported file format: '{ext}'. "
                f"Supported: {', '.join(SUPPORTED_FORMATS.keys())}"
            )
        return SUPPORTED_FORMATS[ext]

    def _read_text(self, file_path: Path) -> str:
        """Read a text file, falling back to chardet when it is not UTF-8.

        Args:
            file_path: Path to the text file.

        Returns:
            The file content as a string.
        """
        try:
            return file_path.read_text(encoding="utf-8-sig")
        except UnicodeDecodeError:
            pass

        raw_bytes = file_path.read_bytes()
        detected = chardet.detect(raw_bytes)
        encoding = detected.get("encoding") or "utf-8"
        confidence = detected.get("confidence", 0)

        if confidence < 0.7:
            logger.warning(
                "Low confidence encoding detection for %s: %s (%.0f%%)",
                file_path,
                encoding,
                confidence * 100,
            )

        try:
            return raw_bytes.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            logger.error("Failed to decode file: %s", file_path)
            return raw_bytes.decode("utf-8", errors="replace")

    def _parse_json(self, text: str) -> list:
        if not text.strip():
            return []
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON: {exc}") from exc
        return self._as_entries(data)

    def _parse_yaml(self, text: str) -> list:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML: {exc}") from exc
        return self._as_entries(data)

    def _parse_csv(self, text: str) -> list:
        reader = csv.DictReader(io.StringIO(text))
        # Drop empty cells so model defaults apply
        try:
            return [
                {key: value for key, value in row.items() if key and value}
                for row in reader
            ]
        except csv.Error as exc:
            raise ValueError(f"Invalid CSV: {exc}") from exc

    def _as_entries(self, data: object) -> list:
        if data is None:
            return []
        if isinstance(data, dict) and "books" in data:
            data = data["books"]
        if not isinstance(data, list):
            raise ValueError("Expected a list of books")
        return data
