"""Entry point for the Study Space library."""

import logging
import sys
from pathlib import Path

from study_space.catalog import LibraryViewState
from study_space.config import load_config
from study_space.ingestion import SUPPORTED_FORMATS, BookImporter
from study_space.models import BookCategory
from study_space.storage import LibraryStore

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Print the library for a category.

    Usage: ``python run.py [Recents|Favorites|All]``. Book lists dropped
    into the configured imports directory are added to the library first.
    """
    args = sys.argv[1:] if argv is None else argv
    config = load_config()
    logging.basicConfig(level=config.logging.level, format=config.logging.format)

    category = config.library.default_category
    if args:
        try:
            category = BookCategory(args[0].capitalize())
        except ValueError:
            choices = ", ".join(c.value for c in BookCategory)
            print(f"Unknown category '{args[0]}'. Choose one of: {choices}", file=sys.stderr)
            return 2

    # Ensure required directories exist
    imports_dir = Path(config.storage.imports_dir)
    imports_dir.mkdir(parents=True, exist_ok=True)

    store = LibraryStore(config.storage.sqlite_path)

    importer = BookImporter()
    for path in sorted(imports_dir.iterdir()):
        if path.suffix.lower() in SUPPORTED_FORMATS:
            try:
                importer.import_into(store, path)
            except ValueError as exc:
                # Bad files stay in place and are retried on the next run
                logger.error("Failed to import %s: %s", path, exc)
                continue
            path.rename(path.with_name(path.name + ".imported"))

    view = LibraryViewState.from_config(store, config)
    view.select_category(category)
    print(view.title)
    for book in view.books:
        marker = "*" if book.is_favorite else " "
        byline = f" by {book.author}" if book.author else ""
        print(f"{marker} {book.title}{byline}")
    view.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
