"""Book ingestion: bulk imports into the library."""

from study_space.ingestion.importer import SUPPORTED_FORMATS, BookImporter

__all__ = ["BookImporter", "SUPPORTED_FORMATS"]
