"""Tests for the bulk book importer."""

import json
from pathlib import Path

import pytest

from study_space.ingestion.importer import SUPPORTED_FORMATS, BookImporter
from study_space.storage import LibraryStore

FIXTURES_DIR = Path(__file__).parent / "fixtures" / "imports"


@pytest.fixture
def importer() -> BookImporter:
    return BookImporter()


class TestBookImporterFormats:
    def test_load_json_list(self, importer: BookImporter, tmp_path: Path) -> None:
        f = tmp_path / "books.json"
        f.write_text(json.dumps([{"title": "Emma", "author": "Jane Austen"}]))

        books = importer.load(f)
        assert [b.title for b in books] == ["Emma"]
        assert books[0].author == "Jane Austen"

    def test_load_json_object_with_books_key(
        self, importer: BookImporter, tmp_path: Path
    ) -> None:
        f = tmp_path / "books.json"
        f.write_text(json.dumps({"books": [{"title": "Emma"}, {"title": "Persuasion"}]}))
        assert [b.title for b in importer.load(f)] == ["Emma", "Persuasion"]

    def test_load_yaml_fixture(self, importer: BookImporter) -> None:
        books = importer.load(FIXTURES_DIR / "sample_books.yaml")
        # The entry without a title is skipped
        assert [b.title for b in books] == ["Pride and Prejudice", "Moby-Dick"]
        assert books[0].cover_image == "covers/pride.png"

    def test_load_csv(self, importer: BookImporter, tmp_path: Path) -> None:
        f = tmp_path / "books.csv"
        f.write_text("title,author,cover_image\nEmma,Jane Austen,\n,Anonymous,x.png\n")

        books = importer.load(f)
        assert [b.title for b in books] == ["Emma"]
        assert books[0].cover_image == ""

    def test_load_latin1_csv(self, importer: BookImporter, tmp_path: Path) -> None:
        f = tmp_path / "books.csv"
        content = "title,author\n" + "Les Misérables,Victor Hugo\n" * 20
        f.write_bytes(content.encode("latin-1"))

        books = importer.load(f)
        assert len(books) == 20
        assert books[0].author == "Victor Hugo"
        assert "Mis" in books[0].title

    def test_utf8_bom_is_ignored(self, importer: BookImporter, tmp_path: Path) -> None:
        f = tmp_path / "books.csv"
        f.write_bytes("title\nEmma\n".encode("utf-8-sig"))
        assert [b.title for b in importer.load(f)] == ["Emma"]

    def test_empty_files(self, importer: BookImporter, tmp_path: Path) -> None:
        for name in ["empty.json", "empty.yaml", "empty.csv"]:
            f = tmp_path / name
            f.write_text("")
            assert importer.load(f) == []


class TestBookImporterErrors:
    def test_missing_file(self, importer: BookImporter, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            importer.load(tmp_path / "nope.json")

    def test_unsupported_format(self, importer: BookImporter, tmp_path: Path) -> None:
        f = tmp_path / "books.xml"
        f.write_text("<books/>")
        with pytest.raises(ValueError, match="Unsupported file format"):
            importer.load(f)

    def test_not_a_list(self, importer: BookImporter, tmp_path: Path) -> None:
        f = tmp_path / "books.json"
        f.write_text(json.dumps({"title": "Emma"}))
        with pytest.raises(ValueError, match="Expected a list"):
            importer.load(f)

    def test_malformed_json(self, importer: BookImporter, tmp_path: Path) -> None:
        f = tmp_path / "books.json"
        f.write_text("{not json")
        with pytest.raises(ValueError, match="Invalid JSON"):
            importer.load(f)

    def test_malformed_yaml(self, importer: BookImporter, tmp_path: Path) -> None:
        f = tmp_path / "books.yaml"
        f.write_text("books: [unclosed\n  - title: x\n")
        with pytest.raises(ValueError, match="Invalid YAML"):
            importer.load(f)

    def test_invalid_entries_skipped(self, importer: BookImporter, tmp_path: Path) -> None:
        f = tmp_path / "books.json"
        f.write_text(json.dumps([{"title": "  "}, "just a string", {"title": "Emma"}]))
        assert [b.title for b in importer.load(f)] == ["Emma"]

    def test_supported_formats(self) -> None:
        assert set(SUPPORTED_FORMATS.values()) == {"json", "yaml", "csv"}


class TestImportInto:
    def test_adds_books_to_store(self, importer: BookImporter, tmp_path: Path) -> None:
        store = LibraryStore(tmp_path / "library.db")
        added = importer.import_into(store, FIXTURES_DIR / "sample_books.yaml")
        assert [b.title for b in store.list_books()] == [b.title for b in added]
        assert len(added) == 2
