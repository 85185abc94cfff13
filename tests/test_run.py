"""Tests for the command-line entry point."""

import json
from pathlib import Path

import pytest

from run import main


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("STUDY_SPACE_STOREFRONT_URL", raising=False)
    monkeypatch.delenv("STUDY_SPACE_LOG_LEVEL", raising=False)
    imports = tmp_path / "data" / "imports"
    imports.mkdir(parents=True)
    (imports / "shelf.json").write_text(
        json.dumps([{"title": "Emma", "author": "Jane Austen"}, {"title": "Dune"}])
    )
    return tmp_path


class TestMain:
    def test_prints_all_books(self, workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out[0] == "All"
        assert "  Emma by Jane Austen" in out
        assert "  Dune" in out

    def test_import_files_are_consumed_once(
        self, workdir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        main([])
        main([])
        out = capsys.readouterr().out
        assert out.count("Emma") == 2  # one line per run, no duplicate import
        assert (workdir / "data" / "imports" / "shelf.json.imported").exists()

    def test_category_argument_is_case_insensitive(
        self, workdir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main(["favorites"]) == 0
        assert capsys.readouterr().out.splitlines() == ["Favorites"]

    def test_unknown_category(self, workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["popular"]) == 2
        assert "Unknown category" in capsys.readouterr().err

    def test_malformed_file_is_skipped(
        self,
        workdir: Path,
        capsys: pytest.CaptureFixture[str],
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        imports = workdir / "data" / "imports"
        (imports / "a_bad.json").write_text("{not json")
        (imports / "b_bad.yaml").write_text("books: [unclosed\n  - title: x\n")

        assert main([]) == 0
        out = capsys.readouterr().out
        assert "Emma" in out
        assert "Failed to import" in caplog.text
        # Bad files are left for the next run, good ones are consumed
        assert (imports / "a_bad.json").exists()
        assert (imports / "b_bad.yaml").exists()
        assert (imports / "shelf.json.imported").exists()
