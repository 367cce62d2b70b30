"""Unit tests for OutputDirectory."""

import pytest

from inbox_attachments.domain.errors import OutputDirectoryError
from inbox_attachments.infrastructure.filesystem.storage import OutputDirectory, safe_filename


class TestEnsureRoot:

    def test_creates_missing_root(self, tmp_path, caplog):
        root = tmp_path / "nested" / "out"
        caplog.set_level("INFO")
        OutputDirectory(root).ensure_root()
        assert root.is_dir()
        assert "First run, creating the directory" in caplog.text

    def test_existing_root_is_left_alone(self, tmp_path):
        (tmp_path / "keep.txt").write_text("x")
        assert OutputDirectory(tmp_path).ensure_root() == tmp_path.resolve()
        assert (tmp_path / "keep.txt").read_text() == "x"

    def test_root_that_is_a_file_fails(self, tmp_path):
        target = tmp_path / "out"
        target.write_text("not a dir")
        with pytest.raises(OutputDirectoryError):
            OutputDirectory(target).ensure_root()

    def test_uncreatable_root_fails(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("file")
        with pytest.raises(OutputDirectoryError):
            OutputDirectory(blocker / "out").ensure_root()


class TestSaveBytes:

    def test_nested_folder_is_created(self, tmp_path):
        fp = OutputDirectory(tmp_path).save_bytes("Invoices/March", "a.pdf", b"data")
        assert fp == tmp_path.resolve() / "Invoices" / "March" / "a.pdf"
        assert fp.read_bytes() == b"data"

    def test_ensure_folder_is_idempotent(self, tmp_path):
        storage = OutputDirectory(tmp_path)
        first = storage.ensure_folder("Scans")
        assert storage.ensure_folder("Scans") == first

    def test_last_write_wins(self, tmp_path):
        storage = OutputDirectory(tmp_path)
        storage.save_bytes("Scans", "page.png", b"one")
        fp = storage.save_bytes("Scans", "page.png", b"two")
        assert fp.read_bytes() == b"two"
        assert [p.name for p in fp.parent.iterdir()] == ["page.png"]


class TestSafeFilename:

    @pytest.mark.parametrize("name,expected", [
        ("report.pdf", "report.pdf"),
        (None, "attachment"),
        ("", "attachment"),
        ("..", "attachment"),
        ("../../etc/passwd", "passwd"),
        ("C:\\Users\\me\\doc.txt", "doc.txt"),
        ("a\\b.pdf", "b.pdf"),
        ("a\x00b.pdf", "ab.pdf"),
        ("\x00", "attachment"),
    ])
    def test_names(self, name, expected):
        assert safe_filename(name) == expected

    def test_nul_in_name_is_written(self, tmp_path):
        fp = OutputDirectory(tmp_path).save_bytes("Scans", "a\x00b.pdf", b"data")
        assert fp.name == "ab.pdf"
        assert fp.read_bytes() == b"data"
