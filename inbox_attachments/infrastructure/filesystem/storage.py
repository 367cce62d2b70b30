# infrastructure/filesystem/storage.py
from __future__ import annotations
import logging
from pathlib import Path, PurePosixPath

from inbox_attachments.domain.errors import OutputDirectoryError

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "attachment"

class OutputDirectory:
    def __init__(self, base: Path) -> None:
        self.base = base.resolve()

    def ensure_root(self) -> Path:
        if self.base.is_dir():
            return self.base
        if self.base.exists():
            raise OutputDirectoryError(f"{self.base} exists and is not a directory")
        logger.info("First run, creating the directory %s", self.base)
        try:
            self.base.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputDirectoryError(
                f"The specified path is not valid, cannot access or create the output directory {self.base}: {e}"
            ) from e
        return self.base

    def ensure_folder(self, name: str) -> Path:
        folder = self.base / name
        folder.mkdir(parents=True, exist_ok=True)
        return folder

    def save_bytes(self, folder: str, filename: str | None, data: bytes) -> Path:
        fp = self.ensure_folder(folder) / safe_filename(filename)
        fp.write_bytes(data)
        return fp


def safe_filename(name: str | None) -> str:
    """
    Last path component of an attachment name, so "../x" or "a/b" cannot
    leave the folder. Backslashes count as separators too: mail clients send
    Windows paths ("C:\\Users\\me\\doc.txt"), so "a\\b.pdf" is saved as "b.pdf".
    NUL bytes are dropped.
    """
    cleaned = (name or "").replace("\0", "").replace("\\", "/")
    base = PurePosixPath(cleaned).name
    if base in ("", ".", ".."):
        return DEFAULT_FILENAME
    return base
