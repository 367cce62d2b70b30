# domain/path_sanitizer.py
from __future__ import annotations
import posixpath
import re

FALLBACK_FOLDER = "error"

# No leading "/" or "\" (optionally after a drive letter), no reserved characters
_RELATIVE_PATH_RE = re.compile(r'(?!/|(?:[a-zA-Z]:)?[\\/])[^\0<>:"|?*]+')
_FIRST_WORD_RE = re.compile(r"(\S*)(.*)", re.DOTALL)


def capitalize_segment(segment: str) -> str:
    """'mARCH REPORT' -> 'March REPORT'. Only the first word is lowercased."""
    head, tail = _FIRST_WORD_RE.fullmatch(segment).groups()
    return head[:1].upper() + head[1:].lower() + tail


def capitalize_path(subject: str) -> str:
    return "/".join(capitalize_segment(s) for s in subject.split("/"))


def is_valid_relative_path(candidate: str) -> bool:
    if not _RELATIVE_PATH_RE.fullmatch(candidate):
        return False
    if posixpath.isabs(candidate):
        return False
    return not posixpath.normpath(candidate).startswith("..")


def sanitize_subject(subject: str | None) -> str:
    """Folder for a mail subject, relative to the output root, or FALLBACK_FOLDER."""
    folder = capitalize_path(subject or "")
    if not folder or not is_valid_relative_path(folder):
        return FALLBACK_FOLDER
    return folder
