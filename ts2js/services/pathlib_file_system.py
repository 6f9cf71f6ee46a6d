"""Concrete implementation of FileSystem using pathlib and os.scandir."""

from __future__ import annotations

import os
from pathlib import Path

from ts2js.exceptions import DirectoryScanError, FileConversionError
from ts2js.services.interfaces import DirectoryEntry, EntryKind


def _reason(error: Exception) -> str:
    return getattr(error, "strerror", None) or str(error)


class PathlibFileSystem:
    """Concrete implementation on the local disk.

    Symlinks are reported as ``other`` so the walker never follows them.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def read_text(self, path: Path) -> str:
        try:
            return path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as error:
            raise FileConversionError("read", path, _reason(error)) from error

    def write_text(self, path: Path, content: str) -> None:
        try:
            path.write_text(content, encoding=self.encoding)
        except OSError as error:
            raise FileConversionError("write", path, _reason(error)) from error

    def remove(self, path: Path) -> None:
        try:
            path.unlink()
        except OSError as error:
            raise FileConversionError("delete", path, _reason(error)) from error

    def exists(self, path: Path) -> bool:
        return path.exists()

    def scan_dir(self, path: Path) -> list[DirectoryEntry]:
        try:
            with os.scandir(path) as iterator:
                return [self._to_entry(entry) for entry in iterator]
        except OSError as error:
            raise DirectoryScanError(path, _reason(error)) from error

    @staticmethod
    def _to_entry(entry: os.DirEntry[str]) -> DirectoryEntry:
        kind: EntryKind
        if entry.is_dir(follow_symlinks=False):
            kind = "directory"
        elif entry.is_file(follow_symlinks=False):
            kind = "file"
        else:
            kind = "other"
        return DirectoryEntry(name=entry.name, path=Path(entry.path), kind=kind)
