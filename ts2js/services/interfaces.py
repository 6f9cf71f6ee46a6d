"""Service interfaces for the conversion system using structural typing."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Protocol, runtime_checkable

EntryKind = Literal["directory", "file", "other"]


@dataclass(frozen=True, slots=True)
class DirectoryEntry:
    """One child of an enumerated directory."""

    name: str
    path: Path
    kind: EntryKind


@runtime_checkable
class TransformEngine(Protocol):
    """Parse, type-erase and print one source file."""

    def transform(self, source: str, *, jsx: bool) -> str | None:
        """Return the untyped source, or None if the input cannot be converted."""
        ...


@runtime_checkable
class FileSystem(Protocol):
    """Service for the file operations a conversion needs."""

    def read_text(self, path: Path) -> str:
        """Read a whole file. Raises FileConversionError."""
        ...

    def write_text(self, path: Path, content: str) -> None:
        """Create or overwrite a file. Raises FileConversionError."""
        ...

    def remove(self, path: Path) -> None:
        """Delete a file. Raises FileConversionError."""
        ...

    def exists(self, path: Path) -> bool:
        """Return True if something exists at path."""
        ...

    def scan_dir(self, path: Path) -> list[DirectoryEntry]:
        """List a directory in enumeration order. Raises DirectoryScanError."""
        ...
