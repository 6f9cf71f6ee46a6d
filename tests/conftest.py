#!/usr/bin/env python3
"""Root-level pytest configuration and fixtures."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Callable

import pytest

from ts2js.exceptions import DirectoryScanError, FileConversionError
from ts2js.processor import ConversionProcessor
from ts2js.run_config import ConversionConfig
from ts2js.services.interfaces import DirectoryEntry
from ts2js.services.pathlib_file_system import PathlibFileSystem

logger = logging.getLogger(__name__)

# Sources containing this marker are rejected by FakeEngine
BROKEN_MARKER = "@@syntax-error@@"

_ANNOTATION = re.compile(r":\s*[A-Za-z_][A-Za-z0-9_<>\[\]]*")


class FakeEngine:
    """Engine stand-in that drops simple ``: Type`` annotations.

    Records every call as ``(source, jsx)`` so tests can check the markup mode.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, bool]] = []

    def transform(self, source: str, *, jsx: bool) -> str | None:
        self.calls.append((source, jsx))
        if BROKEN_MARKER in source:
            return None
        return _ANNOTATION.sub("", source)


class FailingFileSystem(PathlibFileSystem):
    """Disk file system that fails one operation on demand."""

    def __init__(self, fail_on: str, partial_write: bool = False) -> None:
        super().__init__()
        self.fail_on = fail_on
        self.partial_write = partial_write

    def read_text(self, path: Path) -> str:
        if self.fail_on == "read":
            raise FileConversionError("read", path, "Input/output error")
        return super().read_text(path)

    def write_text(self, path: Path, content: str) -> None:
        if self.fail_on == "write":
            if self.partial_write:
                path.write_text(content[: len(content) // 2], encoding="utf-8")
            raise FileConversionError("write", path, "No space left on device")
        super().write_text(path, content)

    def remove(self, path: Path) -> None:
        if self.fail_on == "delete":
            raise FileConversionError("delete", path, "Permission denied")
        super().remove(path)


class InMemoryFileSystem:
    """FileSystem kept in dictionaries; children listed in insertion order."""

    def __init__(self, root: Path = Path("/project")) -> None:
        self.root = root
        self.files: dict[Path, str] = {}
        self.children: dict[Path, list[Path]] = {root: []}
        self.unreadable: set[Path] = set()

    def add_dir(self, path: str | Path) -> Path:
        path = Path(path)
        missing: list[Path] = []
        current = path
        while current not in self.children and current != current.parent:
            missing.append(current)
            current = current.parent
        for directory in reversed(missing):
            self.children[directory] = []
            self.children[directory.parent].append(directory)
        return path

    def add_file(self, path: str | Path, content: str = "") -> Path:
        path = Path(path)
        self.add_dir(path.parent)
        if path not in self.files:
            self.children[path.parent].append(path)
        self.files[path] = content
        return path

    def read_text(self, path: Path) -> str:
        if path not in self.files:
            raise FileConversionError("read", path, "No such file or directory")
        return self.files[path]

    def write_text(self, path: Path, content: str) -> None:
        if path not in self.files:
            self.children[path.parent].append(path)
        self.files[path] = content

    def remove(self, path: Path) -> None:
        if path not in self.files:
            raise FileConversionError("delete", path, "No such file or directory")
        del self.files[path]
        self.children[path.parent].remove(path)

    def exists(self, path: Path) -> bool:
        return path in self.files or path in self.children

    def scan_dir(self, path: Path) -> list[DirectoryEntry]:
        if path in self.unreadable:
            raise DirectoryScanError(path, "Permission denied")
        if path not in self.children:
            raise DirectoryScanError(path, "No such file or directory")
        return [
            DirectoryEntry(name=child.name, path=child, kind="directory" if child in self.children else "file")
            for child in self.children[path]
        ]


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Provides the absolute path to the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def fake_engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def default_config() -> ConversionConfig:
    """Config with built-in defaults, independent of the environment."""
    return ConversionConfig()


@pytest.fixture
def memory_fs() -> InMemoryFileSystem:
    return InMemoryFileSystem()


@pytest.fixture
def write_tree(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Write ``{relative_path: content}`` under tmp_path and return the root."""

    def _write(files: dict[str, str]) -> Path:
        for relative, content in files.items():
            target = tmp_path / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return tmp_path

    return _write


@pytest.fixture
def make_processor(fake_engine: FakeEngine) -> Callable[..., ConversionProcessor]:
    """Build a processor on the real disk with the fake engine."""

    def _make(config: ConversionConfig | None = None, file_system=None) -> ConversionProcessor:
        return ConversionProcessor(
            engine=fake_engine,
            file_system=file_system if file_system is not None else PathlibFileSystem(),
            config=config if config is not None else ConversionConfig(),
        )

    return _make


@pytest.fixture
def broken_marker() -> str:
    """Text that makes FakeEngine report a parse failure."""
    return BROKEN_MARKER


@pytest.fixture
def failing_fs() -> Callable[..., FailingFileSystem]:
    """Factory for a disk file system that fails ``read``, ``write`` or ``delete``."""
    return FailingFileSystem
