"""Custom exceptions for the conversion system.

All exceptions inherit from Ts2JsError so callers can catch every
conversion-related failure with a single except clause. Several also inherit
from the matching builtin so code catching OSError or FileNotFoundError keeps
working.
"""

from __future__ import annotations

from pathlib import Path


class Ts2JsError(Exception):
    """Base exception for all conversion-related errors."""


class ConfigurationError(Ts2JsError, ValueError):
    """Raised when environment or command-line configuration is invalid."""


# Engine exceptions


class EngineNotFoundError(Ts2JsError, FileNotFoundError):
    """Raised when the transform engine executable cannot be located."""


class TransformError(Ts2JsError):
    """Raised inside an engine when parsing or type erasure fails.

    Engines convert this into a ``None`` result; it never escapes
    ``TransformEngine.transform``.
    """


# File system exceptions


class FileConversionError(Ts2JsError, OSError):
    """Raised when reading, writing or deleting a single file fails."""

    def __init__(self, operation: str, path: str | Path, reason: str):
        self.operation = operation
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{operation} failed for {path}: {reason}")


class DirectoryScanError(Ts2JsError, OSError):
    """Raised when a directory cannot be enumerated."""

    def __init__(self, path: str | Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"cannot read directory {path}: {reason}")


class TargetNotFoundError(Ts2JsError, FileNotFoundError):
    """Raised when the single-file target does not exist."""
