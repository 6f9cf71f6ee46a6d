"""Shared type definitions."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(frozen=True, slots=True)
class ConversionTask:
    """A recognized source file waiting to be converted."""

    input_path: Path
    extension: str


@dataclass(frozen=True, slots=True)
class ConversionResult:
    """Outcome of one conversion attempt."""

    input_path: Path
    succeeded: bool
    output_path: Path | None = None
    error_message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "input": str(self.input_path),
            "output": str(self.output_path) if self.output_path else None,
            "succeeded": self.succeeded,
            "error": self.error_message,
        }


@dataclass(slots=True)
class ConversionStats:
    """Success and failure counters for one directory walk.

    Counters only ever grow. Directory enumeration failures add to
    ``failure_count`` without adding an entry to ``results``.
    """

    success_count: int = 0
    failure_count: int = 0
    results: list[ConversionResult] = field(default_factory=list)

    def record_result(self, result: ConversionResult) -> None:
        self.results.append(result)
        if result.succeeded:
            self.success_count += 1
        else:
            self.failure_count += 1

    def record_directory_failure(self) -> None:
        self.failure_count += 1
