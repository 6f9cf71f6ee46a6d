"""Immutable conversion configuration with environment overrides and validation."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Final, Mapping

from ts2js.exceptions import ConfigurationError

LOGGER = logging.getLogger(__name__)

DEFAULT_EXTENSION_MAP: Final[Mapping[str, str]] = MappingProxyType({".ts": ".js", ".tsx": ".jsx"})
DEFAULT_IGNORED_DIRS: Final = frozenset({"node_modules", ".git", ".vscode", ".idea"})
HIDDEN_PREFIX: Final = "."

MARKUP_BY_EXTENSION: Final = "extension"
MARKUP_BY_CONTENT: Final = "content"
MARKUP_DETECTION_MODES: Final = (MARKUP_BY_EXTENSION, MARKUP_BY_CONTENT)
# Literal checked by the content heuristic
MARKUP_MARKER: Final = "tsx"

_EXTRA_IGNORED_DIRS_ENV: Final = "TS2JS_EXTRA_IGNORED_DIRS"
_MARKUP_DETECTION_ENV: Final = "TS2JS_MARKUP_DETECTION"
_WORKERS_ENV: Final = "TS2JS_WORKERS"
_MAX_DEPTH_ENV: Final = "TS2JS_MAX_DEPTH"
_ESBUILD_ENV: Final = "TS2JS_ESBUILD"
_ENGINE_TIMEOUT_ENV: Final = "TS2JS_ENGINE_TIMEOUT"


def _parse_int(raw: str | None, default: int | None, name: str) -> int | None:
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        LOGGER.warning("Invalid %s=%r. Defaulting to %s.", name, raw, default)
        return default


def _parse_float(raw: str | None, default: float | None, name: str) -> float | None:
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        LOGGER.warning("Invalid %s=%r. Defaulting to %s.", name, raw, default)
        return default


def _parse_names(raw: str | None) -> frozenset[str]:
    if not raw:
        return frozenset()
    return frozenset(part.strip() for part in raw.split(",") if part.strip())


@dataclass(frozen=True, slots=True)
class ConversionConfig:
    """Settings shared by the file converter and the directory walker.

    Instances are immutable so a single config can be handed to every
    component (and every worker thread) without copying.
    """

    extension_map: Mapping[str, str] = field(default_factory=lambda: DEFAULT_EXTENSION_MAP)
    ignored_dirs: frozenset[str] = DEFAULT_IGNORED_DIRS
    hidden_prefix: str = HIDDEN_PREFIX
    markup_detection: str = MARKUP_BY_EXTENSION
    workers: int = 1
    max_depth: int | None = None
    engine_command: str = "esbuild"
    engine_timeout: float | None = None

    def __post_init__(self) -> None:
        # Normalise to lower-case keys behind a read-only view
        normalised = {key.lower(): value for key, value in self.extension_map.items()}
        object.__setattr__(self, "extension_map", MappingProxyType(normalised))
        object.__setattr__(self, "ignored_dirs", frozenset(self.ignored_dirs))

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ConversionConfig:
        """Build a config from ``TS2JS_*`` environment variables."""
        env = os.environ if environ is None else environ
        config = cls(
            ignored_dirs=DEFAULT_IGNORED_DIRS | _parse_names(env.get(_EXTRA_IGNORED_DIRS_ENV)),
            markup_detection=(env.get(_MARKUP_DETECTION_ENV) or MARKUP_BY_EXTENSION).strip().lower(),
            workers=_parse_int(env.get(_WORKERS_ENV), 1, _WORKERS_ENV),  # type: ignore[arg-type]
            max_depth=_parse_int(env.get(_MAX_DEPTH_ENV), None, _MAX_DEPTH_ENV),
            engine_command=(env.get(_ESBUILD_ENV) or "esbuild").strip(),
            engine_timeout=_parse_float(env.get(_ENGINE_TIMEOUT_ENV), None, _ENGINE_TIMEOUT_ENV),
        )
        config.validate()
        return config

    def with_overrides(self, **overrides: Any) -> ConversionConfig:
        """Return a validated copy with the non-``None`` overrides applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        updated = replace(self, **changes)
        updated.validate()
        return updated

    def validate(self) -> None:
        """Raise ConfigurationError if any setting is out of range."""
        if self.markup_detection not in MARKUP_DETECTION_MODES:
            raise ConfigurationError(
                f"markup_detection must be one of {', '.join(MARKUP_DETECTION_MODES)}, got {self.markup_detection!r}"
            )
        if self.workers < 1:
            raise ConfigurationError(f"workers must be >= 1, got {self.workers}")
        if self.max_depth is not None and self.max_depth < 0:
            raise ConfigurationError(f"max_depth must be >= 0, got {self.max_depth}")
        if self.engine_timeout is not None and self.engine_timeout <= 0:
            raise ConfigurationError(f"engine_timeout must be positive, got {self.engine_timeout}")
        if not self.hidden_prefix:
            raise ConfigurationError("hidden_prefix must not be empty")
        if not self.engine_command:
            raise ConfigurationError("engine_command must not be empty")
        if not self.extension_map:
            raise ConfigurationError("extension_map must not be empty")
        for source_ext, target_ext in self.extension_map.items():
            if not source_ext.startswith(".") or not target_ext.startswith("."):
                raise ConfigurationError(f"extension map entries must start with '.': {source_ext} -> {target_ext}")

    def is_ignored_dir(self, name: str) -> bool:
        return name in self.ignored_dirs or name.startswith(self.hidden_prefix)

    def to_dict(self) -> dict[str, Any]:
        return {
            "extension_map": dict(self.extension_map),
            "ignored_dirs": sorted(self.ignored_dirs),
            "markup_detection": self.markup_detection,
            "workers": self.workers,
            "max_depth": self.max_depth,
            "engine_command": self.engine_command,
            "engine_timeout": self.engine_timeout,
        }
