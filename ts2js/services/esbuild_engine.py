"""Transform engine backed by the esbuild executable."""

from __future__ import annotations

import logging
import shutil
import subprocess  # nosec B404
from collections.abc import Callable
from typing import Any

from ts2js.exceptions import EngineNotFoundError, TransformError

LOGGER = logging.getLogger(__name__)

INSTALL_HINT = "Install it with 'npm install --global esbuild' or set TS2JS_ESBUILD to its path."


class EsbuildTransformEngine:
    """Strip TypeScript types by piping source through ``esbuild``.

    esbuild reads the source on stdin and prints the result on stdout. JSX is
    preserved rather than compiled so ``.tsx`` files become ``.jsx`` files.
    """

    def __init__(
        self,
        command: str = "esbuild",
        timeout: float | None = None,
        which: Callable[[str], str | None] = shutil.which,
        run: Callable[..., subprocess.CompletedProcess[str]] = subprocess.run,
    ) -> None:
        executable = which(command)
        if not executable:
            raise EngineNotFoundError(f"esbuild executable not found: {command}. {INSTALL_HINT}")
        self.executable = executable
        self.timeout = timeout
        self._run = run
        LOGGER.debug("Using esbuild at %s", executable)

    def build_command(self, *, jsx: bool) -> list[str]:
        return [
            self.executable,
            f"--loader={'tsx' if jsx else 'ts'}",
            "--jsx=preserve",
            "--log-level=error",
        ]

    def transform(self, source: str, *, jsx: bool) -> str | None:
        """Return the converted source, or None when esbuild rejects it."""
        try:
            return self._invoke(source, jsx=jsx)
        except TransformError as error:
            LOGGER.error("Conversion error: %s", error)
            return None

    def _invoke(self, source: str, *, jsx: bool) -> str:
        kwargs: dict[str, Any] = {
            "input": source,
            "capture_output": True,
            "text": True,
            "encoding": "utf-8",
            "check": True,
        }
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        try:
            result = self._run(self.build_command(jsx=jsx), **kwargs)  # nosec B603 - executable resolved via shutil.which
        except subprocess.CalledProcessError as exc:
            stderr = (exc.stderr or "").strip() or f"exit status {exc.returncode}"
            raise TransformError(f"esbuild failed: {stderr}") from exc
        except subprocess.TimeoutExpired as exc:
            raise TransformError(f"esbuild timed out after {exc.timeout} s") from exc
        except OSError as exc:
            raise TransformError(f"esbuild could not be started: {exc}") from exc
        return result.stdout
