import logging
import os
import sys
from collections.abc import Callable
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from dotenv import find_dotenv, load_dotenv
from rich.console import Console
from rich.logging import RichHandler

# Load environment variables from a .env in the working directory (if present)
load_dotenv(find_dotenv(usecwd=True))


# --- Logging Configuration ---
# runtime modules should use logging.getLogger(...) and env LOG_LEVEL
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE_NAME = "ts2js.log"
_installed_handlers: list[logging.Handler] = []


def _parse_level(value: str | None, default: int = logging.INFO) -> int:
    if not value:
        return default
    name = value.strip().upper()
    level = getattr(logging, name, default)
    return level if isinstance(level, int) else default


def _build_console_handler(level: int, isatty: Callable[[], bool] | None = None) -> logging.Handler:
    """Return a console handler. Use Rich in TTY, plain stream otherwise."""
    is_tty = isatty() if isatty is not None else sys.stderr.isatty()
    if is_tty:
        handler: logging.Handler = RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_path=False,
            rich_tracebacks=True,
            show_level=True,
            log_time_format="[%X]",
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler(stream=sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.setLevel(level)
    return handler


def _build_file_handler(app_log_dir: str, level: int) -> logging.Handler | None:
    log_dir = Path(app_log_dir)
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logging.warning("Failed to configure file logging to '%s'. Error: %s", app_log_dir, e)
        return None

    backup_count_env = os.getenv("APP_LOG_BACKUP_COUNT", "5")
    try:
        backup_count = max(0, int(str(backup_count_env).strip()))
    except (TypeError, ValueError):
        backup_count = 5
        logging.warning(
            "Invalid APP_LOG_BACKUP_COUNT=%r. Defaulting to 5.",
            backup_count_env,
        )

    file_handler = TimedRotatingFileHandler(
        filename=log_dir / LOG_FILE_NAME,
        when="midnight",
        backupCount=backup_count,
        encoding="utf-8",
        utc=True,
    )
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    file_handler.setLevel(level)
    return file_handler


def setup_logging(level: int | None = None, isatty: Callable[[], bool] | None = None) -> None:
    """Configure the root logger with a console and optional file handler.

    Handlers installed by an earlier call are removed first, so the CLI can
    reconfigure verbosity on every invocation.
    """
    if level is None:
        level = _parse_level(os.getenv("LOG_LEVEL", "INFO"))

    root = logging.getLogger()
    for handler in _installed_handlers:
        root.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    root.setLevel(level)
    _installed_handlers.append(_build_console_handler(level, isatty=isatty))

    # Optional file logging only when APP_LOG_DIR is set
    app_log_dir = os.getenv("APP_LOG_DIR")
    if app_log_dir:
        file_handler = _build_file_handler(app_log_dir, level)
        if file_handler is not None:
            _installed_handlers.append(file_handler)

    for handler in _installed_handlers:
        root.addHandler(handler)

    # Forward warnings module messages to logging
    logging.captureWarnings(True)


# --- End Logging Configuration ---
