"""Command-line entrypoint for ts2js."""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Annotated, NoReturn

import typer

from ts2js import __version__
from ts2js.cli.ui import (
    display_directory_summary,
    display_dry_run,
    display_error,
    display_file_result,
    display_parameters,
    emit_json,
)
from ts2js.config import setup_logging
from ts2js.processor import ConversionProcessor
from ts2js.run_config import MARKUP_BY_CONTENT, MARKUP_BY_EXTENSION, ConversionConfig
from ts2js.services.factory import ServiceFactory
from ts2js.types import ConversionStats

LOGGER = logging.getLogger(__name__)

app = typer.Typer(
    name="ts2js",
    help="Convert TypeScript/TSX files to JavaScript/JSX files",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


class MarkupDetection(str, Enum):
    extension = MARKUP_BY_EXTENSION
    content = MARKUP_BY_CONTENT


def _configure_logging(verbose: bool) -> None:
    """Configure logging levels based on verbosity.

    Args:
        verbose: If True, show DEBUG logs. Otherwise LOG_LEVEL (default INFO) applies.
    """
    setup_logging(logging.DEBUG if verbose else None)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


def _build_processor(config: ConversionConfig) -> ConversionProcessor:
    """Create a processor with the default services. Raises EngineNotFoundError."""
    engine = ServiceFactory.create_transform_engine(config)
    return ConversionProcessor(engine, ServiceFactory.create_file_system(), config)


def _run(
    directory: Path,
    file: Path | None,
    dry_run: bool,
    verbose: bool,
    json_output: bool,
    config: ConversionConfig,
) -> None:
    mode = "file" if file is not None else "directory"
    target = file if file is not None else directory

    if verbose and not json_output:
        display_parameters(directory, file, dry_run, config.to_dict())

    if dry_run:
        # Shallow preview: the target is named, never inspected
        if json_output:
            emit_json(mode, target, dry_run=True)
        else:
            display_dry_run(directory, file)
        return

    processor = _build_processor(config)

    if file is not None:
        result = processor.convert_file(file)
        if json_output:
            stats = ConversionStats()
            if result is not None:
                stats.record_result(result)
            emit_json(mode, target, dry_run=False, stats=stats)
        else:
            display_file_result(file, result)
        return

    stats = processor.convert_directory(directory)
    if json_output:
        emit_json(mode, target, dry_run=False, stats=stats)
    else:
        display_directory_summary(stats)


@app.command()
def convert(
    directory: Annotated[
        Path | None,
        typer.Option("--dir", "-d", help="Directory to convert", show_default="current working directory"),
    ] = None,
    file: Annotated[Path | None, typer.Option("--file", "-f", help="Single file to convert")] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", "-r", help="Show what files would be converted without actually doing it"),
    ] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show verbose output")] = False,
    json_output: Annotated[
        bool, typer.Option("--json", "-j", help="Print a single-line JSON summary instead of text")
    ] = False,
    workers: Annotated[
        int | None, typer.Option("--workers", "-w", min=1, help="Number of files converted concurrently")
    ] = None,
    markup_detection: Annotated[
        MarkupDetection | None,
        typer.Option("--markup-detection", help="Decide JSX parsing by file extension or by a marker in the source"),
    ] = None,
    version: Annotated[
        bool | None,
        typer.Option("--version", "-V", callback=_version_callback, is_eager=True, help="Show the version and exit"),
    ] = None,
) -> None:
    """Strip types from .ts/.tsx files and rewrite them as .js/.jsx in place."""
    _configure_logging(verbose)
    resolved_dir = directory if directory is not None else Path.cwd()

    try:
        config = ConversionConfig.from_env().with_overrides(
            workers=workers,
            markup_detection=markup_detection.value if markup_detection is not None else None,
        )
        _run(resolved_dir, file, dry_run, verbose, json_output, config)
    except Exception as error:
        display_error(str(error))
        if verbose:
            LOGGER.exception("Full error details:")
        raise typer.Exit(1) from error


def main() -> NoReturn:
    """Main entrypoint for the ts2js CLI."""
    app()
    raise SystemExit(0)


if __name__ == "__main__":
    main()
