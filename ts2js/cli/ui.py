"""UI utilities for CLI commands using Rich."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ts2js.types import ConversionResult, ConversionStats

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)


def display_parameters(directory: Path, file: Path | None, dry_run: bool, settings: dict[str, Any]) -> None:
    """Display the resolved runtime parameters.

    Args:
        directory: Directory that directory mode would walk
        file: Single file target, if any
        dry_run: Whether dry-run mode is on
        settings: Conversion config as a dictionary
    """
    params_table = Table.grid(padding=(0, 2))
    params_table.add_row("[bold]dir:[/bold]", escape(str(directory)))
    params_table.add_row("[bold]file:[/bold]", escape(str(file)) if file else "-")
    params_table.add_row("[bold]dryRun:[/bold]", str(dry_run))
    params_table.add_row("[bold]markup detection:[/bold]", str(settings.get("markup_detection")))
    params_table.add_row("[bold]workers:[/bold]", str(settings.get("workers")))

    console.print("[bold]Runtime parameters:[/bold]")
    console.print(Panel(params_table, border_style="blue", padding=(0, 1)))


def display_dry_run(directory: Path, file: Path | None) -> None:
    """Name the top-level target without inspecting it."""
    console.print("Dry run mode: Only showing what files would be converted")
    if file is not None:
        console.print(f"Would convert file: {escape(str(file))}")
    else:
        console.print(f"Would scan directory: {escape(str(directory))}")


def display_file_result(file: Path, result: ConversionResult | None) -> None:
    """Display the outcome of single-file mode."""
    if result is None:
        console.print(f"[yellow]Skipped unsupported file:[/yellow] {escape(str(file))}")
    elif result.succeeded and result.output_path is not None:
        console.print(f"[green]✓[/green] Converted: {escape(file.name)} → {escape(result.output_path.name)}")
    else:
        console.print(f"[red]✗[/red] Failed: {escape(str(file))} ({escape(result.error_message or 'unknown error')})")


def display_directory_summary(stats: ConversionStats) -> None:
    """Display the final counts of a directory walk.

    Args:
        stats: Stats returned by the directory walker
    """
    console.print(f"Conversion complete! Success: {stats.success_count}, Failures: {stats.failure_count}")

    failed = [result for result in stats.results if not result.succeeded]
    if not failed:
        return

    failures_table = Table.grid(padding=(0, 2))
    for result in failed:
        failures_table.add_row(escape(str(result.input_path)), f"[red]{escape(result.error_message or '')}[/red]")
    console.print(Panel(failures_table, title="Failed files", border_style="red", padding=(0, 1)))


def display_error(message: str) -> None:
    err_console.print(f"[red]Error during processing:[/red] {escape(message)}")


def emit_json(
    mode: str,
    target: Path,
    dry_run: bool,
    stats: ConversionStats | None = None,
) -> None:
    """Write a one-line machine-readable summary to stdout."""
    stats = stats if stats is not None else ConversionStats()
    payload = {
        "mode": mode,
        "target": str(target),
        "dry_run": dry_run,
        "success": stats.success_count,
        "failure": stats.failure_count,
        "results": [result.to_dict() for result in stats.results],
    }
    typer.echo(json.dumps(payload, ensure_ascii=False))
