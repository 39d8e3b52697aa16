"""Rich terminal summary, printed to stderr next to the map."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.table import Table

from agentmap.scanner.models import ScanResult


def render_summary(result: ScanResult, console: Optional[Console] = None) -> None:
    """Print per-file counts and scan totals."""
    console = console or Console(stderr=True)

    if not result.files:
        console.print("[dim]No files mapped.[/dim]")
        return

    table = Table(
        title="agentmap",
        title_style="bold",
        border_style="dim",
    )
    table.add_column("File", style="magenta")
    table.add_column("Defs", justify="right", style="green")
    if result.diff_available:
        table.add_column("Changed", justify="right", style="yellow")
        table.add_column("Diff", justify="right")

    for file_result in sorted(result.files, key=lambda f: f.path):
        row = [file_result.path, str(len(file_result.definitions))]
        if result.diff_available:
            stats = file_result.stats
            row.append(str(len(file_result.changed_definitions)))
            row.append(f"+{stats.added}-{stats.deleted}" if stats else "-")
        table.add_row(*row)

    console.print(table)
    console.print()
    console.print(f"[dim]Files mapped:[/dim]   {result.scanned_files} of {result.candidate_files}")
    console.print(f"[dim]Definitions:[/dim]    {result.total_definitions}")
    if result.diff_enabled:
        if result.diff_available:
            console.print(f"[dim]Changed defs:[/dim]   {result.changed_definitions}")
        else:
            console.print("[yellow]Diff unavailable; map has no change annotations.[/yellow]")
    console.print(f"[dim]Skipped:[/dim]        {len(result.skipped_files)}")
    console.print(f"[dim]Duration:[/dim]       {result.scan_duration_ms:.0f}ms")
    if result.cancelled:
        console.print("[yellow]Scan cancelled; the map is partial.[/yellow]")
