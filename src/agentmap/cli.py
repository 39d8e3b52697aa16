"""agentmap CLI — Typer application with map, prompt and init commands."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from agentmap import __version__

app = typer.Typer(
    name="agentmap",
    help="Map a codebase's files and top-level definitions for AI agents.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)

NO_FILES_MESSAGE = """No files found with header comments.

To include a file in the map, add a comment at the top:

  // Description of this file.
  // What it does and why.

  export function main() { ... }

The description will appear in the 'description' field of the output.
"""

PROMPT_TEXT = """Look at the repository layout first. Note any clear boundaries:
- workspaces or packages in a monorepo
- separate services or apps
- different languages or toolchains

Process well-separated packages independently; they can be handled in parallel.

In each package, pick the files that matter most: entry points, core modules,
shared utilities and key abstractions.

Give each of those files a descriptive comment at the very top, before any
imports or code:
- 2-4 lines saying what the file does and why it exists
- the comment style of the language (// for JS/TS, # for Python, //! for Rust modules)
- say so when the file is an entry point (CLI, main, server start)
- if a top comment already exists, check it and rewrite it if it is out of date

Examples:

TypeScript/JavaScript:
// CLI entrypoint for the application.
// Parses command-line arguments and orchestrates the main workflow.

Python:
# Database connection manager.
# Handles connection pooling and provides transaction helpers.

Rust:
//! HTTP server module.
//! Entry point for the web API, configures routes and middleware.

When the comments are in place, run `agentmap map` and check that the files
appear in the generated map. Run this prompt again whenever the descriptions
drift from the code."""


def _config_error(message: str) -> typer.Exit:
    console.print(f"[bold red]Config error:[/bold red] {message}")
    return typer.Exit(code=2)


# ── map ───────────────────────────────────────────────────────────────────────


@app.command("map")
def map_command(
    directory: Path = typer.Argument(Path("."), help="Directory to map (default: current)"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write the map to a file"),
    ignore: Optional[List[str]] = typer.Option(None, "--ignore", "-i", help="Ignore pattern (repeatable)"),
    diff: bool = typer.Option(False, "--diff", "-d", help="Annotate definitions with git changes"),
    base: Optional[str] = typer.Option(None, "--base", help="Ref to diff against (default: HEAD)"),
    staged: bool = typer.Option(False, "--staged", help="Diff the index instead of the working tree"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: yaml | json"),
    max_defs: Optional[int] = typer.Option(None, "--max-defs", help="Definitions shown per file"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .agentmap.toml"),
    stats: bool = typer.Option(False, "--stats", help="Print a summary table to stderr"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
    debug: bool = typer.Option(False, "--debug", help="Debug logging with git commands and timing"),
) -> None:
    """Generate a map of DIRECTORY."""
    from agentmap.config.loader import ConfigError, load_config
    from agentmap.config.schema import OUTPUT_FORMATS
    from agentmap.logging_config import setup_logging
    from agentmap.output import json_report, terminal, yaml_report
    from agentmap.output.builder import build_map, root_name_for
    from agentmap.output.truncate import truncate_map
    from agentmap.scanner.engine import ScanError, scan_directory

    setup_logging(debug=debug or None, verbose=verbose)
    root = directory.resolve()
    if not root.is_dir():
        console.print(f"[bold red]Error:[/bold red] not a directory: {directory}")
        raise typer.Exit(code=2)

    # --- Load config ---
    try:
        cfg = load_config(root, config)
    except ConfigError as exc:
        raise _config_error(str(exc)) from exc

    # --- CLI overrides ---
    if format:
        if format not in OUTPUT_FORMATS:
            console.print(f"[bold red]Invalid format:[/bold red] {format}")
            raise typer.Exit(code=2)
        cfg.output.format = format  # type: ignore[assignment]
    if max_defs is not None:
        if max_defs < 1:
            console.print("[bold red]Invalid --max-defs:[/bold red] must be at least 1")
            raise typer.Exit(code=2)
        cfg.output.max_defs = max_defs
    if ignore:
        cfg.scan.ignore.extend(ignore)
    if diff or base or staged:
        cfg.diff.enabled = True
    if base:
        cfg.diff.base = base
    if staged:
        cfg.diff.staged = True

    # --- Run scan ---
    try:
        result = scan_directory(root, cfg)
    except ScanError as exc:
        console.print(f"[bold red]Scanner error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    if stats:
        terminal.render_summary(result, console)

    if not result.files:
        console.print(NO_FILES_MESSAGE)
        raise typer.Exit(code=0)

    # --- Output ---
    name = root_name_for(root)
    if cfg.output.format == "json":
        report_text = json_report.render(result, name, max_defs=cfg.output.max_defs)
    else:
        tree = truncate_map(build_map(result.files, name), cfg.output.max_defs)
        report_text = yaml_report.render(tree)

    if output:
        Path(output).write_text(report_text, encoding="utf-8")
        console.print(f"[dim]Wrote map to {output}[/dim]")
    else:
        typer.echo(report_text, nl=not report_text.endswith("\n"))


# ── prompt ────────────────────────────────────────────────────────────────────


@app.command()
def prompt() -> None:
    """Print a prompt that asks an AI agent to add file descriptions."""
    typer.echo(PROMPT_TEXT)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init(
    directory: Path = typer.Argument(Path("."), help="Where to create .agentmap.toml"),
) -> None:
    """Generate a starter .agentmap.toml."""
    from agentmap.config.defaults import DEFAULT_TOML
    from agentmap.config.loader import CONFIG_FILENAME

    config_path = directory / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"agentmap {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """agentmap — a compact map of a codebase for AI agents."""
