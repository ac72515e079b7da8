"""Scan command for CLI."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from packloader.cli.formatting import _format_stage_with_color
from packloader.cli.main import app, build_loader, exit_with_error
from packloader.config import DEFAULT_EXTENSIONS
from packloader.core.exceptions import PackloaderError
from packloader.discovery import discover_packages, load_packages
from packloader.progress import RichProgressReporter


@app.command()
def scan(
    directory: Path = typer.Argument(..., help="Directory to search for packages."),
    ext: list[str] | None = typer.Option(
        None,
        "--ext",
        "-e",
        help="Package extension to include (repeatable). Defaults to common ones.",
    ),
    imports: bool = typer.Option(
        False,
        "--imports",
        help="Load through the import cache, initializing every package.",
    ),
    ignore_case: bool = typer.Option(
        False,
        "--ignore-case",
        envvar="PACKLOADER_IGNORE_CASE",
        help="Treat package names that differ only in case as the same package.",
    ),
    recursive: bool = typer.Option(
        True,
        "--recursive/--no-recursive",
        help="Search subdirectories.",
    ),
    deserializer: str | None = typer.Option(
        None,
        "--deserializer",
        "-d",
        envvar="PACKLOADER_DESERIALIZER",
        help="Custom deserializer as 'module:attribute'.",
    ),
) -> None:
    """Load every package under a directory and show how they deduplicate."""
    if not directory.is_dir():
        typer.echo(f"Error: Not a directory: {directory}", err=True)
        raise typer.Exit(1)

    paths = discover_packages(
        directory, tuple(ext) if ext else DEFAULT_EXTENSIONS, recursive=recursive
    )
    if not paths:
        typer.echo(f"No packages found in {directory}.")
        return

    loader = build_loader(deserializer, ignore_case=ignore_case)
    try:
        with RichProgressReporter(console=Console(stderr=True)) as progress:
            results = load_packages(loader, paths, imports=imports, progress=progress)
    except PackloaderError as e:
        exit_with_error(e)

    first_paths = {id(r.package): r.path for r in results if r.loaded}

    table = Table()
    table.add_column("Package")
    table.add_column("Path")
    table.add_column("Stage")
    table.add_column("Result")

    for result in results:
        if result.loaded:
            outcome = "loaded"
        else:
            first = first_paths.get(id(result.package))
            outcome = f"same key as {first.relative_to(directory)}" if first else "cached"
        table.add_row(
            result.package.name,
            str(result.path.relative_to(directory)),
            _format_stage_with_color(result.package.stage),
            outcome,
        )

    # Force terminal output to ensure tables render correctly in all environments
    console = Console(force_terminal=True)
    console.print(table)

    registry = loader.imports if imports else loader.cache
    typer.echo(f"{len(results)} file(s), {len(registry)} unique package(s)")
