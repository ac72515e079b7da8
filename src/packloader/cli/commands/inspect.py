"""Inspect command for CLI."""

from __future__ import annotations

import typer

from packloader.cli.formatting import _summary_lines
from packloader.cli.main import app, build_loader, exit_with_error, parse_decoder
from packloader.core.exceptions import PackloaderError
from packloader.core.formatting import format_size


@app.command()
def inspect(
    path: str = typer.Argument(..., help="Package file path or s3:// URI."),
    full: bool = typer.Option(
        False,
        "--full",
        "-f",
        help="Initialize the package and list its name table.",
    ),
    xor_key: str | None = typer.Option(
        None,
        "--xor-key",
        envvar="PACKLOADER_XOR_KEY",
        help="Hex key of an XOR-scrambled package.",
    ),
    deserializer: str | None = typer.Option(
        None,
        "--deserializer",
        "-d",
        envvar="PACKLOADER_DESERIALIZER",
        help="Custom deserializer as 'module:attribute'.",
    ),
) -> None:
    """Show the header of a single package."""
    loader = build_loader(deserializer)
    decoder = parse_decoder(xor_key)

    try:
        if full:
            package = loader.load_full_package(path, decoder=decoder)
        else:
            package = loader.load_package(path, decoder=decoder)
    except PackloaderError as e:
        exit_with_error(e)

    typer.echo(f"Package: {package.name}")
    typer.echo(f"  Path: {path}")
    typer.echo(f"  Stage: {package.stage.value}")
    typer.echo(f"  Size: {format_size(len(package.stream))}")
    if package.summary is not None:
        for line in _summary_lines(package.summary):
            typer.echo(line)

    if full:
        typer.echo(f"Name table ({len(package.names)}):")
        for index, name in enumerate(package.names):
            typer.echo(f"  [{index}] {name}")
