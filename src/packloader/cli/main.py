"""CLI application and shared helpers for packloader commands."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, NoReturn

import typer
from loguru import logger

from packloader.core.exceptions import DeserializerLoadError


if TYPE_CHECKING:
    from packloader import PackageLoader
    from packloader.core.exceptions import PackloaderError
    from packloader.core.ports import BufferDecoder


app = typer.Typer(
    name="packloader",
    help="Inspect and bulk-load binary packages with deduplicating caches.",
    no_args_is_help=True,
)

LOG_FORMAT = "<level>{level: <8}</level> <cyan>{name}</cyan> {message}"


def configure_logging(level: str = "DEBUG") -> None:
    """Send packloader log messages to stderr.

    Args:
        level: Minimum loguru level to show.
    """
    logger.remove()
    logger.add(sys.stderr, level=level, format=LOG_FORMAT)
    logger.enable("packloader")


@app.callback()
def callback(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log cache hits, misses and loads to stderr.",
    ),
) -> None:
    """Inspect and bulk-load binary packages with deduplicating caches."""
    if verbose:
        configure_logging()


def exit_with_error(error: PackloaderError) -> NoReturn:
    """Print a library error and its recovery hint, then exit with code 1."""
    typer.echo(f"Error: {error}", err=True)
    if error.recovery_hint:
        typer.echo(f"Hint: {error.recovery_hint}", err=True)
    raise typer.Exit(1)


def build_loader(
    deserializer: str | None = None,
    *,
    ignore_case: bool = False,
) -> PackageLoader:
    """Create the loader used by CLI commands.

    Args:
        deserializer: Optional "module:attribute" of a custom deserializer.
        ignore_case: If True, cache keys match case-insensitively.

    Returns:
        PackageLoader with default adapters.

    Raises:
        typer.Exit: If the deserializer cannot be loaded.
    """
    from packloader import LoaderConfig, PackageLoader
    from packloader.discovery import load_deserializer

    try:
        custom = load_deserializer(deserializer) if deserializer else None
    except DeserializerLoadError as e:
        exit_with_error(e)

    config = LoaderConfig(case_sensitive_keys=not ignore_case)
    return PackageLoader.from_defaults(custom, config=config)


def parse_decoder(xor_key: str | None) -> BufferDecoder | None:
    """Build the decoder selected on the command line.

    Args:
        xor_key: Hex XOR key, or None for no decoder.

    Returns:
        An XorDecoder, or None.

    Raises:
        typer.Exit: If the key is not valid hex.
    """
    if not xor_key:
        return None

    from packloader.adapters.decoders import XorDecoder

    try:
        return XorDecoder.from_hex(xor_key)
    except ValueError:
        typer.echo(f"Error: Invalid XOR key '{xor_key}' (expected hex).", err=True)
        raise typer.Exit(1) from None


def main() -> None:
    """Entry point for the CLI."""
    app()
