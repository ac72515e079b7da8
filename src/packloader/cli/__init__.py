"""CLI for packloader."""

# Import commands to register them with the app
# These imports have side effects (registering commands with @app.command())
from packloader.cli.commands import inspect as _inspect_module  # noqa: F401
from packloader.cli.commands import scan as _scan_module  # noqa: F401
from packloader.cli.main import app, main


__all__ = ["app", "main"]
