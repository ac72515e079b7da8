"""Filesystem reader adapter for local package files."""

from __future__ import annotations

from pathlib import Path

from packloader.core.exceptions import (
    PackageAccessError,
    PackageNotFoundError,
    PackageReadError,
)
from packloader.core.models import FileAccess


class FilesystemReader:
    """Reader adapter for local filesystem paths.

    Implements ReaderPort. READ opens files read-only; READ_WRITE opens
    them for update, so a file the process cannot write fails with
    PackageAccessError.
    """

    def read(self, path: str, access: FileAccess = FileAccess.READ) -> bytes:
        """Read a whole file into memory.

        Args:
            path: Path to the file (absolute or relative).
            access: Access mode to open the file with.

        Returns:
            The file contents.

        Raises:
            PackageNotFoundError: If the file does not exist.
            PackageAccessError: If permission is denied.
            PackageReadError: If the path is a directory or cannot be read.
        """
        mode = "rb" if access is FileAccess.READ else "r+b"
        try:
            with Path(path).open(mode) as f:
                return f.read()
        except FileNotFoundError as e:
            raise PackageNotFoundError(
                f"File not found: {path}",
                path=path,
                cause=e,
            ) from e
        except PermissionError as e:
            raise PackageAccessError(
                f"Permission denied: {path}",
                path=path,
                cause=e,
            ) from e
        except OSError as e:
            raise PackageReadError(
                f"Could not read {path}: {e.strerror or e}",
                path=path,
                cause=e,
            ) from e
