"""Port interfaces for hexagonal architecture.

Ports define contracts that adapters must implement. The core domain
depends only on these protocols, never on concrete implementations.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    from packloader.core.models import FileAccess, Package

ProgressCallback = Callable[[int, int], None]


@runtime_checkable
class BufferDecoder(Protocol):
    """Byte transform applied to stream reads (decryption, descrambling)."""

    def decode(self, data: bytes, position: int) -> bytes:
        """Decode a region of the raw buffer.

        Args:
            data: Raw bytes of the region.
            position: Stream offset of the first byte of data.

        Returns:
            The decoded bytes, same length as data.
        """
        ...


class NullDecoder:
    """A BufferDecoder that returns its input unchanged.

    Behaves like passing decoder=None; use it where an object is wanted.
    """

    def decode(self, data: bytes, position: int) -> bytes:  # noqa: ARG002
        """Return data as-is."""
        return data


@runtime_checkable
class StreamPort(Protocol):
    """Positional binary reads over an in-memory package buffer."""

    @property
    def name(self) -> str:
        """Name (usually the path) the stream was created with."""
        ...

    def __len__(self) -> int:
        """Total size of the buffer in bytes."""
        ...

    def tell(self) -> int:
        """Current read position."""
        ...

    def seek(self, offset: int) -> None:
        """Move the read position to an absolute offset."""
        ...

    def read(self, size: int) -> bytes:
        """Read size decoded bytes at the current position and advance.

        Raises:
            EOFError: If fewer than size bytes remain.
        """
        ...

    def read_at(self, offset: int, size: int) -> bytes:
        """Read size decoded bytes at offset without moving the position.

        Raises:
            EOFError: If the range runs past the end of the buffer.
        """
        ...


StreamFactory = Callable[[str, bytes, "BufferDecoder | None"], StreamPort]


@runtime_checkable
class ReaderPort(Protocol):
    """Raw file I/O: reads a whole package into memory."""

    def read(self, path: str, access: FileAccess) -> bytes:
        """Read the full contents of a package.

        Args:
            path: Local path or URI of the package.
            access: Access mode to open the package with.

        Returns:
            The raw bytes.

        Raises:
            PackageNotFoundError: If the path does not exist.
            PackageAccessError: If access is denied.
            PackageReadError: For other read failures.
        """
        ...


@runtime_checkable
class DeserializerPort(Protocol):
    """Turns a stream into the tables of a package and links them."""

    def deserialize(self, package: Package, stream: StreamPort) -> None:
        """Read the header tables of package from stream.

        Raises:
            PackageFormatError: If the stream is not a valid package.
        """
        ...

    def initialize(self, package: Package) -> None:
        """Resolve and link the object graph of a header-parsed package.

        Called at most once per package by the loader.

        Raises:
            PackageFormatError: If the tables cannot be resolved.
        """
        ...


@runtime_checkable
class ProgressReporter(Protocol):
    """Reports progress of a multi-package load to the user.

    The core domain uses this to report progress without depending
    on any specific UI library.
    """

    def start_task(self, name: str, total: int) -> ProgressCallback:
        """Start tracking a task.

        Args:
            name: Human-readable name for the task.
            total: Total number of steps.

        Returns:
            A ProgressCallback to call with (completed, total).
        """
        ...

    def finish_task(self, name: str) -> None:
        """Mark a task as complete.

        Args:
            name: The task name passed to start_task().
        """
        ...


class NullProgressReporter:
    """A ProgressReporter that produces no output.

    Used as the default when no progress reporting is desired.
    """

    def start_task(self, name: str, total: int) -> ProgressCallback:  # noqa: ARG002
        """Return a no-op callback."""
        return lambda _completed, _total: None

    def finish_task(self, name: str) -> None:
        """Do nothing."""
        _ = name  # Unused but required by protocol
