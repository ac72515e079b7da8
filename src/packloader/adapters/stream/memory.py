"""In-memory stream adapter implementing StreamPort."""

from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from packloader.core.ports import BufferDecoder


class MemoryStream:
    """Random-access reader over a package buffer.

    Reads go through the optional decoder, which receives the raw bytes
    of the region together with their stream offset.

    Attributes:
        name: Name (usually the path) the stream was created with.
        decoder: Decoder applied to reads, or None.
    """

    def __init__(
        self,
        name: str,
        buffer: bytes,
        decoder: BufferDecoder | None = None,
    ) -> None:
        """Initialize the stream.

        Args:
            name: Name the stream is tagged with.
            buffer: Raw bytes of the package.
            decoder: Optional decoder applied to reads.
        """
        self._name = name
        self._buffer = memoryview(bytes(buffer))
        self._position = 0
        self.decoder = decoder

    @property
    def name(self) -> str:
        """Name the stream was created with."""
        return self._name

    def __len__(self) -> int:
        return len(self._buffer)

    def __repr__(self) -> str:
        return f"MemoryStream(name={self._name!r}, size={len(self._buffer)})"

    def tell(self) -> int:
        """Current read position."""
        return self._position

    def seek(self, offset: int) -> None:
        """Move the read position to an absolute offset.

        Raises:
            ValueError: If offset is outside the buffer.
        """
        if not 0 <= offset <= len(self._buffer):
            raise ValueError(
                f"Seek to {offset} outside stream '{self._name}' "
                f"of {len(self._buffer)} bytes"
            )
        self._position = offset

    def read_at(self, offset: int, size: int) -> bytes:
        """Read size bytes at offset without moving the position.

        Raises:
            EOFError: If the range runs past the end of the buffer.
        """
        if size < 0 or offset < 0 or offset + size > len(self._buffer):
            raise EOFError(
                f"Read of {size} bytes at {offset} past end of stream "
                f"'{self._name}' ({len(self._buffer)} bytes)"
            )
        data = bytes(self._buffer[offset : offset + size])
        if self.decoder is not None:
            data = self.decoder.decode(data, offset)
        return data

    def read(self, size: int) -> bytes:
        """Read size bytes at the current position and advance.

        Raises:
            EOFError: If fewer than size bytes remain.
        """
        data = self.read_at(self._position, size)
        self._position += size
        return data
