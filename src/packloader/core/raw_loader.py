"""Raw package loading: bytes in, header-parsed package out."""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from packloader.core.keys import derive_cache_key
from packloader.core.models import FileAccess, Package


if TYPE_CHECKING:
    from packloader.core.ports import (
        BufferDecoder,
        DeserializerPort,
        ReaderPort,
        StreamFactory,
    )


class RawLoader:
    """Builds a stream for a buffer and deserializes a package from it.

    RawLoader never consults or populates a registry. A package it returns
    is always HEADER_PARSED; if deserialization fails the exception
    propagates and no package is returned.
    """

    def __init__(
        self,
        deserializer: DeserializerPort,
        reader: ReaderPort,
        stream_factory: StreamFactory | None = None,
    ) -> None:
        if stream_factory is None:
            from packloader.adapters.stream import MemoryStream

            stream_factory = MemoryStream
        self._deserializer = deserializer
        self._reader = reader
        self._stream_factory = stream_factory

    def load_from_buffer(
        self,
        name: str,
        buffer: bytes,
        decoder: BufferDecoder | None = None,
    ) -> Package:
        """Deserialize a package from an in-memory buffer.

        Args:
            name: Name or path the stream is tagged with. The package name
                is its cache key.
            buffer: Raw package bytes.
            decoder: Optional decoder applied to stream reads.

        Returns:
            The HEADER_PARSED package.

        Raises:
            PackageFormatError: If the deserializer rejects the buffer.
        """
        stream = self._stream_factory(name, bytes(buffer), decoder)
        package = Package(
            name=derive_cache_key(name),
            stream=stream,
            decoder=decoder,
        )
        self._deserializer.deserialize(package, stream)
        package.mark_header_parsed()
        logger.debug("Parsed header of '{}' ({} bytes)", package.name, len(stream))
        return package

    def load_from_path(
        self,
        path: str,
        decoder: BufferDecoder | None = None,
        access: FileAccess = FileAccess.READ,
    ) -> Package:
        """Read a package from a path and deserialize it.

        Args:
            path: Local path or URI of the package.
            decoder: Optional decoder applied to stream reads.
            access: Access mode used to open the package.

        Returns:
            The HEADER_PARSED package.

        Raises:
            PackageNotFoundError: If the path does not exist.
            PackageAccessError: If access is denied.
            PackageReadError: For other read failures.
            PackageFormatError: If the deserializer rejects the bytes.
        """
        buffer = self._reader.read(path, access)
        logger.debug("Read {} bytes from {}", len(buffer), path)
        return self.load_from_buffer(path, buffer, decoder)
