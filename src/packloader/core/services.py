"""Core domain services for packloader."""

from typing import Any

from loguru import logger

from packloader.config import LoaderConfig
from packloader.core.models import FileAccess, Package, PackageStage
from packloader.core.ports import (
    BufferDecoder,
    DeserializerPort,
    ReaderPort,
    StreamFactory,
)
from packloader.core.raw_loader import RawLoader
from packloader.core.registry import PackageRegistry


class PackageLoader:
    """Orchestrates package loading with deduplicating caches.

    A loader owns two independent registries: the general cache, filled
    by load_cached_package(), and the import cache, filled by
    load_import_package() with initialized packages only. Registries live
    as long as the loader and are only emptied by clear_cache() and
    clear_imports().
    """

    def __init__(
        self,
        deserializer: DeserializerPort,
        reader: ReaderPort,
        stream_factory: StreamFactory | None = None,
        config: LoaderConfig | None = None,
    ) -> None:
        self._config = config or LoaderConfig()
        self._raw = RawLoader(deserializer, reader, stream_factory)
        self._deserializer = deserializer
        self._cache = PackageRegistry(
            "cache",
            case_sensitive=self._config.case_sensitive_keys,
            thread_safe=self._config.thread_safe,
        )
        self._imports = PackageRegistry(
            "imports",
            case_sensitive=self._config.case_sensitive_keys,
            thread_safe=self._config.thread_safe,
        )

    @classmethod
    def from_defaults(
        cls,
        deserializer: DeserializerPort | None = None,
        *,
        s3_client: Any | None = None,
        config: LoaderConfig | None = None,
    ) -> "PackageLoader":
        """Create a PackageLoader with the default adapters.

        Args:
            deserializer: Deserializer to use. Defaults to SummaryDeserializer.
            s3_client: Optional boto3 S3 client for s3:// paths.
            config: Loader settings.

        Returns:
            PackageLoader with RouterReader, MemoryStream and the deserializer.
        """
        from packloader.adapters.deserializers import SummaryDeserializer
        from packloader.adapters.readers import create_router
        from packloader.adapters.stream import MemoryStream

        return cls(
            deserializer=deserializer or SummaryDeserializer(),
            reader=create_router(s3_client=s3_client),
            stream_factory=MemoryStream,
            config=config,
        )

    @property
    def config(self) -> LoaderConfig:
        """Settings this loader was created with."""
        return self._config

    @property
    def cache(self) -> PackageRegistry:
        """The general cache."""
        return self._cache

    @property
    def imports(self) -> PackageRegistry:
        """The import cache."""
        return self._imports

    def load_package(
        self,
        source: str,
        buffer: bytes | None = None,
        *,
        decoder: BufferDecoder | None = None,
        access: FileAccess | None = None,
    ) -> Package:
        """Load a package without any caching.

        Called with a buffer, source is only the name the package is tagged
        with. Without one, source is a path and the bytes are read from it.

        Args:
            source: Package name or path.
            buffer: Optional raw bytes of the package.
            decoder: Optional decoder applied to stream reads.
            access: Access mode for path loads. Defaults to config.access.

        Returns:
            A new HEADER_PARSED package.

        Raises:
            PackageReadError: If the path cannot be read.
            PackageFormatError: If the bytes are not a valid package.
        """
        if buffer is not None:
            return self._raw.load_from_buffer(source, buffer, decoder)
        return self._raw.load_from_path(
            source, decoder, access or self._config.access
        )

    def load_cached_package(
        self,
        path: str,
        buffer: bytes | None = None,
        *,
        decoder: BufferDecoder | None = None,
    ) -> Package:
        """Load a package through the general cache.

        If a package with the same cache key is already cached it is
        returned unchanged: nothing is read or parsed, even when buffer
        holds different bytes. Keys ignore directories, so "/a/Foo.upk"
        and "/b/Foo.upk" resolve to the same package.

        Args:
            path: Path of the package; its cache key is the base filename.
            buffer: Optional raw bytes. If omitted they are read from path.
            decoder: Optional decoder applied to stream reads on a miss.

        Returns:
            The cached package (any stage) or a new HEADER_PARSED one.

        Raises:
            PackageReadError: If the path cannot be read on a miss.
            PackageFormatError: If the bytes are not a valid package.
        """
        return self._cache.get_or_load(
            path, lambda: self.load_package(path, buffer, decoder=decoder)
        )

    def load_import_package(self, path: str, buffer: bytes) -> Package:
        """Load an initialized package through the import cache.

        Packages in the import cache are always INITIALIZED, and each one
        has been initialized exactly once.

        Args:
            path: Path of the package; its cache key is the base filename.
            buffer: Raw bytes of the package.

        Returns:
            The cached or newly initialized package.

        Raises:
            PackageFormatError: If the bytes are not a valid package.
        """
        return self._imports.get_or_load(
            path,
            lambda: self.initialize_package(self._raw.load_from_buffer(path, buffer)),
        )

    def load_full_package(
        self,
        path: str,
        *,
        decoder: BufferDecoder | None = None,
        access: FileAccess | None = None,
    ) -> Package:
        """Read, parse and initialize a package, bypassing both caches.

        Every call reads the file again and returns a new package.

        Args:
            path: Path of the package.
            decoder: Optional decoder applied to stream reads.
            access: Access mode. Defaults to config.access.

        Returns:
            A new INITIALIZED package.

        Raises:
            PackageReadError: If the path cannot be read.
            PackageFormatError: If the bytes are not a valid package.
        """
        package = self.load_package(path, decoder=decoder, access=access)
        return self.initialize_package(package)

    def initialize_package(self, package: Package) -> Package:
        """Link the object graph of a header-parsed package.

        An already INITIALIZED package is returned as-is, so the
        deserializer's initialize step runs once per package.

        Args:
            package: A package obtained from this loader.

        Returns:
            The same package, now INITIALIZED.

        Raises:
            PackageStageError: If the package was never deserialized.
            PackageFormatError: If the tables cannot be resolved.
        """
        if package.stage is PackageStage.INITIALIZED:
            return package
        if package.stage is not PackageStage.HEADER_PARSED:
            # mark_initialized() raises the stage error before any work is done
            package.mark_initialized()

        self._deserializer.initialize(package)
        package.mark_initialized()
        logger.debug("Initialized '{}'", package.name)
        return package

    def get_from_cache(self, name: str) -> Package | None:
        """Look up a package in the general cache without loading.

        Args:
            name: Package name or path.

        Returns:
            The cached package, or None if it has not been loaded.
        """
        return self._cache.find(name)

    def get_imported_packages(self) -> list[Package]:
        """Return the live list of imported packages, in insertion order.

        The list is the import cache itself, not a snapshot.
        """
        return self._imports.packages

    def clear_cache(self) -> int:
        """Empty the general cache.

        Returns:
            Number of packages removed.
        """
        return self._cache.clear()

    def clear_imports(self) -> int:
        """Empty the import cache.

        Returns:
            Number of packages removed.
        """
        return self._imports.clear()
