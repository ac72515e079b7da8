"""Core domain models for packloader.

These models are pure Python dataclasses with no I/O dependencies.
A Package is the in-process handle for one binary package file; its
contents are filled in by a deserializer, the core only tracks its stage.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from packloader.core.exceptions import PackageStageError


if TYPE_CHECKING:
    from packloader.core.ports import BufferDecoder, StreamPort


class PackageStage(Enum):
    """Lifecycle stage of a package."""

    UNLOADED = "unloaded"
    HEADER_PARSED = "header_parsed"
    INITIALIZED = "initialized"


class FileAccess(Enum):
    """Access mode used when reading a package from a path."""

    READ = "read"
    READ_WRITE = "read_write"


@dataclass(frozen=True, slots=True)
class PackageSummary:
    """Header summary of a package, as read by a deserializer.

    Attributes:
        file_version: Package file format version.
        licensee_version: Engine licensee version.
        header_size: Size in bytes of the package header.
        folder_name: Folder name recorded in the header.
        package_flags: Raw package flags.
        name_count: Number of entries in the name table.
        name_offset: Stream offset of the name table.
        export_count: Number of entries in the export table.
        export_offset: Stream offset of the export table.
        import_count: Number of entries in the import table.
        import_offset: Stream offset of the import table.
    """

    file_version: int
    licensee_version: int
    header_size: int
    folder_name: str
    package_flags: int
    name_count: int
    name_offset: int
    export_count: int
    export_offset: int
    import_count: int
    import_offset: int


@dataclass(eq=False, slots=True)
class Package:
    """A binary package bound to its stream.

    Packages compare by identity: two loads of the same file are two
    different packages unless a registry hands back the stored one.

    Attributes:
        name: Cache key of the package, derived from the stream name.
        stream: The stream the package was deserialized from.
        decoder: Optional decoder attached before deserialization.
        stage: Current lifecycle stage.
        summary: Header summary, set by the deserializer.
        names: Name table, set during initialization.

    Example:
        >>> package = loader.load_cached_package("/games/Core.upk")
        >>> package.name
        'Core'
        >>> package.stage
        <PackageStage.HEADER_PARSED: 'header_parsed'>
    """

    name: str
    stream: StreamPort = field(repr=False)
    decoder: BufferDecoder | None = field(default=None, repr=False)
    stage: PackageStage = PackageStage.UNLOADED
    summary: PackageSummary | None = field(default=None, repr=False)
    names: tuple[str, ...] = field(default=(), repr=False)

    def __post_init__(self) -> None:
        """Validate package fields after initialization."""
        if not self.name:
            raise ValueError("Package name cannot be empty")

    @property
    def is_initialized(self) -> bool:
        """True once the object graph has been linked."""
        return self.stage is PackageStage.INITIALIZED

    def mark_header_parsed(self) -> None:
        """Move from UNLOADED to HEADER_PARSED.

        Raises:
            PackageStageError: If the package is not UNLOADED.
        """
        self._transition(PackageStage.UNLOADED, PackageStage.HEADER_PARSED)

    def mark_initialized(self) -> None:
        """Move from HEADER_PARSED to INITIALIZED.

        Raises:
            PackageStageError: If the package is not HEADER_PARSED.
        """
        self._transition(PackageStage.HEADER_PARSED, PackageStage.INITIALIZED)

    def _transition(self, expected: PackageStage, target: PackageStage) -> None:
        if self.stage is not expected:
            raise PackageStageError(self.name, current=self.stage, expected=expected)
        self.stage = target
