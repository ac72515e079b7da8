"""Domain exceptions for packloader.

All library errors inherit from PackloaderError, allowing users to catch
any library exception with a single except clause. Each exception provides
a recovery_hint property with guidance on resolving the error.
"""

from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from packloader.core.models import PackageStage


class PackloaderError(Exception):
    """Base class for all packloader exceptions.

    Catch this to handle any error from the library.
    """

    @property
    def recovery_hint(self) -> str | None:
        """Optional guidance on how to resolve this error."""
        return None


class PackageReadError(PackloaderError):
    """Raised when the raw bytes of a package cannot be read.

    Attributes:
        path: The path or URI that could not be read.
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        path: str,
        cause: Exception | None = None,
    ) -> None:
        self.path = path
        self.cause = cause
        super().__init__(message)

    @property
    def recovery_hint(self) -> str:
        """Suggest checking the path or URI."""
        return f"Check the package path or URI: {self.path}"


class PackageNotFoundError(PackageReadError):
    """Raised when the package file or object doesn't exist."""

    @property
    def recovery_hint(self) -> str:
        """Suggest verifying the path."""
        return f"Verify the package path exists: {self.path}"


class PackageAccessError(PackageReadError):
    """Raised when access to the package is denied (permissions, credentials)."""

    @property
    def recovery_hint(self) -> str:
        """Suggest checking permissions."""
        return "Check file permissions or bucket credentials"


class PackageFormatError(PackloaderError):
    """Raised when a deserializer rejects the bytes of a package.

    Attributes:
        name: Name of the stream being deserialized.
        offset: Stream offset where parsing failed, if known.
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        name: str,
        offset: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.name = name
        self.offset = offset
        self.cause = cause
        super().__init__(message)

    @property
    def recovery_hint(self) -> str:
        """Suggest checking the file and its decoder."""
        if self.offset is not None:
            return (
                f"Check '{self.name}' near offset {self.offset}; "
                "an encrypted package needs its decoder"
            )
        return f"Check that '{self.name}' is a package and the right decoder is used"


class PackageStageError(PackloaderError):
    """Raised on an illegal lifecycle transition of a package.

    Attributes:
        name: The package name.
        current: The stage the package is in.
        expected: The stage the transition requires.
    """

    def __init__(
        self, name: str, current: PackageStage, expected: PackageStage
    ) -> None:
        self.name = name
        self.current = current
        self.expected = expected
        super().__init__(
            f"Package '{name}' is {current.value}, expected {expected.value}"
        )

    @property
    def recovery_hint(self) -> str:
        """Suggest loading the package through the loader."""
        return "Obtain packages from PackageLoader instead of building them directly"


class PackageCycleError(PackloaderError):
    """Raised when loading a package requests the same package again.

    This happens when a deserializer imports the package it is
    initializing, directly or through a chain of imports.

    Attributes:
        name: Cache key of the package being loaded.
        registry: Label of the registry the load went through.
    """

    def __init__(self, name: str, registry: str) -> None:
        self.name = name
        self.registry = registry
        super().__init__(
            f"Package '{name}' is already being loaded into {registry} "
            "by this thread (import cycle)"
        )

    @property
    def recovery_hint(self) -> str:
        """Suggest breaking the cycle."""
        return (
            f"Resolve imports of '{self.name}' lazily, or look it up with "
            "find() instead of loading it again"
        )


class ConfigurationError(PackloaderError):
    """Raised for configuration problems (invalid or missing settings)."""

    pass


class DeserializerLoadError(PackloaderError):
    """Raised when a deserializer import path cannot be resolved.

    Attributes:
        spec: The "module:attribute" string that failed to load.
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        spec: str,
        cause: Exception | None = None,
    ) -> None:
        self.spec = spec
        self.cause = cause
        super().__init__(message)

    @property
    def recovery_hint(self) -> str:
        """Suggest the expected import path format."""
        return f"Use 'package.module:Attribute' (got '{self.spec}')"
