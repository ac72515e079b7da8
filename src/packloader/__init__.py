"""packloader - A deduplicating loader and cache for binary packages.

This library loads binary package files (from disk, S3 or memory) into
Package objects and makes sure repeated requests for the same package
reuse the first load instead of reading and parsing it again.

Example:
    >>> from packloader import PackageLoader
    >>> loader = PackageLoader.from_defaults()
    >>> core = loader.load_cached_package("/games/ut/System/Core.u")
    >>> loader.load_cached_package("/games/ut/System/Core.u") is core
    True
"""

from loguru import logger

from packloader.adapters.decoders import NullDecoder, XorDecoder
from packloader.adapters.deserializers import PACKAGE_SIGNATURE, SummaryDeserializer
from packloader.adapters.readers import (
    FilesystemReader,
    RouterReader,
    S3Reader,
    create_router,
)
from packloader.adapters.stream import MemoryStream
from packloader.config import LoaderConfig
from packloader.core.exceptions import (
    ConfigurationError,
    DeserializerLoadError,
    PackageAccessError,
    PackageCycleError,
    PackageFormatError,
    PackageNotFoundError,
    PackageReadError,
    PackageStageError,
    PackloaderError,
)
from packloader.core.keys import derive_cache_key
from packloader.core.models import FileAccess, Package, PackageStage, PackageSummary
from packloader.core.ports import (
    BufferDecoder,
    DeserializerPort,
    NullProgressReporter,
    ProgressCallback,
    ProgressReporter,
    ReaderPort,
    StreamPort,
)
from packloader.core.raw_loader import RawLoader
from packloader.core.registry import PackageRegistry
from packloader.core.services import PackageLoader
from packloader.discovery import discover_packages, load_deserializer, load_packages
from packloader.progress import RichProgressReporter


# Silent unless the application opts in with logger.enable("packloader")
logger.disable("packloader")

__version__ = "0.1.0"

__all__ = [
    "PACKAGE_SIGNATURE",
    "BufferDecoder",
    "ConfigurationError",
    "DeserializerLoadError",
    "DeserializerPort",
    "FileAccess",
    "FilesystemReader",
    "LoaderConfig",
    "MemoryStream",
    "NullDecoder",
    "NullProgressReporter",
    "Package",
    "PackageAccessError",
    "PackageCycleError",
    "PackageFormatError",
    "PackageLoader",
    "PackageNotFoundError",
    "PackageReadError",
    "PackageRegistry",
    "PackageStage",
    "PackageStageError",
    "PackageSummary",
    "PackloaderError",
    "ProgressCallback",
    "ProgressReporter",
    "RawLoader",
    "ReaderPort",
    "RichProgressReporter",
    "RouterReader",
    "S3Reader",
    "StreamPort",
    "SummaryDeserializer",
    "XorDecoder",
    "__version__",
    "create_router",
    "derive_cache_key",
    "discover_packages",
    "load_deserializer",
    "load_packages",
]
