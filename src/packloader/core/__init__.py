"""Core domain module for packloader.

This module contains the package model, the registries, the loader
service and the port definitions. Apart from reading through a
ReaderPort it has no I/O and can be tested in isolation.
"""

from packloader.core.keys import derive_cache_key
from packloader.core.models import FileAccess, Package, PackageStage, PackageSummary
from packloader.core.ports import (
    BufferDecoder,
    DeserializerPort,
    ReaderPort,
    StreamPort,
)
from packloader.core.registry import PackageRegistry


__all__ = [
    "BufferDecoder",
    "DeserializerPort",
    "FileAccess",
    "Package",
    "PackageRegistry",
    "PackageStage",
    "PackageSummary",
    "ReaderPort",
    "StreamPort",
    "derive_cache_key",
]
