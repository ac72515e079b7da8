"""Pytest configuration and shared fixtures.

This module registers custom markers for CI job separation and provides
shared fixtures for the test suite: a builder for valid package bytes and
counting wrappers around the default reader and deserializer.
"""

from __future__ import annotations

import struct
from collections import Counter
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

from packloader.adapters.deserializers import PACKAGE_SIGNATURE, SummaryDeserializer
from packloader.adapters.readers import FilesystemReader
from packloader.core.models import FileAccess, Package
from packloader.core.ports import StreamPort


PackageBuilder = Callable[..., bytes]


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "core: Core models, ports, registry and loader")
    config.addinivalue_line("markers", "reader: Reader adapters (filesystem, s3)")
    config.addinivalue_line("markers", "stream: Stream, decoder and deserializer adapters")
    config.addinivalue_line("markers", "progress: Rich progress integration")
    config.addinivalue_line("markers", "cli: CLI tests")
    config.addinivalue_line(
        "markers",
        "tier: Test tier for CI job separation (0=instant, 1=fast, 2=standard, 3=slow)",
    )


def _fstring(value: str) -> bytes:
    if not value:
        return struct.pack("<i", 0)
    raw = value.encode("latin-1") + b"\x00"
    return struct.pack("<i", len(raw)) + raw


def build_package_bytes(
    names: Sequence[str] = ("Core", "Object"),
    *,
    folder: str = "None",
    file_version: int = 868,
    licensee_version: int = 0,
    package_flags: int = 0x0001,
    export_count: int = 0,
    import_count: int = 0,
) -> bytes:
    """Build a valid package: summary followed by the name table."""
    folder_bytes = _fstring(folder)
    summary_size = 4 + 2 + 2 + 4 + len(folder_bytes) + 4 + 6 * 4
    name_table = b"".join(_fstring(name) + struct.pack("<Q", 0) for name in names)
    total = summary_size + len(name_table)
    # Export/import tables are not parsed; point them at the name table
    table_offset = summary_size if names else 0

    return (
        struct.pack("<IHHi", PACKAGE_SIGNATURE, file_version, licensee_version, total)
        + folder_bytes
        + struct.pack("<I", package_flags)
        + struct.pack(
            "<6i",
            len(names),
            table_offset,
            export_count,
            table_offset if export_count else 0,
            import_count,
            table_offset if import_count else 0,
        )
        + name_table
    )


class CountingDeserializer(SummaryDeserializer):
    """SummaryDeserializer that counts calls per package name."""

    def __init__(self) -> None:
        self.deserialized: Counter[str] = Counter()
        self.initialized: Counter[str] = Counter()

    def deserialize(self, package: Package, stream: StreamPort) -> None:
        self.deserialized[package.name] += 1
        super().deserialize(package, stream)

    def initialize(self, package: Package) -> None:
        self.initialized[package.name] += 1
        super().initialize(package)


class CountingReader(FilesystemReader):
    """FilesystemReader that counts reads per path."""

    def __init__(self) -> None:
        self.reads: Counter[str] = Counter()

    def read(self, path: str, access: FileAccess = FileAccess.READ) -> bytes:
        self.reads[path] += 1
        return super().read(path, access)


@pytest.fixture
def package_bytes() -> PackageBuilder:
    """Builder for valid package bytes.

    Call with the names of the name table and summary overrides.
    """
    return build_package_bytes


@pytest.fixture
def deserializer() -> CountingDeserializer:
    """Deserializer that records how often each package is parsed."""
    return CountingDeserializer()


@pytest.fixture
def reader() -> CountingReader:
    """Filesystem reader that records how often each path is read."""
    return CountingReader()


@pytest.fixture
def write_package(tmp_path: Path) -> Callable[..., Path]:
    """Write a valid package file under tmp_path and return its path.

    Usage: write_package("a/Core.upk", names=["Core"]).
    """

    def _write(relative: str, **kwargs: object) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(build_package_bytes(**kwargs))  # type: ignore[arg-type]
        return path

    return _write
