"""Reference deserializer for the package summary and name table.

Layout (little-endian)::

    u32  tag                 0x9E2A83C1
    u16  file_version
    u16  licensee_version
    i32  header_size
    str  folder_name
    u32  package_flags
    i32  name_count,   i32 name_offset
    i32  export_count, i32 export_offset
    i32  import_count, i32 import_offset

``str`` is an i32 byte length that includes a trailing NUL, followed by
the bytes; a length of 0 is the empty string. Each name table entry is a
``str`` followed by u64 flags.
"""

from __future__ import annotations

import struct
from typing import TYPE_CHECKING

from loguru import logger

from packloader.core.exceptions import PackageFormatError
from packloader.core.models import PackageSummary


if TYPE_CHECKING:
    from packloader.core.models import Package
    from packloader.core.ports import StreamPort


PACKAGE_SIGNATURE = 0x9E2A83C1

# Longest string accepted in a header, guards against garbage lengths
_MAX_STRING_LENGTH = 1024

_UINT16 = struct.Struct("<H")
_UINT32 = struct.Struct("<I")
_INT32 = struct.Struct("<i")
_UINT64 = struct.Struct("<Q")


class SummaryDeserializer:
    """Deserializer reading the package summary and name table.

    Implements DeserializerPort. deserialize() reads the summary into
    package.summary; initialize() reads the name table into package.names.
    Export and import tables are located but not parsed.
    """

    def deserialize(self, package: Package, stream: StreamPort) -> None:
        """Read the summary of package from stream.

        Raises:
            PackageFormatError: If the signature is wrong or the summary is
                truncated or inconsistent.
        """
        stream.seek(0)
        try:
            tag = _read(stream, _UINT32)
            if tag != PACKAGE_SIGNATURE:
                raise PackageFormatError(
                    f"'{stream.name}' is not a package (signature 0x{tag:08X})",
                    name=stream.name,
                    offset=0,
                )
            file_version = _read(stream, _UINT16)
            licensee_version = _read(stream, _UINT16)
            header_size = _read(stream, _INT32)
            folder_name = _read_string(stream)
            package_flags = _read(stream, _UINT32)
            tables = [_read(stream, _INT32) for _ in range(6)]
        except EOFError as e:
            raise PackageFormatError(
                f"Summary of '{stream.name}' is truncated",
                name=stream.name,
                offset=stream.tell(),
                cause=e,
            ) from e

        (
            name_count,
            name_offset,
            export_count,
            export_offset,
            import_count,
            import_offset,
        ) = tables
        for label, count, offset in (
            ("name", name_count, name_offset),
            ("export", export_count, export_offset),
            ("import", import_count, import_offset),
        ):
            if count < 0 or offset < 0 or (count and offset >= len(stream)):
                raise PackageFormatError(
                    f"Invalid {label} table in '{stream.name}' "
                    f"(count={count}, offset={offset})",
                    name=stream.name,
                    offset=offset,
                )

        package.summary = PackageSummary(
            file_version=file_version,
            licensee_version=licensee_version,
            header_size=header_size,
            folder_name=folder_name,
            package_flags=package_flags,
            name_count=name_count,
            name_offset=name_offset,
            export_count=export_count,
            export_offset=export_offset,
            import_count=import_count,
            import_offset=import_offset,
        )
        logger.trace(
            "'{}': version {}/{}, {} names, {} exports, {} imports",
            package.name,
            file_version,
            licensee_version,
            name_count,
            export_count,
            import_count,
        )

    def initialize(self, package: Package) -> None:
        """Read the name table of a header-parsed package.

        Raises:
            PackageFormatError: If the package has no summary or the name
                table is truncated.
        """
        summary = package.summary
        stream = package.stream
        if summary is None:
            raise PackageFormatError(
                f"Package '{package.name}' has no summary",
                name=stream.name,
            )

        names: list[str] = []
        if summary.name_count:
            stream.seek(summary.name_offset)
        try:
            for _ in range(summary.name_count):
                names.append(_read_string(stream))
                _read(stream, _UINT64)  # flags
        except EOFError as e:
            raise PackageFormatError(
                f"Name table of '{stream.name}' is truncated "
                f"after {len(names)} of {summary.name_count} names",
                name=stream.name,
                offset=stream.tell(),
                cause=e,
            ) from e

        package.names = tuple(names)
        logger.trace("'{}': read {} names", package.name, len(names))


def _read(stream: StreamPort, fmt: struct.Struct) -> int:
    return fmt.unpack(stream.read(fmt.size))[0]


def _read_string(stream: StreamPort) -> str:
    offset = stream.tell()
    length = _read(stream, _INT32)
    if length == 0:
        return ""
    if not 0 < length <= _MAX_STRING_LENGTH:
        raise PackageFormatError(
            f"Invalid string length {length} in '{stream.name}'",
            name=stream.name,
            offset=offset,
        )
    raw = stream.read(length)
    return raw.removesuffix(b"\x00").decode("latin-1")
