"""Configuration for packloader.

This module holds loader settings and the defaults used by discovery.
"""

from __future__ import annotations

from dataclasses import dataclass

from packloader.core.models import FileAccess


# File extensions treated as packages by discover_packages()
DEFAULT_EXTENSIONS = (".upk", ".u", ".umap", ".utx", ".usx", ".ukx", ".uax")


@dataclass(frozen=True, slots=True)
class LoaderConfig:
    """Settings shared by the registries and path loads of a PackageLoader.

    Attributes:
        case_sensitive_keys: If True (default), cache keys must match exactly.
            Set to False for packages coming from case-insensitive
            filesystems, where "Core.upk" and "core.upk" are one file.
        thread_safe: If True (default), lookup-or-load sequences take a
            per-key lock. Single-threaded callers may turn this off.
        access: Default access mode for path loads.

    Example:
        >>> from packloader import LoaderConfig, PackageLoader
        >>> config = LoaderConfig(case_sensitive_keys=False)
        >>> loader = PackageLoader.from_defaults(config=config)
    """

    case_sensitive_keys: bool = True
    thread_safe: bool = True
    access: FileAccess = FileAccess.READ


def normalize_extensions(extensions: list[str] | tuple[str, ...]) -> tuple[str, ...]:
    """Normalize extensions to lowercase with a leading dot.

    Args:
        extensions: Extensions such as "upk", ".UMAP".

    Returns:
        Tuple of normalized extensions, e.g. (".upk", ".umap").
    """
    normalized = []
    for ext in extensions:
        ext = ext.strip().lower()
        if not ext:
            continue
        normalized.append(ext if ext.startswith(".") else f".{ext}")
    return tuple(normalized)
