"""Pure utility functions for cache key derivation.

These functions contain no I/O and are safe to use in the core domain.
"""

from __future__ import annotations

from pathlib import PurePosixPath


def derive_cache_key(path: str) -> str:
    """Derive the cache key of a package from its path, URI or name.

    The key is the base filename without directory and without its last
    extension. Packages in different directories with the same filename
    share a key.

    Args:
        path: A local path, a URI, or a bare package name.

    Returns:
        The cache key.

    Examples:
        >>> derive_cache_key("/games/a/Core.upk")
        'Core'
        >>> derive_cache_key("s3://bucket/maps/Level01.umap")
        'Level01'
        >>> derive_cache_key("C:\\\\Game\\\\Engine.u")
        'Engine'
        >>> derive_cache_key("Core")
        'Core'
    """
    # Windows separators are folded so keys don't depend on the host OS
    return PurePosixPath(path.replace("\\", "/")).stem


def normalize_key(key: str, *, case_sensitive: bool = True) -> str:
    """Normalize a cache key for comparison.

    Args:
        key: A cache key as returned by derive_cache_key().
        case_sensitive: If False, keys are compared case-insensitively.

    Returns:
        The key to compare with.
    """
    return key if case_sensitive else key.casefold()
