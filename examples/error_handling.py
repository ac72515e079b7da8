"""Error handling patterns with recovery hints.

This example demonstrates how to handle common errors and use
the recovery_hint property to provide actionable guidance.
"""

from packloader import (
    Package,
    PackageAccessError,
    PackageFormatError,
    PackageLoader,
    PackageNotFoundError,
    PackageStageError,
    PackloaderError,
    XorDecoder,
)


loader = PackageLoader.from_defaults()


# Pattern 1: Handle missing files
def load_optional(loader: PackageLoader, path: str) -> Package | None:
    """Load a package, returning None if the file doesn't exist."""
    try:
        return loader.load_cached_package(path)
    except PackageNotFoundError as e:
        print(f"Package file not found: {e.path}")
        print(f"Hint: {e.recovery_hint}")
        return None


# Pattern 2: Retry scrambled packages with a decoder
def load_maybe_scrambled(loader: PackageLoader, path: str, key: bytes) -> Package:
    """Load a package, retrying with an XOR decoder on format errors.

    Failed loads are never cached, so the retry parses from scratch.
    """
    try:
        return loader.load_cached_package(path)
    except PackageFormatError as e:
        print(f"Not a plain package: {e}")
        return loader.load_cached_package(path, decoder=XorDecoder(key))


# Pattern 3: Handle permission errors
def load_read_only(loader: PackageLoader, path: str) -> Package | None:
    """Load a package, handling permission errors gracefully."""
    try:
        return loader.load_full_package(path)
    except PackageAccessError as e:
        print(f"Access denied: {e.path}")
        print(f"Hint: {e.recovery_hint}")
        return None


# Pattern 4: Lifecycle errors
def initialize_cached(loader: PackageLoader, name: str) -> Package | None:
    """Initialize a package that was loaded through the general cache."""
    package = loader.get_from_cache(name)
    if package is None:
        return None
    try:
        loader.initialize_package(package)
    except PackageStageError as e:
        print(f"Cannot initialize: {e}")
        print(f"Hint: {e.recovery_hint}")
        return None
    return package


# Pattern 5: Catch-all for any packloader error
def safe_load(loader: PackageLoader, path: str) -> Package | None:
    """Load with comprehensive error handling."""
    try:
        return loader.load_cached_package(path)
    except PackloaderError as e:
        print(f"Error: {e}")
        if e.recovery_hint:
            print(f"Hint: {e.recovery_hint}")
        return None


if __name__ == "__main__":
    load_optional(loader, "./System/Missing.u")
    safe_load(loader, "./System/Core.u")
