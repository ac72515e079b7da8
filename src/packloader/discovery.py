"""Package discovery utilities.

Finds package files under a directory, loads them through a loader, and
resolves custom deserializers from import paths.
"""

from __future__ import annotations

import importlib
from pathlib import Path
from typing import TYPE_CHECKING, NamedTuple

from packloader.config import DEFAULT_EXTENSIONS, normalize_extensions
from packloader.core.exceptions import DeserializerLoadError
from packloader.core.ports import DeserializerPort, NullProgressReporter


if TYPE_CHECKING:
    from packloader.core.models import Package
    from packloader.core.ports import ProgressReporter
    from packloader.core.services import PackageLoader


class LoadedPackage(NamedTuple):
    """Result of loading one discovered file.

    Attributes:
        path: The file that was requested.
        package: The package the request resolved to.
        loaded: False when the key was already cached and path was not read.
    """

    path: Path
    package: Package
    loaded: bool


def discover_packages(
    root: Path,
    extensions: list[str] | tuple[str, ...] = DEFAULT_EXTENSIONS,
    *,
    recursive: bool = True,
) -> list[Path]:
    """Find package files under root.

    Args:
        root: Directory to search.
        extensions: File extensions to accept (case-insensitive).
        recursive: If True, search subdirectories too.

    Returns:
        Matching file paths, sorted.
    """
    if not root.is_dir():
        return []

    accepted = normalize_extensions(extensions)
    candidates = root.rglob("*") if recursive else root.iterdir()
    return sorted(
        p for p in candidates if p.is_file() and p.suffix.lower() in accepted
    )


def load_packages(
    loader: PackageLoader,
    paths: list[Path],
    *,
    imports: bool = False,
    progress: ProgressReporter | None = None,
) -> list[LoadedPackage]:
    """Load files one after another through the general or import cache.

    Files whose cache key is already taken resolve to the cached package
    and are not read.

    Args:
        loader: The loader whose caches are used.
        paths: Files to load.
        imports: If True, load through the import cache (initialized).
        progress: Optional progress reporter.

    Returns:
        One LoadedPackage per path, in order.

    Raises:
        PackageReadError: If a file cannot be read.
        PackageFormatError: If a file is not a valid package.
    """
    from packloader.adapters.readers import FilesystemReader

    reader = FilesystemReader()
    reporter = progress or NullProgressReporter()
    registry = loader.imports if imports else loader.cache
    task = "Loading packages"
    callback = reporter.start_task(task, len(paths))

    results: list[LoadedPackage] = []
    for done, path in enumerate(paths, 1):
        package = registry.find(str(path))
        loaded = package is None
        if package is None and imports:
            buffer = reader.read(str(path), loader.config.access)
            package = loader.load_import_package(str(path), buffer)
        elif package is None:
            package = loader.load_cached_package(str(path))
        results.append(LoadedPackage(path, package, loaded=loaded))
        callback(done, len(paths))

    reporter.finish_task(task)
    return results


def load_deserializer(spec: str) -> DeserializerPort:
    """Resolve a deserializer from a "module:attribute" import path.

    A class is instantiated without arguments; any other attribute is
    used as the deserializer itself.

    Args:
        spec: Import path such as "mygame.formats:PackageDeserializer".

    Returns:
        The deserializer.

    Raises:
        DeserializerLoadError: If the path cannot be imported or does not
            name a deserializer.
    """
    module_name, sep, attr = spec.partition(":")
    if not sep or not module_name or not attr:
        raise DeserializerLoadError(f"Invalid deserializer path '{spec}'", spec=spec)

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise DeserializerLoadError(
            f"Could not import module '{module_name}'", spec=spec, cause=e
        ) from e

    try:
        target = getattr(module, attr)
    except AttributeError as e:
        raise DeserializerLoadError(
            f"Module '{module_name}' has no attribute '{attr}'", spec=spec, cause=e
        ) from e

    deserializer = target() if isinstance(target, type) else target
    if not isinstance(deserializer, DeserializerPort):
        raise DeserializerLoadError(
            f"'{spec}' does not provide deserialize() and initialize()", spec=spec
        )
    return deserializer
