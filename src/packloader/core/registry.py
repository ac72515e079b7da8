"""Ordered, key-deduplicated registry of loaded packages."""

from __future__ import annotations

import contextlib
import threading
import weakref
from typing import TYPE_CHECKING

from loguru import logger

from packloader.core.exceptions import PackageCycleError
from packloader.core.keys import derive_cache_key, normalize_key


if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from contextlib import AbstractContextManager

    from packloader.core.models import Package


class PackageRegistry:
    """In-memory store of packages keyed by package name.

    Entries keep insertion order and are never evicted or replaced: the
    first package stored under a key wins. The registry only grows until
    its owner calls clear().

    Lookup-or-load sequences run under a per-key lock so that concurrent
    requests for one key load it once. Requests for different keys do
    not block each other. A lock lives only while some thread holds a
    reference to it, so keys that were never stored leave nothing behind.
    A thread that asks for a key it is already loading gets
    PackageCycleError instead of waiting on itself.

    Attributes:
        label: Name used in log messages ("cache", "imports").
    """

    def __init__(
        self,
        label: str,
        *,
        case_sensitive: bool = True,
        thread_safe: bool = True,
    ) -> None:
        """Initialize an empty registry.

        Args:
            label: Name used in log messages.
            case_sensitive: If False, keys match case-insensitively.
            thread_safe: If False, get_or_load() takes no locks.
        """
        self.label = label
        self._case_sensitive = case_sensitive
        self._thread_safe = thread_safe
        self._packages: list[Package] = []
        self._guard = threading.Lock()
        self._key_locks: weakref.WeakValueDictionary[str, threading.Lock] = (
            weakref.WeakValueDictionary()
        )
        self._local = threading.local()
        self._hits = 0
        self._misses = 0

    def _normalize(self, key: str) -> str:
        return normalize_key(key, case_sensitive=self._case_sensitive)

    def _lock_for(self, key: str) -> AbstractContextManager[object]:
        """Get the lock guarding loads of key."""
        if not self._thread_safe:
            return contextlib.nullcontext()
        with self._guard:
            lock = self._key_locks.get(key)
            if lock is None:
                lock = self._key_locks[key] = threading.Lock()
            return lock

    def _loading(self) -> set[str]:
        """Keys this thread is currently loading."""
        keys: set[str] | None = getattr(self._local, "keys", None)
        if keys is None:
            keys = self._local.keys = set()
        return keys

    def _store(self, key: str, package: Package) -> Package:
        """Append package unless key was stored meanwhile; return the winner."""
        with self._guard:
            existing = self._find_key(key)
            if existing is not None:
                return existing
            self._packages.append(package)
        logger.debug("{}: stored '{}'", self.label, package.name)
        return package

    @property
    def packages(self) -> list[Package]:
        """The live list of stored packages, in insertion order.

        This is not a copy: changes made to it are seen by the registry.
        """
        return self._packages

    def find(self, name: str) -> Package | None:
        """Look up a package by name or path without loading anything.

        Args:
            name: Package name, or any path whose cache key is the name.

        Returns:
            The stored package, or None if the key is not present.
        """
        return self._find_key(self._normalize(derive_cache_key(name)))

    def _find_key(self, key: str) -> Package | None:
        for package in self._packages:
            if self._normalize(package.name) == key:
                return package
        return None

    def add(self, package: Package) -> Package:
        """Store a package unless its key is already present.

        Args:
            package: The package to store.

        Returns:
            The package now stored under the key: package itself, or the
            earlier package if the key was taken.
        """
        return self._store(self._normalize(package.name), package)

    def get_or_load(self, path: str, load: Callable[[], Package]) -> Package:
        """Return the package stored for path's key, loading it on a miss.

        load() runs at most once per key at a time. It is only stored after
        it returns; if it raises, the registry is left untouched and the
        exception propagates. If the key was stored while load() ran (after
        a clear()), the stored package wins and the new one is dropped.

        Args:
            path: Path, URI or name of the package.
            load: Callable producing the package on a cache miss.

        Returns:
            The stored or newly loaded package.

        Raises:
            PackageCycleError: If this thread is already loading the key.
        """
        key = self._normalize(derive_cache_key(path))

        package = self._find_key(key)
        if package is not None:
            self._hits += 1
            logger.debug("{}: hit '{}'", self.label, key)
            return package

        loading = self._loading()
        if key in loading:
            raise PackageCycleError(key, self.label)

        with self._lock_for(key):
            # Another thread may have stored it while we waited
            package = self._find_key(key)
            if package is not None:
                self._hits += 1
                logger.debug("{}: hit '{}' after wait", self.label, key)
                return package

            self._misses += 1
            logger.debug("{}: miss '{}', loading {}", self.label, key, path)
            loading.add(key)
            try:
                package = load()
            finally:
                loading.discard(key)
            return self._store(key, package)

    def clear(self) -> int:
        """Remove all packages.

        Returns:
            Number of packages removed.
        """
        with self._guard:
            count = len(self._packages)
            self._packages.clear()
        logger.debug("{}: cleared {} package(s)", self.label, count)
        return count

    def keys(self) -> list[str]:
        """List the names of all stored packages, in insertion order."""
        return [package.name for package in self._packages]

    def statistics(self) -> dict[str, int]:
        """Get registry statistics.

        Returns:
            Dictionary with 'entries', 'hits' and 'misses'.
        """
        return {
            "entries": len(self._packages),
            "hits": self._hits,
            "misses": self._misses,
        }

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.find(name) is not None

    def __iter__(self) -> Iterator[Package]:
        return iter(list(self._packages))

    def __len__(self) -> int:
        return len(self._packages)
