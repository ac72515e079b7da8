"""RouterReader composite adapter for URI scheme-based routing."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from packloader.core.exceptions import ConfigurationError
from packloader.core.models import FileAccess


if TYPE_CHECKING:
    from packloader.core.ports import ReaderPort


FILE_PREFIX = "file://"


def parse_uri_scheme(uri: str) -> str | None:
    """Return the lowercased scheme of a URI, or None for plain paths.

    Single letters before "://" are Windows drives, not schemes.
    """
    scheme, sep, _ = uri.partition("://")
    if sep and len(scheme) > 1:
        return scheme.lower()
    return None


def strip_file_scheme(uri: str) -> str:
    """Turn a file:// URI into a plain path; other strings pass through."""
    return uri[len(FILE_PREFIX) :] if uri.startswith(FILE_PREFIX) else uri


class RouterReader:
    """Reader that picks a backend per path from its URI scheme.

    Implements ReaderPort. The None key of backends handles paths without
    a scheme; the "file" backend receives paths with file:// removed.
    """

    def __init__(self, backends: dict[str | None, ReaderPort]) -> None:
        self._backends = backends

    def resolve(self, uri: str) -> tuple[ReaderPort, str]:
        """Find the backend for uri and the path to hand it.

        Raises:
            ConfigurationError: If no backend handles the scheme.
        """
        scheme = parse_uri_scheme(uri)
        backend = self._backends.get(scheme)
        if backend is None:
            where = f"scheme '{scheme}'" if scheme else "local paths"
            raise ConfigurationError(f"No reader registered for {where}: {uri}")
        return backend, strip_file_scheme(uri) if scheme == "file" else uri

    def read(self, path: str, access: FileAccess = FileAccess.READ) -> bytes:
        """Read a package through the backend for its scheme."""
        backend, resolved = self.resolve(path)
        return backend.read(resolved, access)


def create_router(s3_client: Any | None = None) -> RouterReader:
    """Create a RouterReader for local paths, file:// and s3:// URIs.

    Args:
        s3_client: Optional boto3 S3 client. If omitted, S3Reader creates
            one on its first read.
    """
    from packloader.adapters.readers import FilesystemReader, S3Reader

    local = FilesystemReader()
    return RouterReader({"s3": S3Reader(client=s3_client), "file": local, None: local})
