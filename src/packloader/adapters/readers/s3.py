"""S3 reader adapter using boto3."""

from __future__ import annotations

from typing import TYPE_CHECKING

import boto3
from botocore.exceptions import ClientError

from packloader.core.exceptions import (
    PackageAccessError,
    PackageNotFoundError,
    PackageReadError,
)
from packloader.core.models import FileAccess


if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client


_NOT_FOUND_CODES = frozenset({"404", "NoSuchKey", "NoSuchBucket"})
_ACCESS_DENIED_CODES = frozenset({"403", "AccessDenied"})


class S3Reader:
    """Reader adapter for packages stored in S3.

    Implements ReaderPort for s3://bucket/key URIs. Objects are always
    fetched read-only; the access mode is accepted for protocol
    compatibility.
    """

    def __init__(self, client: S3Client | None = None) -> None:
        """Initialize S3 reader.

        Args:
            client: Optional boto3 S3 client. If not provided, a default
                client is created on first read.
        """
        self._client = client

    @property
    def client(self) -> S3Client:
        """The boto3 client, created on first use."""
        if self._client is None:
            self._client = boto3.client("s3")
        return self._client

    def read(self, path: str, access: FileAccess = FileAccess.READ) -> bytes:  # noqa: ARG002
        """Download an object into memory.

        Args:
            path: S3 URI (s3://bucket/key).
            access: Ignored; objects are read-only.

        Returns:
            The object contents.

        Raises:
            PackageNotFoundError: If the object or bucket does not exist.
            PackageAccessError: If access is denied.
            PackageReadError: For other S3 errors or a malformed URI.
        """
        bucket, key = self._parse_s3_uri(path)
        try:
            response = self.client.get_object(Bucket=bucket, Key=key)
        except ClientError as e:
            raise self._translate_client_error(e, path) from e
        return response["Body"].read()

    def _parse_s3_uri(self, uri: str) -> tuple[str, str]:
        """Split s3://bucket/key into (bucket, key).

        Raises:
            PackageReadError: If uri is not an S3 URI or names no key.
        """
        if not uri.startswith("s3://"):
            raise PackageReadError(f"Invalid S3 URI: {uri}", path=uri)
        bucket, _, key = uri[len("s3://") :].partition("/")
        if not bucket or not key:
            raise PackageReadError(
                f"Invalid S3 URI (expected s3://bucket/key): {uri}", path=uri
            )
        return bucket, key

    def _translate_client_error(
        self, error: ClientError, path: str
    ) -> PackageReadError:
        """Map a botocore error code to the matching PackageReadError."""
        code = error.response.get("Error", {}).get("Code", "")

        if code in _NOT_FOUND_CODES:
            return PackageNotFoundError(f"Object not found: {path}", path, error)
        if code in _ACCESS_DENIED_CODES:
            return PackageAccessError(f"Access denied: {path}", path, error)
        return PackageReadError(f"S3 error ({code}): {error}", path, error)
