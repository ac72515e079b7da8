"""Raw package reader adapters."""

from packloader.adapters.readers.filesystem import FilesystemReader
from packloader.adapters.readers.router import RouterReader, create_router
from packloader.adapters.readers.s3 import S3Reader


__all__ = ["FilesystemReader", "RouterReader", "S3Reader", "create_router"]
