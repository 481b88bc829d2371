"""Durable blob storage used by the scoped config store."""

from .file import DEFAULT_FILE_MODE, FileBlobStore
from .models import BlobReadError, BlobStoreError, BlobWriteError
from .protocol import BlobStore

__all__ = [
    "DEFAULT_FILE_MODE",
    "BlobReadError",
    "BlobStore",
    "BlobStoreError",
    "BlobWriteError",
    "FileBlobStore",
]
