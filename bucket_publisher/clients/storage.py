"""
Storage client interface used by the publish engine.
"""
from abc import ABC, abstractmethod
from typing import BinaryIO, List


class S3Object:
    """Represents an S3 object with metadata."""

    def __init__(self, key: str, size: int = 0, last_modified=None, etag: str = '',
                 storage_class: str = 'STANDARD'):
        self.key = key
        self.size = size
        self.last_modified = last_modified
        self.etag = etag
        self.storage_class = storage_class

    def __repr__(self):
        return f"S3Object(key={self.key!r}, size={self.size})"


class StorageClient(ABC):
    """
    The three bucket operations the engine needs.

    Implementations raise on failure; retrying is the caller's job.
    """

    @abstractmethod
    def put_object(self, bucket: str, key: str, body: BinaryIO) -> None:
        """Store the stream content under key."""

    @abstractmethod
    def list_objects(self, bucket: str, prefix: str) -> List[S3Object]:
        """Return every object whose key starts with prefix, in listing order."""

    @abstractmethod
    def delete_object(self, bucket: str, key: str) -> None:
        """Remove the object stored under key."""
