"""
Remote pruner: purges every object under a key prefix.
"""
from typing import List
from loguru import logger

from ..clients.storage import StorageClient
from ..models.data_models import RetryPolicy
from .keys import normalize_key
from .retry import retry_operation


class RemotePruner:
    """Deletes remote objects prefix by prefix, one object at a time."""

    def __init__(self, storage: StorageClient, bucket: str, policy: RetryPolicy):
        self.storage = storage
        self.bucket = bucket
        self.policy = policy

    def list_keys(self, prefix: str) -> List[str]:
        """Return the keys of all objects under prefix, in listing order."""
        real_prefix = normalize_key(prefix)

        def _list_operation():
            return [obj.key for obj in self.storage.list_objects(self.bucket, real_prefix)]

        return retry_operation(_list_operation, self.policy, 'list')

    def prune(self, prefix: str) -> int:
        """
        Delete every object under prefix.

        After a pass the prefix is listed again, and passes repeat until a
        listing comes back empty. An empty prefix on the first listing is
        logged and skipped.

        Args:
            prefix: Remote key prefix, with or without a leading slash

        Returns:
            int: Number of objects deleted

        Raises:
            MaxRetriesExceededError: If a list or delete call keeps failing
        """
        deleted = 0
        keys = self.list_keys(prefix)
        if not keys:
            logger.info(f"file [{prefix}] not exists, skipped")
            return deleted

        while keys:
            for key in keys:
                self.delete_file(key)
                deleted += 1
            keys = self.list_keys(prefix)

        logger.info(f"Pruned {deleted} objects under [{prefix}]")
        return deleted

    def delete_file(self, key: str) -> None:
        """Delete one object, retrying on failure."""
        real_key = normalize_key(key)

        def _delete_operation():
            logger.info(f"deleting [{real_key}]")
            self.storage.delete_object(self.bucket, real_key)

        retry_operation(_delete_operation, self.policy, 'delete')
