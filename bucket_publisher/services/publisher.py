"""
Main publish service orchestrator: prune remote prefixes, then upload local trees.
"""
import os
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from loguru import logger

from ..clients.s3_manager import S3Manager
from ..clients.storage import StorageClient
from ..models.config import DEFAULT_MAX_RETRIES, PublishConfig
from ..models.data_models import DeleteTarget, RetryPolicy, SyncTarget
from .pruner import RemotePruner
from .target_resolver import resolve_targets
from .uploader import TreeUploader


class PublishService:
    """
    Runs one publish step against a single bucket.

    All delete targets are pruned before any upload target starts. Work is
    strictly sequential and the first exhausted retry aborts the whole run;
    nothing already deleted or uploaded is rolled back.
    """

    def __init__(self, config: PublishConfig, storage: Optional[StorageClient] = None):
        """
        Initialize publish service with configuration.

        Args:
            config: PublishConfig with bucket and path settings
            storage: Storage client to use; an S3Manager is built from
                config.storage when omitted
        """
        self.config = config
        self.bucket = config.storage.bucket
        self.storage = storage if storage is not None else S3Manager(config.storage)

        logger.info("PublishService initialized successfully")

    def publish(self, env: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        """
        Resolve targets from configuration and run the publish step.

        Args:
            env: Variables for path expansion; defaults to os.environ

        Returns:
            Dictionary containing publish statistics

        Raises:
            ConfigError: If the configuration is incomplete
            MaxRetriesExceededError: If any remote operation keeps failing
        """
        self.config.validate()
        delete_targets, upload_targets = resolve_targets(
            self.config, os.environ if env is None else env
        )
        return self.run(delete_targets, upload_targets, self.config.retries)

    def run(self,
            delete_targets: Sequence[Union[DeleteTarget, str]],
            upload_targets: Sequence[Union[SyncTarget, tuple]],
            max_retries: Optional[int] = None) -> Dict[str, Any]:
        """
        Prune every delete target, then upload every upload target.

        Args:
            delete_targets: DeleteTarget objects or plain prefix strings
            upload_targets: SyncTarget objects or (local_path, remote_key) pairs; a
                directory is mirrored under remote_key, a file is stored at it
            max_retries: Retries per remote operation after the first attempt;
                None means DEFAULT_MAX_RETRIES

        Returns:
            Dictionary containing publish statistics

        Raises:
            MaxRetriesExceededError: If any remote operation keeps failing
        """
        policy = RetryPolicy(DEFAULT_MAX_RETRIES if max_retries is None else max_retries)
        pruner = RemotePruner(self.storage, self.bucket, policy)
        uploader = TreeUploader(self.storage, self.bucket, policy)

        stats = {
            'start_time': datetime.now(),
            'objects_deleted': 0,
            'prefixes_skipped': 0,
            'files_uploaded': 0,
            'files_skipped': 0,
            'targets_skipped': 0,
            'bytes_uploaded': 0,
            'success': False
        }

        logger.info(f"Starting publish to bucket {self.bucket} "
                    f"(max retries: {policy.max_retries})")

        try:
            for target in _as_delete_targets(delete_targets):
                logger.info(f"Pruning remote prefix: {target.remote_prefix}")
                deleted = pruner.prune(target.remote_prefix)
                stats['objects_deleted'] += deleted
                if deleted == 0:
                    stats['prefixes_skipped'] += 1

            for target in _as_sync_targets(upload_targets):
                if not self._upload_target(uploader, target):
                    stats['targets_skipped'] += 1

            stats['success'] = True
            return stats

        finally:
            stats['files_uploaded'] = uploader.files_uploaded
            stats['files_skipped'] = uploader.files_skipped
            stats['bytes_uploaded'] = uploader.bytes_uploaded
            stats['end_time'] = datetime.now()
            stats['duration'] = (stats['end_time'] - stats['start_time']).total_seconds()

            if stats['success']:
                logger.info(f"Publish completed - Deleted: {stats['objects_deleted']}, "
                            f"Uploaded: {stats['files_uploaded']}, "
                            f"Skipped targets: {stats['targets_skipped']}, "
                            f"Total size: {stats['bytes_uploaded']} bytes, "
                            f"Duration: {stats['duration']:.2f} seconds")
            else:
                logger.error(f"Publish aborted after {stats['duration']:.2f} seconds - "
                             f"Deleted: {stats['objects_deleted']}, "
                             f"Uploaded: {stats['files_uploaded']}")

    def _upload_target(self, uploader: TreeUploader, target: SyncTarget) -> bool:
        """Upload one target; returns False if its local path does not exist."""
        local_path = target.local_path

        if not local_path.exists():
            logger.warning(f"local path [{local_path}] not exists, skipped")
            return False

        if local_path.is_dir():
            logger.info(f"upload dir => {local_path}")
            uploaded = uploader.upload_tree(target.remote_key, local_path, is_root=True)
            logger.info(f"upload dir success ({uploaded} files)")
        else:
            logger.info(f"upload file => {local_path}")
            if uploader.upload_file(target.remote_key, local_path):
                logger.info("upload file success")
        return True


def _as_delete_targets(targets) -> List[DeleteTarget]:
    return [t if isinstance(t, DeleteTarget) else DeleteTarget(t) for t in targets]


def _as_sync_targets(targets) -> List[SyncTarget]:
    return [
        t if isinstance(t, SyncTarget) else SyncTarget(Path(t[0]), t[1])
        for t in targets
    ]
