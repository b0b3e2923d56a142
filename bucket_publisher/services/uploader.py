"""
Tree uploader: mirrors a local file or directory tree under a remote key prefix.
"""
import os
from pathlib import Path
from typing import FrozenSet
from loguru import logger

from ..clients.storage import StorageClient
from ..models.data_models import RetryPolicy
from .keys import join_key, normalize_key
from .retry import retry_operation


class TreeUploader:
    """
    Uploads local files one by one, deriving keys from their position in the tree.

    A file at ``root/sub/y.txt`` uploaded with base ``p`` lands at ``p/sub/y.txt``:
    the name of the root directory itself never appears in a key.
    """

    def __init__(self, storage: StorageClient, bucket: str, policy: RetryPolicy):
        self.storage = storage
        self.bucket = bucket
        self.policy = policy
        self.files_uploaded = 0
        self.files_skipped = 0
        self.bytes_uploaded = 0

    def upload_tree(self, base: str, local_root: Path, is_root: bool = True) -> int:
        """
        Upload a file, or every file below a directory.

        Args:
            base: Remote key prefix for the entries of local_root
            local_root: Local file or directory
            is_root: True for the top call, so the directory's own name is not
                added to the prefix

        Returns:
            int: Number of files uploaded

        Raises:
            MaxRetriesExceededError: If an upload keeps failing
        """
        return self._walk(base, Path(local_root), is_root, frozenset())

    def _walk(self, base: str, local_root: Path, is_root: bool,
              ancestors: FrozenSet[str]) -> int:
        """Recursive step of upload_tree; ancestors holds the real paths being walked."""
        if not local_root.exists():
            logger.warning(f"path [{local_root}] not exists, skipped")
            self.files_skipped += 1
            return 0

        if not local_root.is_dir():
            return 1 if self.upload_file(join_key(base, local_root.name), local_root) else 0

        real_path = os.path.realpath(local_root)
        if real_path in ancestors:
            logger.warning(f"directory [{local_root}] links back to [{real_path}], skipped")
            return 0
        ancestors = ancestors | {real_path}

        new_base = base if is_root else join_key(base, local_root.name)
        uploaded = 0
        for child in sorted(local_root.iterdir(), key=lambda p: p.name):
            uploaded += self._walk(new_base, child, False, ancestors)
        return uploaded

    def upload_file(self, key: str, path: Path) -> bool:
        """
        Upload one file under key, retrying on failure.

        Returns:
            bool: True if uploaded, False if the file vanished and was skipped

        Raises:
            MaxRetriesExceededError: If the upload keeps failing
        """
        path = Path(path)
        if not path.exists():
            logger.warning(f"file [{path}] not exists, skipped")
            self.files_skipped += 1
            return False

        real_key = normalize_key(key)

        def _upload_operation():
            logger.info(f"uploading [{path}] to [{real_key}]")
            with open(path, 'rb') as stream:
                size = os.fstat(stream.fileno()).st_size
                self.storage.put_object(self.bucket, real_key, stream)
            return size

        self.bytes_uploaded += retry_operation(_upload_operation, self.policy, 'upload')
        self.files_uploaded += 1
        return True
