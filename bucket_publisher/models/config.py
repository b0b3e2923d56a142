"""
Configuration classes for the bucket publisher.
"""
import os
from dataclasses import dataclass, field
from typing import List, Optional

DEFAULT_MAX_RETRIES = 3


class ConfigError(ValueError):
    """Raised when the publish configuration cannot be used."""
    pass


def split_paths(value: Optional[str]) -> List[str]:
    """Split a comma-separated path list, dropping blank entries."""
    if not value:
        return []
    return [part.strip() for part in value.split(',') if part.strip()]


def parse_max_retries(value: Optional[str]) -> int:
    """Parse the max retries setting; blank means the default."""
    if value is None or not value.strip():
        return DEFAULT_MAX_RETRIES
    try:
        retries = int(value.strip())
    except ValueError:
        raise ConfigError(f"Max retries must be a number, got: {value!r}")
    if retries < 0:
        raise ConfigError(f"Max retries must not be negative, got: {retries}")
    return retries


@dataclass
class S3Config:
    """Configuration for S3 service connection."""
    endpoint: str
    access_key: str
    secret_key: str
    bucket: str
    region: Optional[str] = None

    @classmethod
    def from_env(cls, prefix: str = 'PUBLISH') -> 'S3Config':
        """Create S3Config from environment variables with given prefix."""
        return cls(
            endpoint=os.getenv(f'{prefix}_S3_ENDPOINT', ''),
            access_key=os.getenv(f'{prefix}_S3_ACCESS_KEY', ''),
            secret_key=os.getenv(f'{prefix}_S3_SECRET_KEY', ''),
            bucket=os.getenv(f'{prefix}_S3_BUCKET', ''),
            region=os.getenv(f'{prefix}_S3_REGION')
        )

    def validate(self) -> None:
        """Raise ConfigError if no bucket is configured."""
        if not self.bucket:
            raise ConfigError("Missing bucket name (PUBLISH_S3_BUCKET)")


@dataclass
class PublishConfig:
    """Main configuration for a publish run."""
    storage: S3Config
    local_path: str
    remote_path: str
    delete_remote_path: str = ''
    max_retries: str = ''
    workspace: str = field(default_factory=os.getcwd)

    @classmethod
    def from_env(cls) -> 'PublishConfig':
        """Create PublishConfig from environment variables."""
        return cls(
            storage=S3Config.from_env('PUBLISH'),
            local_path=os.getenv('PUBLISH_LOCAL_PATH', ''),
            remote_path=os.getenv('PUBLISH_REMOTE_PATH', ''),
            delete_remote_path=os.getenv('PUBLISH_DELETE_REMOTE_PATH', ''),
            max_retries=os.getenv('PUBLISH_MAX_RETRIES', ''),
            # Set by the build server for every job
            workspace=os.getenv('WORKSPACE') or os.getcwd()
        )

    @property
    def retries(self) -> int:
        return parse_max_retries(self.max_retries)

    @property
    def local_paths(self) -> List[str]:
        return split_paths(self.local_path)

    @property
    def remote_paths(self) -> List[str]:
        return split_paths(self.remote_path)

    @property
    def delete_remote_paths(self) -> List[str]:
        return split_paths(self.delete_remote_path)

    def validate(self) -> None:
        """
        Check the configuration before any remote call is made.

        Raises:
            ConfigError: Describing the first problem found
        """
        self.storage.validate()

        parse_max_retries(self.max_retries)

        local_paths, remote_paths = self.local_paths, self.remote_paths
        if not remote_paths:
            raise ConfigError("Missing remote path (PUBLISH_REMOTE_PATH)")
        if not local_paths:
            raise ConfigError("Missing local path (PUBLISH_LOCAL_PATH)")
        if len(local_paths) > 1 and len(local_paths) != len(remote_paths):
            raise ConfigError(
                f"Got {len(local_paths)} local paths for {len(remote_paths)} remote paths; "
                "use one local path or one per remote path"
            )
