"""
Core data models for the bucket publisher.
"""
from dataclasses import dataclass
from pathlib import Path

from .config import DEFAULT_MAX_RETRIES


@dataclass(frozen=True)
class SyncTarget:
    """A local file or directory to mirror under a remote key prefix."""
    local_path: Path
    remote_key: str


@dataclass(frozen=True)
class DeleteTarget:
    """A remote key prefix whose objects are purged before uploading."""
    remote_prefix: str


@dataclass(frozen=True)
class RetryPolicy:
    """How many times a failed remote operation is retried."""
    max_retries: int = DEFAULT_MAX_RETRIES

    def __post_init__(self):
        if self.max_retries < 0:
            raise ValueError(f"max_retries must not be negative, got {self.max_retries}")

    @property
    def max_attempts(self) -> int:
        """Total attempts per operation, the first try included."""
        return self.max_retries + 1
