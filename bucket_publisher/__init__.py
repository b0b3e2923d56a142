"""
Bucket Publisher - Publishes build output to an S3-compatible bucket as a pipeline step.
"""

from .services.publisher import PublishService
from .services.retry import MaxRetriesExceededError
from .models.config import PublishConfig, S3Config, ConfigError
from .models.data_models import SyncTarget, DeleteTarget, RetryPolicy

__version__ = "1.0.0"
__all__ = [
    "PublishService",
    "MaxRetriesExceededError",
    "PublishConfig",
    "S3Config",
    "ConfigError",
    "SyncTarget",
    "DeleteTarget",
    "RetryPolicy"
]
