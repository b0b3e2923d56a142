"""
Models package for the bucket publisher.
"""
from .data_models import SyncTarget, DeleteTarget, RetryPolicy
from .config import S3Config, PublishConfig, ConfigError

__all__ = [
    'SyncTarget',
    'DeleteTarget',
    'RetryPolicy',
    'S3Config',
    'PublishConfig',
    'ConfigError'
]
