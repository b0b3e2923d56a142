# Services package
from .keys import normalize_key, join_key
from .retry import retry_operation, MaxRetriesExceededError
from .pruner import RemotePruner
from .uploader import TreeUploader
from .target_resolver import expand_variables, resolve_targets
from .publisher import PublishService

__all__ = [
    'normalize_key',
    'join_key',
    'retry_operation',
    'MaxRetriesExceededError',
    'RemotePruner',
    'TreeUploader',
    'expand_variables',
    'resolve_targets',
    'PublishService'
]
