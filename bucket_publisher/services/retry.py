"""
Retry wrapper for single remote operations.
"""
from typing import Callable, TypeVar
from loguru import logger

from ..models.data_models import RetryPolicy

T = TypeVar('T')


class MaxRetriesExceededError(RuntimeError):
    """Raised when an operation keeps failing past the retry limit."""

    def __init__(self, action: str, attempts: int):
        super().__init__(f"{action} fail, more than the max of retries")
        self.action = action
        self.attempts = attempts


def retry_operation(operation: Callable[[], T], policy: RetryPolicy, action: str) -> T:
    """
    Run an operation, retrying immediately on any error.

    Every failure is logged with its traceback. There is no delay between
    attempts and no distinction between error types.

    Args:
        operation: Zero-argument callable performing one remote call
        policy: Retry policy giving the retry limit
        action: Short verb used in log lines ('upload', 'delete', 'list')

    Returns:
        Whatever the operation returns on its first successful attempt

    Raises:
        MaxRetriesExceededError: After max_retries + 1 failed attempts
    """
    last_error = None
    for attempt in range(policy.max_attempts):
        if attempt > 0:
            logger.warning(f"{action} retrying ({attempt}/{policy.max_retries})")
        try:
            return operation()
        except Exception as e:
            last_error = e
            logger.opt(exception=e).error(
                f"{action} failed (attempt {attempt + 1}/{policy.max_attempts}): {e}"
            )

    raise MaxRetriesExceededError(action, policy.max_attempts) from last_error
