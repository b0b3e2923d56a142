"""
Pytest configuration and fixtures for the bucket publisher tests.
"""
import os
import pytest
from loguru import logger

from bucket_publisher.clients.storage import S3Object, StorageClient
from bucket_publisher.models.config import PublishConfig, S3Config
from bucket_publisher.models.data_models import RetryPolicy


class MemoryStorage(StorageClient):
    """
    In-memory bucket that records every call.

    ``failures`` maps (operation, key) to how many times that call should
    raise before succeeding.
    """

    def __init__(self, objects=None):
        self.objects = dict.fromkeys(objects or [], b'')
        self.calls = []
        self.failures = {}

    def _maybe_fail(self, operation, key):
        remaining = self.failures.get((operation, key), 0)
        if remaining:
            self.failures[(operation, key)] = remaining - 1
            raise ConnectionError(f"{operation} {key} failed")

    def put_object(self, bucket, key, body):
        self.calls.append(('put', key))
        self._maybe_fail('put', key)
        self.objects[key] = body.read()

    def list_objects(self, bucket, prefix):
        self.calls.append(('list', prefix))
        self._maybe_fail('list', prefix)
        return [S3Object(key=key, size=len(data))
                for key, data in self.objects.items() if key.startswith(prefix)]

    def delete_object(self, bucket, key):
        self.calls.append(('delete', key))
        self._maybe_fail('delete', key)
        self.objects.pop(key, None)


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Set up test environment variables for all tests."""
    test_env = {
        'PUBLISH_S3_ENDPOINT': 'http://localhost:9000',
        'PUBLISH_S3_ACCESS_KEY': 'minioadmin',
        'PUBLISH_S3_SECRET_KEY': 'minioadmin',
        'PUBLISH_S3_BUCKET': 'test-bucket',
        'PUBLISH_S3_REGION': 'us-east-1',
    }

    for key, value in test_env.items():
        os.environ[key] = value

    yield


@pytest.fixture
def storage():
    """Empty in-memory bucket."""
    return MemoryStorage()


@pytest.fixture
def policy():
    """Default retry policy."""
    return RetryPolicy(3)


@pytest.fixture
def log_messages():
    """Capture loguru messages emitted during a test."""
    messages = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]),
                            level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def build_tree(tmp_path):
    """Workspace with build/x.txt and build/sub/y.txt."""
    root = tmp_path / "build"
    (root / "sub").mkdir(parents=True)
    (root / "x.txt").write_bytes(b"x content")
    (root / "sub" / "y.txt").write_bytes(b"y content")
    return root


@pytest.fixture
def publish_config(tmp_path):
    """Publish configuration rooted at a temporary workspace."""
    return PublishConfig(
        storage=S3Config(
            endpoint='http://localhost:9000',
            access_key='minioadmin',
            secret_key='minioadmin',
            bucket='test-bucket'
        ),
        local_path='/build',
        remote_path='/dist',
        workspace=str(tmp_path)
    )
