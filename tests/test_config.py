"""
Tests for configuration loading and validation.
"""
import pytest

from bucket_publisher.models.config import (
    DEFAULT_MAX_RETRIES,
    ConfigError,
    PublishConfig,
    S3Config,
    parse_max_retries,
    split_paths,
)


class TestS3Config:
    """Test cases for S3Config."""

    def test_from_env(self):
        """Test values come from the prefixed environment variables."""
        config = S3Config.from_env('PUBLISH')

        assert config.endpoint == 'http://localhost:9000'
        assert config.bucket == 'test-bucket'
        assert config.region == 'us-east-1'

    def test_from_env_other_prefix(self, monkeypatch):
        monkeypatch.setenv('MIRROR_S3_BUCKET', 'mirror')

        config = S3Config.from_env('MIRROR')

        assert config.bucket == 'mirror'
        assert config.endpoint == ''
        assert config.region is None

    def test_validate_missing_bucket(self):
        config = S3Config(endpoint='', access_key='', secret_key='', bucket='')

        with pytest.raises(ConfigError, match="Missing bucket name"):
            config.validate()


class TestPublishConfig:
    """Test cases for PublishConfig."""

    def test_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv('PUBLISH_LOCAL_PATH', '/build')
        monkeypatch.setenv('PUBLISH_REMOTE_PATH', '/dist,/latest')
        monkeypatch.setenv('PUBLISH_DELETE_REMOTE_PATH', '/latest')
        monkeypatch.setenv('PUBLISH_MAX_RETRIES', '5')
        monkeypatch.setenv('WORKSPACE', str(tmp_path))

        config = PublishConfig.from_env()

        assert config.storage.bucket == 'test-bucket'
        assert config.local_paths == ['/build']
        assert config.remote_paths == ['/dist', '/latest']
        assert config.delete_remote_paths == ['/latest']
        assert config.retries == 5
        assert config.workspace == str(tmp_path)

    def test_workspace_defaults_to_cwd(self, monkeypatch, tmp_path):
        monkeypatch.delenv('WORKSPACE', raising=False)
        monkeypatch.chdir(tmp_path)

        assert PublishConfig.from_env().workspace == str(tmp_path)

    def test_validate_ok(self, publish_config):
        publish_config.validate()

    def test_validate_missing_bucket(self, publish_config):
        publish_config.storage.bucket = ''

        with pytest.raises(ConfigError, match="bucket"):
            publish_config.validate()

    def test_validate_missing_remote(self, publish_config):
        publish_config.remote_path = ' , '

        with pytest.raises(ConfigError, match="remote path"):
            publish_config.validate()

    def test_validate_missing_local(self, publish_config):
        publish_config.local_path = ''

        with pytest.raises(ConfigError, match="local path"):
            publish_config.validate()

    def test_validate_mismatched_counts(self, publish_config):
        publish_config.local_path = '/a,/b'
        publish_config.remote_path = '/x,/y,/z'

        with pytest.raises(ConfigError, match="2 local paths for 3 remote paths"):
            publish_config.validate()

    def test_validate_bad_retries(self, publish_config):
        publish_config.max_retries = 'three'

        with pytest.raises(ConfigError, match="must be a number"):
            publish_config.validate()


class TestParsing:
    """Test cases for setting parsers."""

    def test_split_paths(self):
        assert split_paths('/a, /b ,,/c') == ['/a', '/b', '/c']
        assert split_paths('') == []
        assert split_paths(None) == []

    def test_blank_retries_default(self):
        assert parse_max_retries('') == DEFAULT_MAX_RETRIES
        assert parse_max_retries(None) == DEFAULT_MAX_RETRIES
        assert parse_max_retries('  ') == DEFAULT_MAX_RETRIES

    def test_retries_parsed(self):
        assert parse_max_retries('0') == 0
        assert parse_max_retries(' 10 ') == 10

    def test_negative_retries_rejected(self):
        with pytest.raises(ConfigError, match="negative"):
            parse_max_retries('-1')
