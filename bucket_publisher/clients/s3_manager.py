"""
S3 client manager for the publish target bucket.
"""
from typing import BinaryIO, List
import boto3
from loguru import logger

from ..models.config import S3Config
from .storage import S3Object, StorageClient


class S3Manager(StorageClient):
    """Bucket operations backed by a boto3 S3 client."""

    def __init__(self, config: S3Config):
        """Initialize S3Manager with the target bucket configuration."""
        self.config = config

        # One client for the whole run
        self.client = self._create_s3_client(config)

        logger.info(f"S3Manager initialized for bucket: {config.bucket}")

    def _create_s3_client(self, config: S3Config):
        """Create an S3 client from configuration."""
        try:
            client = boto3.client(
                's3',
                endpoint_url=config.endpoint or None,
                aws_access_key_id=config.access_key or None,
                aws_secret_access_key=config.secret_key or None,
                region_name=config.region or 'us-east-1'
            )
            logger.debug(f"Created S3 client for endpoint: {config.endpoint or 'default'}")
            return client
        except Exception as e:
            logger.error(f"Failed to create S3 client for {config.endpoint}: {e}")
            raise

    def put_object(self, bucket: str, key: str, body: BinaryIO) -> None:
        """
        Upload a binary stream as an object.

        Args:
            bucket: Bucket name
            key: Object key, already normalized
            body: Open binary stream with the object content
        """
        self.client.put_object(Bucket=bucket, Key=key, Body=body)
        logger.debug(f"Put object: {key}")

    def list_objects(self, bucket: str, prefix: str) -> List[S3Object]:
        """
        List all objects under a key prefix, following pagination.

        Args:
            bucket: Bucket name
            prefix: Key prefix, already normalized

        Returns:
            List of S3Object in listing order
        """
        paginator = self.client.get_paginator('list_objects_v2')
        page_iterator = paginator.paginate(Bucket=bucket, Prefix=prefix)

        objects = []
        for page in page_iterator:
            if 'Contents' in page:
                for obj in page['Contents']:
                    objects.append(S3Object(
                        key=obj['Key'],
                        size=obj.get('Size', 0),
                        last_modified=obj.get('LastModified'),
                        etag=obj.get('ETag', '').strip('"'),
                        storage_class=obj.get('StorageClass', 'STANDARD')
                    ))

        logger.debug(f"Listed {len(objects)} objects under prefix: {prefix!r}")
        return objects

    def delete_object(self, bucket: str, key: str) -> None:
        """Delete a single object."""
        self.client.delete_object(Bucket=bucket, Key=key)
        logger.debug(f"Deleted object: {key}")

    def test_connection(self) -> bool:
        """
        Test connection to the target bucket.

        Returns:
            bool: True if connection successful, False otherwise
        """
        try:
            self.client.head_bucket(Bucket=self.config.bucket)
            logger.info("S3 connection test successful")
            return True
        except Exception as e:
            logger.error(f"S3 connection test failed: {e}")
            return False
