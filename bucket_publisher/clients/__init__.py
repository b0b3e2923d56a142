# Client packages
from .storage import StorageClient, S3Object
from .s3_manager import S3Manager

__all__ = ['StorageClient', 'S3Object', 'S3Manager']
