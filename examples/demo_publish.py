#!/usr/bin/env python3
"""
Simple demo of the bucket publisher against a local MinIO.

This script demonstrates:
- Building a throwaway workspace with a small build tree
- Pruning a remote prefix
- Publishing the tree under two remote prefixes
"""
import os
import sys
import tempfile
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from bucket_publisher.models.config import PublishConfig
from bucket_publisher.services.publisher import PublishService
from loguru import logger


def setup_demo_environment(workspace: str):
    """Configure environment for demo."""
    os.environ['PUBLISH_S3_ENDPOINT'] = 'http://localhost:9000'
    os.environ['PUBLISH_S3_ACCESS_KEY'] = 'minioadmin'
    os.environ['PUBLISH_S3_SECRET_KEY'] = 'minioadmin'
    os.environ['PUBLISH_S3_BUCKET'] = 'publish-demo'
    os.environ['PUBLISH_S3_REGION'] = 'us-east-1'
    os.environ['PUBLISH_LOCAL_PATH'] = '/build'
    os.environ['PUBLISH_REMOTE_PATH'] = '/releases/$BUILD_NUMBER,/releases/latest'
    os.environ['PUBLISH_DELETE_REMOTE_PATH'] = '/releases/latest'
    os.environ['BUILD_NUMBER'] = '1'
    os.environ['WORKSPACE'] = workspace


def create_build_tree(workspace: Path):
    """Write a few files the way a build step would."""
    build = workspace / 'build'
    (build / 'assets').mkdir(parents=True)
    (build / 'index.html').write_text('<html><body>demo</body></html>')
    (build / 'assets' / 'app.js').write_text('console.log("demo");')
    (build / 'assets' / 'app.css').write_text('body { margin: 0; }')
    logger.info(f"Created build tree in {build}")


def main():
    """Run publish demo."""
    logger.remove()
    logger.add(sys.stderr, format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> - <level>{message}</level>", level="INFO")

    logger.info("🚀 Bucket Publisher Demo")

    with tempfile.TemporaryDirectory() as workspace:
        setup_demo_environment(workspace)
        create_build_tree(Path(workspace))

        try:
            config = PublishConfig.from_env()
            publish_service = PublishService(config)

            if not publish_service.storage.test_connection():
                logger.error("MinIO is not reachable on localhost:9000 - start it and create the 'publish-demo' bucket")
                return 1

            results = publish_service.publish()
            logger.success(f"✅ Uploaded {results['files_uploaded']} files, "
                           f"deleted {results['objects_deleted']} stale objects")
            return 0

        except Exception as e:
            logger.error(f"❌ Demo failed: {str(e)}")
            return 1


if __name__ == "__main__":
    sys.exit(main())
