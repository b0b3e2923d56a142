"""
Main entry point for the bucket publisher.
"""
import json
import os
import sys
from pathlib import Path
from loguru import logger

from .clients.s3_manager import S3Manager
from .models.config import ConfigError, PublishConfig
from .services.publisher import PublishService
from .services.retry import MaxRetriesExceededError


def setup_logging():
    """Configure logging for the publisher."""
    # Remove default logger
    logger.remove()

    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=os.getenv('PUBLISH_LOG_LEVEL', 'INFO')
    )

    # Optional file log for debugging a build
    log_file = os.getenv('PUBLISH_LOG_FILE')
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            rotation="10 MB",
            retention="7 days",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
            level="DEBUG"
        )


def run_publish():
    """Run one publish step from environment configuration."""
    logger.info("Starting Bucket Publisher - Publish Mode")

    config = PublishConfig.from_env()
    logger.info(f"Loaded configuration - Bucket: {config.storage.bucket}, "
                f"Workspace: {config.workspace}")

    publish_service = PublishService(config)
    results = publish_service.publish()

    logger.info(f"Publish Results: {json.dumps(results, indent=2, default=str)}")
    return results


def run_check():
    """Check that the configured bucket is reachable."""
    config = PublishConfig.from_env()
    config.storage.validate()
    return S3Manager(config.storage).test_connection()


def print_help():
    """Print help information for the CLI."""
    help_text = """
Bucket Publisher - Command Line Interface

USAGE:
    python -m bucket_publisher.main [COMMAND]

COMMANDS:
    publish    Prune remote prefixes, then upload local paths (default)
    check      Test the connection to the configured bucket
    help       Show this help message

ENVIRONMENT VARIABLES:
    PUBLISH_S3_ENDPOINT          S3-compatible service URL
    PUBLISH_S3_ACCESS_KEY        Access key
    PUBLISH_S3_SECRET_KEY        Secret key
    PUBLISH_S3_BUCKET            Bucket name
    PUBLISH_S3_REGION            Region (default: us-east-1)
    PUBLISH_LOCAL_PATH           Workspace-relative local path(s), comma-separated
    PUBLISH_REMOTE_PATH          Remote key prefix(es), comma-separated
    PUBLISH_DELETE_REMOTE_PATH   Remote prefix(es) to delete first, comma-separated
    PUBLISH_MAX_RETRIES          Retries per operation (default: 3)
    PUBLISH_LOG_LEVEL            Console log level (default: INFO)
    PUBLISH_LOG_FILE             Optional debug log file
    WORKSPACE                    Build workspace (default: current directory)

Paths may reference other variables as $NAME or ${NAME}.
"""
    print(help_text)


def main():
    """Main entry point with command line argument handling."""
    setup_logging()

    command = sys.argv[1].lower() if len(sys.argv) > 1 else "publish"

    try:
        if command in ["help", "--help", "-h"]:
            print_help()
        elif command == "publish":
            run_publish()
            logger.info("Publish command completed successfully")
        elif command == "check":
            if not run_check():
                sys.exit(1)
        else:
            logger.error(f"Unknown command: {command}")
            logger.error("Use 'help' to see available commands")
            print_help()
            sys.exit(1)

    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)
    except MaxRetriesExceededError as e:
        logger.error(f"Publish failed: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.error("Received interrupt signal, publish aborted")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Command failed: {str(e)}")
        sys.exit(1)


if __name__ == "__main__":
    main()
