#!/usr/bin/env python3
"""
s3share - Command Line Interface

Easily share files with S3: upload a file, make it public and print its URL.
"""

import argparse
import sys

from . import __version__
from .config import settings
from .config_store import ConfigStore
from .errors import ConfigError, ShareError
from .logging_utils import setup_logging, get_logger
from .prompts import ConsolePrompter
from .retry_policy import RetryPolicy
from .s3_client import S3Client
from .services import BucketReconciler, ChunkedUploader, ShareService
from .commands import handle_share_command, handle_setup_command

# Get logger for this module
logger = get_logger(__name__)

SETUP_COMMAND = "setup"


def _create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="share",
        description="Easily share files with S3",
        epilog=f"Run 'share {SETUP_COMMAND}' to choose a different bucket. "
        "AWS credentials are taken from the default credential chain (~/.aws/credentials, environment).",
    )

    parser.add_argument(
        "target",
        nargs="?",
        help=f"Path to the file you want to share, or '{SETUP_COMMAND}' to reconfigure",
    )
    parser.add_argument(
        "-c",
        "--copy",
        action="store_true",
        help="Copy the public URL to the clipboard",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Show verbose output"
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    return parser


def _initialize_application(args) -> tuple[ConfigStore, ShareService]:
    """
    Initialize the application components.

    Args:
        args: Parsed command line arguments

    Returns:
        Tuple of (config_store, share_service)
    """
    # Configure logging
    try:
        settings.ensure_directories()
        setup_logging(
            log_folder=settings.get("log_folder"),
            log_basename=settings.get("log_basename"),
            max_bytes=int(settings.get("max_log_size_mb", 5)) * 1024 * 1024,
            backup_count=int(settings.get("max_log_backups", 10)),
            verbose=args.verbose,
        )
    except (OSError, TypeError, ValueError) as e:
        raise ConfigError(
            f"cannot set up logging in {settings.get('log_folder')}: {e}"
        ) from e

    # One store client for the whole process
    client = S3Client.from_settings(settings)

    config_store = ConfigStore(
        client, ConsolePrompter(), config_path=settings.get("config_path")
    )
    uploader = ChunkedUploader(client, retry_policy=RetryPolicy.from_settings(settings))
    share_service = ShareService(
        client,
        config_store,
        uploader,
        reconciler=BucketReconciler(client, config_store),
        url_domain=settings.get("url_domain"),
    )

    return config_store, share_service


def main():
    """Main function to handle command line arguments and route to appropriate handlers."""
    parser = _create_argument_parser()
    args = parser.parse_args()

    try:
        config_store, share_service = _initialize_application(args)

        if args.target == SETUP_COMMAND:
            handle_setup_command(config_store)
            return

        # A missing target is reported by the share command itself
        handle_share_command(share_service, args.target or "", copy=args.copy)
    except KeyboardInterrupt:
        logger.warning("Cancelled by user")
        sys.exit(130)
    except ShareError as e:
        if e.exit_code == 0:
            logger.info(str(e))
        else:
            logger.error(str(e))
        sys.exit(e.exit_code)


if __name__ == "__main__":
    main()
