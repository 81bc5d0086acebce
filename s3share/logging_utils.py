#!/usr/bin/env python3
"""
Logging utilities for s3share.
Provides a rotating file logger with console output.
"""

import os
import sys
import logging
from logging.handlers import RotatingFileHandler

FILE_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
CONSOLE_FORMAT = '%(message)s'

# Third-party loggers that flood the console at DEBUG
NOISY_LOGGERS = ("boto3", "botocore", "s3transfer", "urllib3")


def log_file_path(log_folder: str, log_basename: str) -> str:
    """Path of the active log file; rotated copies get .1, .2, ... suffixes."""
    return os.path.join(log_folder, f"{log_basename}_0.log")


def setup_logging(log_folder='.', log_basename='share', max_bytes=5*1024*1024, backup_count=10, verbose=False):
    """
    Configure the root logger: everything goes to a rotating log file,
    messages at INFO and above (DEBUG with verbose) go to stdout.

    Args:
        log_folder: Folder where log files will be stored (default: current directory)
        log_basename: Base name for log files (default: 'share')
        max_bytes: Maximum size of the log file before rotation in bytes (default: 5MB)
        backup_count: Number of rotated files to keep (default: 10)
        verbose: Show debug output, including per-part upload details, on the console

    Returns:
        The configured root logger
    """
    level = logging.DEBUG if verbose else logging.INFO

    logger = logging.getLogger()
    logger.setLevel(level)
    logger.handlers = []

    file_handler = RotatingFileHandler(
        log_file_path(log_folder, log_basename),
        maxBytes=max_bytes,
        backupCount=backup_count,
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
    logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console_handler)

    # boto logs request signing and retries at DEBUG
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return logger


def get_logger(name):
    """Get a named logger."""
    return logging.getLogger(name)
