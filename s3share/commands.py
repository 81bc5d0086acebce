#!/usr/bin/env python3
"""
Command Handlers Module

Contains handler functions for each CLI command.
Separates command routing from business logic.
"""

import logging

from .config_store import Config, ConfigStore
from .services import ShareResult, ShareService

logger = logging.getLogger("s3share")


def handle_share_command(
    share_service: ShareService, file_path: str, copy: bool = False
) -> ShareResult:
    """
    Handle the share command.

    Args:
        share_service: Share service instance
        file_path: Path of the file to share
        copy: If True, copy the public URL to the clipboard

    Returns:
        The share result
    """
    logger.debug(f"Sharing {file_path} (copy to clipboard: {copy})")
    return share_service.share(file_path, copy_to_clipboard=copy)


def handle_setup_command(config_store: ConfigStore) -> Config:
    """
    Handle the setup command: always reconfigure, asking first.

    Args:
        config_store: Configuration store instance

    Returns:
        The new configuration
    """
    return config_store.setup(force=True, skip_prompts=False)
