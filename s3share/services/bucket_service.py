#!/usr/bin/env python3
"""
Bucket Service Module

Checks that the configured bucket still exists before uploading and runs
the setup flow again when it does not.
"""

from enum import Enum
from typing import Optional, Sequence

from ..config_store import Config, ConfigStore
from ..errors import BucketInvalidError, SetupError, StoreError, TransportError
from ..logging_utils import get_logger

logger = get_logger(__name__)


class SetupAction(Enum):
    NONE = "none"
    FIRST_RUN = "first_run"
    RECONFIGURE = "reconfigure"


def ensure_configured(config_exists: bool, bucket_valid: Optional[bool] = None) -> SetupAction:
    """
    Decide which setup flow, if any, has to run.

    Args:
        config_exists: Whether a configuration file is present
        bucket_valid: Whether the configured bucket is accessible, None if unknown

    Returns:
        FIRST_RUN when nothing is configured yet, RECONFIGURE when the
        configured bucket is known to be gone, NONE otherwise
    """
    if not config_exists:
        return SetupAction.FIRST_RUN
    if bucket_valid is False:
        return SetupAction.RECONFIGURE
    return SetupAction.NONE


def check_bucket(config: Config, buckets: Sequence[str]) -> None:
    """
    Raise BucketInvalidError if the configured bucket is not accessible.

    Args:
        config: Current configuration
        buckets: Names of the accessible buckets
    """
    if config.bucket_name not in buckets:
        raise BucketInvalidError(config.bucket_name)


class BucketReconciler:
    """Service for validating the configured bucket against the store."""

    def __init__(self, client, config_store: ConfigStore):
        """
        Initialize the reconciler.

        Args:
            client: Object store client used to list buckets
            config_store: Store used to rerun setup when the bucket is stale
        """
        self.client = client
        self.config_store = config_store

    def ensure_valid_bucket(self, config: Config) -> Config:
        """
        Make sure the configured bucket is still accessible.

        A stale bucket forces the setup flow (without asking whether to
        configure) and the new choice replaces the stored configuration.

        Args:
            config: Current configuration

        Returns:
            The configuration to upload with

        Raises:
            SetupError: If buckets cannot be listed or setup fails
        """
        try:
            buckets = self.client.list_accessible_buckets()
        except (TransportError, StoreError) as e:
            raise SetupError(f"error listing buckets: {e}") from e

        try:
            check_bucket(config, buckets)
            bucket_valid = True
        except BucketInvalidError as e:
            logger.warning(f"{e}, please select a new one")
            bucket_valid = False

        action = ensure_configured(config_exists=True, bucket_valid=bucket_valid)
        if action is SetupAction.RECONFIGURE:
            return self.config_store.setup(force=True, skip_prompts=True, buckets=buckets)

        logger.debug(f"Bucket '{config.bucket_name}' is accessible")
        return config
