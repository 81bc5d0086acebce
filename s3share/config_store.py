#!/usr/bin/env python3
"""
Bucket configuration for s3share.

The chosen bucket is persisted in a small YAML file in the user's home
directory (~/.share.yaml) with exactly one key:

    bucket: my-bucket
"""

import os
from dataclasses import dataclass
from typing import List, Optional, Sequence

import yaml

from .errors import ConfigError, NoBucketsError, SetupCancelled
from .logging_utils import get_logger

logger = get_logger(__name__)

CONFIG_FILENAME = ".share.yaml"
BUCKET_KEY = "bucket"


@dataclass
class Config:
    """Persisted s3share configuration."""

    bucket_name: str


def default_config_path() -> str:
    """
    Path of the configuration file in the user's home directory.

    Raises:
        ConfigError: If the home directory cannot be determined
    """
    home = os.path.expanduser("~")
    if not home or home == "~":
        raise ConfigError("cannot get user home directory")
    return os.path.join(home, CONFIG_FILENAME)


class ConfigStore:
    """Loads, stores and interactively sets up the bucket configuration."""

    def __init__(self, client, prompter, config_path: Optional[str] = None):
        """
        Initialize the configuration store.

        Args:
            client: Object store client used to list selectable buckets
            prompter: Object with confirm(message) and select(label, items)
            config_path: Path of the YAML file (default: ~/.share.yaml)
        """
        self.client = client
        self.prompter = prompter
        self.config_path = config_path or default_config_path()

    def exists(self) -> bool:
        """Return True if a configuration file is present."""
        return os.path.isfile(self.config_path)

    def get(self) -> Config:
        """
        Load the configuration from disk.

        Returns:
            The stored Config

        Raises:
            ConfigError: If the file is missing, unreadable or malformed
        """
        try:
            with open(self.config_path, "r") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError:
            raise ConfigError(
                f"share is not configured: {self.config_path} does not exist"
            )
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"cannot read config file {self.config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"malformed config file {self.config_path}")

        bucket_name = data.get(BUCKET_KEY)
        if not isinstance(bucket_name, str) or not bucket_name.strip():
            raise ConfigError(
                f"config file {self.config_path} has no '{BUCKET_KEY}' entry"
            )

        return Config(bucket_name=bucket_name.strip())

    def save(self, config: Config) -> None:
        """
        Persist the configuration, replacing any previous file.

        Raises:
            ConfigError: If the file cannot be written
        """
        try:
            with open(self.config_path, "w") as f:
                yaml.safe_dump({BUCKET_KEY: config.bucket_name}, f, default_flow_style=False)
        except OSError as e:
            raise ConfigError(f"cannot write config file {self.config_path}: {e}") from e

    def list_available_buckets(self) -> List[str]:
        """List the buckets the current credentials can access."""
        return self.client.list_accessible_buckets()

    def setup(
        self,
        force: bool = False,
        skip_prompts: bool = False,
        buckets: Optional[Sequence[str]] = None,
    ) -> Config:
        """
        Run the interactive setup flow if needed.

        Args:
            force: Reconfigure even when a configuration already exists
            skip_prompts: Skip the "configure now?" confirmation
            buckets: Already-known accessible buckets, listed on demand if None

        Returns:
            The active Config

        Raises:
            SetupCancelled: If the user declines or quits the selection
            NoBucketsError: If there is no bucket to choose from
            ConfigError: If the configuration cannot be persisted
        """
        if self.exists() and not force:
            return self.get()

        if not skip_prompts:
            logger.info("share is not configured yet, do you want to configure it now?")
            if not self.prompter.confirm("Configure share now? [y/n]"):
                raise SetupCancelled("share was not configured")

        logger.info("share will use AWS credentials from the default credential chain")
        if buckets is None:
            buckets = self.list_available_buckets()
        if not buckets:
            raise NoBucketsError("no accessible S3 buckets found to store files")

        bucket_name = self.prompter.select("Select AWS S3 bucket to store files", list(buckets))
        if not bucket_name:
            raise SetupCancelled("no bucket selected")

        logger.info(f"saving bucket name: {bucket_name} to {self.config_path}")
        config = Config(bucket_name=bucket_name)
        self.save(config)
        logger.info("share is now configured")
        return config
