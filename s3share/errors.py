#!/usr/bin/env python3
"""
Exception types raised by s3share.

Every error the CLI knows how to report derives from ShareError. Part level
upload failures are retried inside the upload service; everything else
propagates up to the command line entry point.
"""

from typing import Optional


class ShareError(Exception):
    """Base class for all s3share errors."""

    exit_code = 1


class InputError(ShareError):
    """The user supplied a bad or missing file name."""


class EmptyFileError(InputError):
    """The file to share has no content."""


class SetupError(ShareError):
    """Configuration could not be established."""


class ConfigError(SetupError):
    """The stored configuration is missing, unreadable or malformed."""


class NoBucketsError(SetupError):
    """The account has no buckets to choose from."""


class SetupCancelled(SetupError):
    """The user declined to configure s3share."""

    exit_code = 0


class BucketInvalidError(ShareError):
    """The configured bucket is no longer accessible."""

    def __init__(self, bucket_name: str):
        super().__init__(
            f"bucket '{bucket_name}' does not exist or is no longer accessible"
        )
        self.bucket_name = bucket_name


class UploadError(ShareError):
    """Base class for failures while transferring the file."""


class TransportError(UploadError):
    """A call to the object store failed before the store could answer."""


class StoreError(UploadError):
    """The object store answered with an error."""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.code = code


class IncompleteUploadError(UploadError):
    """Completion was accepted but the store did not return an object key."""


class VisibilityGrantError(ShareError):
    """The object was uploaded but public read access could not be granted."""

    def __init__(self, bucket_name: str, key: str, hint: str):
        super().__init__(f"error granting public read access to {key}\nhint: {hint}")
        self.bucket_name = bucket_name
        self.key = key
        self.hint = hint


class ClipboardError(ShareError):
    """The system clipboard is not available."""
