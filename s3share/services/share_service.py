#!/usr/bin/env python3
"""
Share Service Module

Runs a complete share: configuration, bucket check, upload, public access
and URL construction.
"""

import os
import urllib.parse
from dataclasses import dataclass
from typing import Callable, Optional

from ..clipboard import copy_to_clipboard
from ..config_store import ConfigStore
from ..errors import InputError, StoreError, TransportError, VisibilityGrantError
from ..logging_utils import get_logger
from ..utils import BLUE, END
from .bucket_service import BucketReconciler, SetupAction, ensure_configured
from .upload_service import ChunkedUploader

logger = get_logger(__name__)

DEFAULT_URL_DOMAIN = "s3.amazonaws.com"

ACL_HINT = (
    "make sure your bucket has ACLs enabled and does not "
    '"Block public access to buckets and objects granted through new access control lists"\n'
    "See: https://s3.console.aws.amazon.com/s3/buckets/{bucket}?tab=permissions"
)


@dataclass(frozen=True)
class ShareResult:
    public_url: str
    bucket_name: str
    object_key: str


def build_public_url(bucket_name: str, object_key: str, domain: str = DEFAULT_URL_DOMAIN) -> str:
    """
    Build the public URL of an object.

    Args:
        bucket_name: Bucket holding the object (lower-cased in the host name)
        object_key: Key of the object
        domain: Storage provider domain

    Returns:
        https://{bucket}.{domain}/{key} with the key URL-encoded
    """
    return f"https://{bucket_name.lower()}.{domain}/{urllib.parse.quote(object_key, safe='/')}"


class ShareService:
    """Service that shares a local file through a public S3 URL."""

    def __init__(
        self,
        client,
        config_store: ConfigStore,
        uploader: ChunkedUploader,
        reconciler: Optional[BucketReconciler] = None,
        url_domain: str = DEFAULT_URL_DOMAIN,
        clipboard: Callable[[str], None] = copy_to_clipboard,
    ):
        """
        Initialize the share service.

        Args:
            client: Object store client
            config_store: Bucket configuration store
            uploader: Chunked uploader
            reconciler: Bucket reconciler (built from client and store if None)
            url_domain: Domain used for public URLs
            clipboard: Function that copies text to the clipboard
        """
        self.client = client
        self.config_store = config_store
        self.uploader = uploader
        self.reconciler = reconciler or BucketReconciler(client, config_store)
        self.url_domain = url_domain
        self.clipboard = clipboard

    def share(self, file_path: str, copy_to_clipboard: bool = False) -> ShareResult:
        """
        Upload a file and make it publicly accessible.

        Args:
            file_path: Path of the file to share
            copy_to_clipboard: Copy the resulting URL to the clipboard

        Returns:
            ShareResult with the public URL

        Raises:
            ShareError: Any subclass, depending on the failing step
        """
        if ensure_configured(self.config_store.exists()) is SetupAction.FIRST_RUN:
            self.config_store.setup()

        if not file_path:
            raise InputError("no filename provided")
        if not os.path.isfile(file_path):
            raise InputError("file does not exist")

        config = self.config_store.get()
        config = self.reconciler.ensure_valid_bucket(config)

        object_key = self.uploader.upload(file_path, config)
        self.grant_public_access(config.bucket_name, object_key)

        public_url = build_public_url(config.bucket_name, object_key, self.url_domain)
        logger.info(f"File uploaded successfully. File location: {BLUE}{public_url}{END}")

        if copy_to_clipboard:
            self.clipboard(public_url)
            logger.info("URL copied to clipboard")

        return ShareResult(
            public_url=public_url,
            bucket_name=config.bucket_name,
            object_key=object_key,
        )

    def grant_public_access(self, bucket_name: str, object_key: str) -> None:
        """
        Grant public read access to an uploaded object.

        Raises:
            VisibilityGrantError: With a remediation hint if the grant fails
        """
        try:
            self.client.set_public_read_access(bucket_name, object_key)
        except (TransportError, StoreError) as e:
            logger.debug(f"put_object_acl failed: {e}")
            raise VisibilityGrantError(
                bucket_name, object_key, ACL_HINT.format(bucket=bucket_name)
            ) from e
