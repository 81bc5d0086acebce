#!/usr/bin/env python3
"""
AWS S3 client for s3share.
"""

from typing import Any, Dict, List, Optional

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from .errors import ConfigError, StoreError, TransportError
from .logging_utils import get_logger

logger = get_logger(__name__)

DEFAULT_CONNECT_TIMEOUT = 10  # seconds
DEFAULT_READ_TIMEOUT = 60  # seconds

PUBLIC_READ_ACL = "public-read"


def translate_error(action: str, error: Exception) -> Exception:
    """
    Map a botocore exception to an s3share error.

    Args:
        action: Short description of the failed call, used in the message
        error: The exception raised by botocore

    Returns:
        StoreError when the store answered, TransportError otherwise
    """
    if isinstance(error, ClientError):
        details = error.response.get("Error", {})
        code = details.get("Code")
        message = details.get("Message") or str(error)
        return StoreError(f"{action}: {code}: {message}", code=code)
    return TransportError(f"{action}: {error}")


class S3Client:
    """Thin wrapper over the boto3 S3 client with s3share error types."""

    def __init__(
        self,
        client: Any = None,
        profile_name: Optional[str] = None,
        region_name: Optional[str] = None,
        connect_timeout: int = DEFAULT_CONNECT_TIMEOUT,
        read_timeout: int = DEFAULT_READ_TIMEOUT,
    ):
        """
        Initialize the S3 client.

        Credentials come from boto3's default chain (environment,
        ~/.aws/credentials, instance roles) or the named profile.

        Args:
            client: Optional pre-built boto3 S3 client
            profile_name: Optional AWS profile to use
            region_name: Optional AWS region
            connect_timeout: Connect timeout in seconds for each call
            read_timeout: Read timeout in seconds for each call
        """
        if client is None:
            try:
                session = boto3.Session(
                    profile_name=profile_name, region_name=region_name
                )
                # Retries are driven per part by the upload service
                client = session.client(
                    "s3",
                    config=BotoConfig(
                        connect_timeout=connect_timeout,
                        read_timeout=read_timeout,
                        retries={"total_max_attempts": 1, "mode": "standard"},
                    ),
                )
            except BotoCoreError as e:
                raise ConfigError(f"cannot create S3 client: {e}") from e
        self.client = client

    @classmethod
    def from_settings(cls, settings) -> "S3Client":
        """Build a client from the tool settings."""
        return cls(
            profile_name=settings.get("aws_profile"),
            region_name=settings.get("aws_region"),
            connect_timeout=settings.get("connect_timeout", DEFAULT_CONNECT_TIMEOUT),
            read_timeout=settings.get("read_timeout", DEFAULT_READ_TIMEOUT),
        )

    def initiate_multipart_upload(
        self, bucket: str, key: str, content_type: str
    ) -> Dict[str, str]:
        """
        Start a multipart upload.

        Returns:
            Dict with upload_id, bucket and key as acknowledged by the store
        """
        try:
            response = self.client.create_multipart_upload(
                Bucket=bucket, Key=key, ContentType=content_type
            )
        except (ClientError, BotoCoreError) as e:
            raise translate_error("cannot create multipart upload", e) from e

        logger.debug(
            f"Started multipart upload {response['UploadId']} for s3://{bucket}/{key}"
        )
        return {
            "upload_id": response["UploadId"],
            "bucket": response.get("Bucket") or bucket,
            "key": response.get("Key") or key,
        }

    def upload_part(
        self, upload_id: str, bucket: str, key: str, part_number: int, data: bytes
    ) -> str:
        """
        Upload one part of a multipart upload.

        Returns:
            The ETag the store assigned to the part
        """
        try:
            response = self.client.upload_part(
                Body=data,
                Bucket=bucket,
                Key=key,
                PartNumber=part_number,
                UploadId=upload_id,
                ContentLength=len(data),
            )
        except (ClientError, BotoCoreError) as e:
            raise translate_error(f"cannot upload part {part_number}", e) from e

        return response["ETag"]

    def complete_multipart_upload(
        self, upload_id: str, bucket: str, key: str, parts: List[Dict[str, Any]]
    ) -> Optional[str]:
        """
        Assemble the object from its uploaded parts.

        Args:
            parts: Ascending list of {"PartNumber": n, "ETag": etag}

        Returns:
            The object key reported by the store, or None if it sent none
        """
        try:
            response = self.client.complete_multipart_upload(
                Bucket=bucket,
                Key=key,
                UploadId=upload_id,
                MultipartUpload={"Parts": parts},
            )
        except (ClientError, BotoCoreError) as e:
            raise translate_error("cannot complete multipart upload", e) from e

        return response.get("Key") or None

    def abort_multipart_upload(self, upload_id: str, bucket: str, key: str) -> None:
        """Cancel a multipart upload and release its parts on the store."""
        try:
            self.client.abort_multipart_upload(
                Bucket=bucket, Key=key, UploadId=upload_id
            )
        except (ClientError, BotoCoreError) as e:
            raise translate_error("cannot abort multipart upload", e) from e

    def set_public_read_access(self, bucket: str, key: str) -> None:
        """Grant anonymous read access to an object."""
        try:
            self.client.put_object_acl(Bucket=bucket, Key=key, ACL=PUBLIC_READ_ACL)
        except (ClientError, BotoCoreError) as e:
            raise translate_error("cannot set object ACL", e) from e
        logger.info(f"public-read ACL for {key} set")

    def list_accessible_buckets(self) -> List[str]:
        """
        List the names of the buckets the current credentials can see.

        Returns:
            Bucket names in the order the store returned them
        """
        try:
            response = self.client.list_buckets()
        except (ClientError, BotoCoreError) as e:
            raise translate_error("error listing buckets", e) from e

        return [bucket["Name"] for bucket in response.get("Buckets", [])]
