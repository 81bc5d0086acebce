#!/usr/bin/env python3
"""
Upload Service Module

Chunked multipart upload of a single file to S3.

The file is split into fixed size parts that are uploaded one after another,
each with a bounded number of attempts. Once every part is stored the object
is assembled with a completion call. If any part runs out of attempts, or
completion fails, the multipart upload is aborted so no orphaned parts stay
behind on the store.
"""

import os
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ..config_store import Config
from ..errors import (
    ConfigError,
    EmptyFileError,
    IncompleteUploadError,
    InputError,
    ShareError,
    StoreError,
    TransportError,
    UploadError,
)
from ..logging_utils import get_logger
from ..retry_policy import RetryPolicy
from ..utils import (
    create_progress_bar,
    file_base_name,
    format_size,
    format_speed,
    format_time,
    read_file_header,
    sniff_content_type,
)

logger = get_logger(__name__)

PART_SIZE = 1024 * 1024  # 1 MiB
MAX_RETRIES = 3
PROGRESS_BAR_THRESHOLD = 5 * 1024 * 1024  # 5 MiB


@dataclass(frozen=True)
class Part:
    """A contiguous byte range of the source file."""

    part_number: int
    offset: int
    length: int

    @property
    def byte_range(self) -> Tuple[int, int]:
        """Half-open [start, end) range covered by the part."""
        return self.offset, self.offset + self.length


@dataclass(frozen=True)
class CompletedPart:
    part_number: int
    etag: str

    def to_dict(self) -> Dict[str, Any]:
        return {"PartNumber": self.part_number, "ETag": self.etag}


@dataclass(frozen=True)
class PartUploadAttempt:
    part_number: int
    byte_range: Tuple[int, int]
    try_count: int


@dataclass
class UploadSession:
    """State of one multipart upload, from initiation to completion or abort."""

    upload_id: str
    object_key: str
    bucket_name: str
    total_size: int
    part_size: int = PART_SIZE
    next_part_number: int = 1
    remaining_bytes: Optional[int] = None
    completed_parts: List[CompletedPart] = field(default_factory=list)

    def __post_init__(self):
        if self.remaining_bytes is None:
            self.remaining_bytes = self.total_size

    def record(self, part: Part, etag: str) -> None:
        """
        Record a successfully uploaded part.

        Parts must be recorded in order, starting at 1, with no gaps.
        """
        if part.part_number != self.next_part_number:
            raise ValueError(
                f"part {part.part_number} recorded out of order, "
                f"expected part {self.next_part_number}"
            )
        self.completed_parts.append(CompletedPart(part.part_number, etag))
        self.next_part_number += 1
        self.remaining_bytes -= part.length

    def parts_payload(self) -> List[Dict[str, Any]]:
        """Completed parts in the form the completion call expects."""
        return [part.to_dict() for part in self.completed_parts]


def plan_parts(total_size: int, part_size: int = PART_SIZE) -> List[Part]:
    """
    Split [0, total_size) into consecutive parts.

    Every part is part_size bytes long except the last one, which holds the
    remainder. An empty file yields no parts.

    Args:
        total_size: Size of the file in bytes
        part_size: Size of each part in bytes

    Returns:
        Parts in ascending part number order, numbered from 1
    """
    if part_size <= 0:
        raise ValueError(f"part_size must be positive, got {part_size}")
    if total_size < 0:
        raise ValueError(f"total_size cannot be negative, got {total_size}")

    parts = []
    offset = 0
    part_number = 1
    remaining = total_size
    while remaining > 0:
        length = part_size if remaining >= part_size else remaining
        parts.append(Part(part_number, offset, length))
        offset += length
        remaining -= length
        part_number += 1
    return parts


class ChunkedUploader:
    """Service for uploading a file as an S3 multipart upload."""

    def __init__(
        self,
        client,
        retry_policy: Optional[RetryPolicy] = None,
        part_size: int = PART_SIZE,
        progress_threshold: int = PROGRESS_BAR_THRESHOLD,
    ):
        """
        Initialize the uploader.

        Args:
            client: Object store client (see s3_client.S3Client)
            retry_policy: Attempts and backoff per part (default: 3 immediate attempts)
            part_size: Size of each part in bytes
            progress_threshold: Files larger than this show a progress bar
        """
        self.client = client
        self.retry_policy = retry_policy or RetryPolicy(max_retries=MAX_RETRIES)
        self.part_size = part_size
        self.progress_threshold = progress_threshold

    def upload(self, file_path: str, config: Config) -> str:
        """
        Upload a file to the configured bucket.

        Args:
            file_path: Path of the file to upload
            config: Configuration holding the destination bucket

        Returns:
            The key of the uploaded object

        Raises:
            InputError: If the file cannot be read or is empty
            TransportError: If the store could not be reached
            StoreError: If the store rejected a call
            IncompleteUploadError: If completion returned no object key
        """
        if not config.bucket_name:
            raise ConfigError("no bucket configured")

        try:
            total_size = os.path.getsize(file_path)
            header = read_file_header(file_path)
        except OSError as e:
            raise InputError(f"cannot open file: {e}") from e

        parts = plan_parts(total_size, self.part_size)
        if not parts:
            raise EmptyFileError(f"{file_path} is empty, nothing to share")

        key = file_base_name(file_path)
        content_type = sniff_content_type(header, key)
        logger.debug(f"Using content type {content_type} for {key}")

        initiated = self.client.initiate_multipart_upload(
            config.bucket_name, key, content_type
        )
        session = UploadSession(
            upload_id=initiated["upload_id"],
            object_key=initiated["key"],
            bucket_name=initiated["bucket"],
            total_size=total_size,
            part_size=self.part_size,
        )
        logger.debug(
            f"Uploading {format_size(total_size)} in {len(parts)} part(s) "
            f"of up to {format_size(self.part_size)}"
        )

        start_time = time.time()
        try:
            self._upload_parts(file_path, session, parts)
            object_key = self.client.complete_multipart_upload(
                session.upload_id,
                session.bucket_name,
                session.object_key,
                session.parts_payload(),
            )
        except Exception:
            self._abort(session)
            raise

        if not object_key:
            raise IncompleteUploadError(
                f"upload {session.upload_id} completed but the store returned no object key"
            )

        elapsed_time = time.time() - start_time
        speed = total_size / elapsed_time if elapsed_time > 0 else 0
        logger.info(
            f"Uploaded {key} ({format_size(total_size)}) in "
            f"{format_time(elapsed_time)} at {format_speed(speed)}"
        )
        return object_key

    def _upload_parts(self, file_path: str, session: UploadSession, parts: List[Part]) -> None:
        """Stream the parts from disk and upload them in order."""
        bar = None
        if session.total_size > self.progress_threshold:
            bar = create_progress_bar(session.total_size)
        try:
            with open(file_path, "rb") as f:
                for part in parts:
                    data = self._read_part(f, part)
                    etag = self._upload_part(session, part, data)
                    session.record(part, etag)
                    if bar is not None:
                        bar.update(part.length)
        except OSError as e:
            raise UploadError(f"cannot read {file_path}: {e}") from e
        finally:
            if bar is not None:
                bar.close()

    def _read_part(self, f, part: Part) -> bytes:
        f.seek(part.offset)
        data = f.read(part.length)
        if len(data) != part.length:
            raise UploadError(
                f"file changed while uploading: expected {part.length} bytes "
                f"at offset {part.offset}, read {len(data)}"
            )
        return data

    def _upload_part(self, session: UploadSession, part: Part, data: bytes) -> str:
        """
        Upload one part, retrying up to the policy's attempt ceiling.

        Returns:
            The part's ETag

        Raises:
            TransportError, StoreError: The error of the last failed attempt
        """
        max_retries = self.retry_policy.max_retries
        for try_count in range(1, max_retries + 1):
            attempt = PartUploadAttempt(part.part_number, part.byte_range, try_count)
            try:
                etag = self.client.upload_part(
                    session.upload_id,
                    session.bucket_name,
                    session.object_key,
                    part.part_number,
                    data,
                )
                logger.debug(
                    f"Part {attempt.part_number} bytes {attempt.byte_range[0]}-"
                    f"{attempt.byte_range[1]} uploaded on attempt {attempt.try_count}"
                )
                return etag
            except (TransportError, StoreError) as e:
                if try_count < max_retries:
                    logger.warning(
                        f"Part {attempt.part_number} attempt {try_count}/{max_retries} failed: {e}. Retrying..."
                    )
                    self.retry_policy.wait(try_count)
                else:
                    logger.error(
                        f"Part {attempt.part_number} failed after {max_retries} attempts: {e}"
                    )
                    raise

    def _abort(self, session: UploadSession) -> None:
        """Abort the multipart upload; failures are logged, never raised."""
        logger.error(f"Aborting multipart upload {session.upload_id}")
        try:
            self.client.abort_multipart_upload(
                session.upload_id, session.bucket_name, session.object_key
            )
        except ShareError as e:
            logger.error(f"Failed to abort multipart upload {session.upload_id}: {e}")
