#!/usr/bin/env python3
"""Pytest configuration and shared fixtures."""

import os
import sys
import tempfile
import pytest
from unittest.mock import Mock

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from s3share.config_store import Config, ConfigStore


class FakeObjectStore:
    """In-memory multipart store that records every call in order."""

    def __init__(self, buckets=None):
        self.buckets = list(buckets or ["bucket"])
        self.calls = []
        self.uploads = {}
        self.objects = {}
        self.public = set()
        self._next_id = 1

    def list_accessible_buckets(self):
        self.calls.append(("list",))
        return list(self.buckets)

    def initiate_multipart_upload(self, bucket, key, content_type):
        upload_id = f"upload-{self._next_id}"
        self._next_id += 1
        self.calls.append(("initiate", bucket, key, content_type))
        self.uploads[upload_id] = {}
        return {"upload_id": upload_id, "bucket": bucket, "key": key}

    def upload_part(self, upload_id, bucket, key, part_number, data):
        self.calls.append(("part", part_number, len(data)))
        self.uploads[upload_id][part_number] = bytes(data)
        return f'"etag-{part_number}"'

    def complete_multipart_upload(self, upload_id, bucket, key, parts):
        self.calls.append(("complete", [p["PartNumber"] for p in parts]))
        stored = self.uploads.pop(upload_id)
        self.objects[(bucket, key)] = b"".join(
            stored[p["PartNumber"]] for p in parts
        )
        return key

    def abort_multipart_upload(self, upload_id, bucket, key):
        self.calls.append(("abort", upload_id))
        self.uploads.pop(upload_id, None)

    def set_public_read_access(self, bucket, key):
        self.calls.append(("acl", bucket, key))
        self.public.add((bucket, key))

    def call_names(self):
        return [call[0] for call in self.calls]


@pytest.fixture
def fake_store():
    """Create an in-memory object store."""
    return FakeObjectStore(buckets=["bucket", "other-bucket"])


@pytest.fixture
def mock_client():
    """Create a mock object store client that accepts every call."""
    client = Mock()
    client.list_accessible_buckets.return_value = ["bucket"]
    client.initiate_multipart_upload.side_effect = lambda bucket, key, content_type: {
        "upload_id": "upload-1",
        "bucket": bucket,
        "key": key,
    }
    client.upload_part.side_effect = (
        lambda upload_id, bucket, key, part_number, data: f"etag-{part_number}"
    )
    client.complete_multipart_upload.side_effect = (
        lambda upload_id, bucket, key, parts: key
    )
    return client


@pytest.fixture
def mock_prompter():
    """Create a prompter that confirms and picks the first bucket."""
    prompter = Mock()
    prompter.confirm.return_value = True
    prompter.select.side_effect = lambda label, items: items[0] if items else None
    return prompter


@pytest.fixture
def temp_config_path():
    """Create a path for a configuration file that does not exist yet."""
    directory = tempfile.mkdtemp()
    path = os.path.join(directory, ".share.yaml")
    yield path
    if os.path.exists(path):
        os.unlink(path)
    os.rmdir(directory)


@pytest.fixture
def config_store(mock_client, mock_prompter, temp_config_path):
    """Create a config store backed by a temporary file."""
    return ConfigStore(mock_client, mock_prompter, config_path=temp_config_path)


@pytest.fixture
def bucket_config():
    return Config(bucket_name="bucket")


@pytest.fixture
def make_file():
    """Create temporary files of a given content; removed after the test."""
    paths = []

    def _make(content: bytes, suffix: str = ".bin") -> str:
        fd, path = tempfile.mkstemp(suffix=suffix)
        os.write(fd, content)
        os.close(fd)
        paths.append(path)
        return path

    yield _make
    for path in paths:
        if os.path.exists(path):
            os.unlink(path)


@pytest.fixture
def temp_file(make_file):
    """Create a temporary file for upload testing."""
    return make_file(b"Test file content for upload testing", suffix=".txt")
