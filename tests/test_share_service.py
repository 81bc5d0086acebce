#!/usr/bin/env python3
"""Tests for the share orchestration."""

import os
import sys
import pytest
from unittest.mock import Mock

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from s3share.config_store import Config
from s3share.errors import (
    ClipboardError,
    InputError,
    SetupCancelled,
    StoreError,
    TransportError,
    VisibilityGrantError,
)
from s3share.services.share_service import ShareService, build_public_url


@pytest.fixture
def store():
    """Create a config store mock that is already configured."""
    store = Mock()
    store.exists.return_value = True
    store.get.return_value = Config("MyBucket")
    return store


@pytest.fixture
def reconciler():
    reconciler = Mock()
    reconciler.ensure_valid_bucket.side_effect = lambda config: config
    return reconciler


@pytest.fixture
def uploader():
    uploader = Mock()
    uploader.upload.side_effect = lambda path, config: os.path.basename(path)
    return uploader


@pytest.fixture
def service(mock_client, store, uploader, reconciler):
    return ShareService(
        mock_client, store, uploader, reconciler=reconciler, clipboard=Mock()
    )


class TestBuildPublicUrl:
    """Tests for public URL construction."""

    def test_lower_cases_bucket(self):
        assert build_public_url("MyBucket", "file.txt") == "https://mybucket.s3.amazonaws.com/file.txt"

    def test_quotes_key(self):
        assert (
            build_public_url("b", "my report.pdf")
            == "https://b.s3.amazonaws.com/my%20report.pdf"
        )

    def test_custom_domain(self):
        assert build_public_url("b", "k", "example.net") == "https://b.example.net/k"


class TestShare:
    """Tests for ShareService.share."""

    def test_share_success(self, service, mock_client, temp_file):
        """Should upload, grant public access and return the URL."""
        result = service.share(temp_file)

        key = os.path.basename(temp_file)
        assert result.public_url == f"https://mybucket.s3.amazonaws.com/{key}"
        assert result.object_key == key
        mock_client.set_public_read_access.assert_called_once_with("MyBucket", key)
        service.clipboard.assert_not_called()

    def test_first_run_triggers_setup(self, service, store, temp_file):
        """A missing configuration should run the interactive setup first."""
        store.exists.return_value = False
        service.share(temp_file)
        store.setup.assert_called_once_with()

    def test_setup_declined_stops(self, service, store, uploader, temp_file):
        """Declining first-run setup should stop before uploading."""
        store.exists.return_value = False
        store.setup.side_effect = SetupCancelled("share was not configured")
        with pytest.raises(SetupCancelled):
            service.share(temp_file)
        uploader.upload.assert_not_called()

    def test_configured_skips_setup(self, service, store, temp_file):
        service.share(temp_file)
        store.setup.assert_not_called()

    def test_empty_filename(self, service, uploader):
        """An empty filename should raise InputError."""
        with pytest.raises(InputError, match="no filename provided"):
            service.share("")
        uploader.upload.assert_not_called()

    def test_missing_file(self, service, uploader, reconciler):
        """A nonexistent file should raise InputError before reconciling."""
        with pytest.raises(InputError, match="file does not exist"):
            service.share("/nonexistent/file.txt")
        reconciler.ensure_valid_bucket.assert_not_called()
        uploader.upload.assert_not_called()

    def test_directory_is_not_a_file(self, service, tmp_path):
        with pytest.raises(InputError):
            service.share(str(tmp_path))

    def test_upload_uses_reconciled_config(self, service, reconciler, uploader, temp_file):
        """The upload should go to the bucket chosen during reconciliation."""
        reconciler.ensure_valid_bucket.side_effect = lambda config: Config("bar")

        result = service.share(temp_file)

        assert uploader.upload.call_args.args[1] == Config("bar")
        assert result.bucket_name == "bar"
        assert result.public_url.startswith("https://bar.")

    def test_upload_error_propagates(self, service, uploader, mock_client, temp_file):
        """Upload failures should propagate without granting access."""
        uploader.upload.side_effect = TransportError("down")
        with pytest.raises(TransportError):
            service.share(temp_file)
        mock_client.set_public_read_access.assert_not_called()

    def test_visibility_grant_failure(self, service, mock_client, temp_file):
        """A failed ACL grant should raise with a remediation hint."""
        mock_client.set_public_read_access.side_effect = StoreError(
            "AccessControlListNotSupported: no ACLs", code="AccessControlListNotSupported"
        )

        with pytest.raises(VisibilityGrantError) as exc_info:
            service.share(temp_file)

        error = exc_info.value
        assert "ACLs enabled" in error.hint
        assert "s3/buckets/MyBucket?tab=permissions" in error.hint
        assert isinstance(error.__cause__, StoreError)
        mock_client.abort_multipart_upload.assert_not_called()
        mock_client.delete_object.assert_not_called()

    def test_copy_to_clipboard(self, service, temp_file):
        """The URL should be copied when requested."""
        result = service.share(temp_file, copy_to_clipboard=True)
        service.clipboard.assert_called_once_with(result.public_url)

    def test_clipboard_failure(self, service, uploader, mock_client, temp_file):
        """Clipboard errors should surface after the upload succeeded."""
        service.clipboard.side_effect = ClipboardError("no clipboard")
        with pytest.raises(ClipboardError):
            service.share(temp_file, copy_to_clipboard=True)
        uploader.upload.assert_called_once()
        mock_client.set_public_read_access.assert_called_once()
