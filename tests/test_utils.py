#!/usr/bin/env python3
"""Tests for utility functions."""

import os
import sys
from unittest.mock import patch

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from s3share.utils import (
    DEFAULT_CONTENT_TYPE,
    SNIFF_LENGTH,
    TEXT_CONTENT_TYPE,
    confirm_action,
    file_base_name,
    format_size,
    format_speed,
    format_time,
    read_file_header,
    select_from_list,
    sniff_content_type,
)


class TestFormatTime:
    """Tests for format_time function."""

    def test_seconds_only(self):
        assert format_time(30) == "30s"
        assert format_time(0) == "0s"

    def test_minutes_and_seconds(self):
        assert format_time(90) == "1m 30s"

    def test_hours_minutes_seconds(self):
        assert format_time(3661) == "1h 1m 1s"


class TestFormatSize:
    """Tests for format_size function."""

    def test_bytes(self):
        assert format_size(0) == "0 B"
        assert format_size(1023) == "1023 B"

    def test_kilobytes(self):
        assert format_size(1536) == "1.50 KB"

    def test_megabytes(self):
        assert format_size(1024 * 1024) == "1.00 MB"

    def test_gigabytes(self):
        assert format_size(1024 * 1024 * 1024 * 2.5) == "2.50 GB"


class TestFormatSpeed:
    """Tests for format_speed function."""

    def test_units(self):
        assert format_speed(512) == "512.00 B/s"
        assert format_speed(2048) == "2.00 KB/s"
        assert format_speed(3 * 1024 * 1024) == "3.00 MB/s"


class TestSniffContentType:
    """Tests for content type detection from leading bytes."""

    def test_png_signature(self):
        assert sniff_content_type(b"\x89PNG\r\n\x1a\n" + b"\x00" * 20) == "image/png"

    def test_signature_beats_extension(self):
        """Real bytes should win over a misleading extension."""
        assert sniff_content_type(b"%PDF-1.4\n", "notes.txt") == "application/pdf"

    def test_mp4_at_offset(self):
        assert sniff_content_type(b"\x00\x00\x00\x18ftypmp42") == "video/mp4"

    def test_riff_webp(self):
        assert sniff_content_type(b"RIFF\x00\x00\x00\x00WEBPVP8 ") == "image/webp"

    def test_html(self):
        assert sniff_content_type(b"  \n<!DOCTYPE html><html>").startswith("text/html")

    def test_extension_used_for_plain_bytes(self):
        assert sniff_content_type(b"a,b\n1,2\n", "data.csv") == "text/csv"

    def test_plain_text(self):
        assert sniff_content_type(b"hello world\n") == TEXT_CONTENT_TYPE

    def test_binary(self):
        assert sniff_content_type(b"\x00\x01\x02\x03binary") == DEFAULT_CONTENT_TYPE

    def test_utf8_bom(self):
        assert sniff_content_type(b"\xef\xbb\xbfhello") == "text/plain; charset=utf-8"


class TestReadFileHeader:
    """Tests for reading the sniffing window."""

    def test_small_file_read_whole(self, make_file):
        path = make_file(b"tiny")
        assert read_file_header(path) == b"tiny"

    def test_large_file_read_window(self, make_file):
        content = bytes(range(256)) * 4
        path = make_file(content)
        assert read_file_header(path) == content[:SNIFF_LENGTH]


class TestFileBaseName:
    def test_strips_directories(self):
        assert file_base_name("/tmp/dir/report.pdf") == "report.pdf"
        assert file_base_name("report.pdf") == "report.pdf"
        assert file_base_name("dir/sub/") == "sub"


class TestPrompts:
    """Tests for interactive helpers."""

    @patch("builtins.input", return_value="y")
    def test_confirm_short_yes(self, mock_input):
        assert confirm_action("Continue?", require_yes=False) is True

    @patch("builtins.input", return_value="n")
    def test_confirm_no(self, mock_input):
        assert confirm_action("Continue?", require_yes=False) is False

    @patch("builtins.input", side_effect=EOFError())
    def test_confirm_eof(self, mock_input):
        assert confirm_action("Continue?") is False

    @patch("builtins.input", side_effect=["9", "abc", "2"])
    def test_select_retries_invalid_input(self, mock_input, capsys):
        assert select_from_list("Pick one", ["alpha", "beta"]) == "beta"
        assert mock_input.call_count == 3
        assert "1. alpha" in capsys.readouterr().out

    @patch("builtins.input", return_value="q")
    def test_select_quit(self, mock_input):
        assert select_from_list("Pick one", ["alpha"]) is None

    def test_select_empty(self):
        assert select_from_list("Pick one", []) is None
