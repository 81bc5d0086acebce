#!/usr/bin/env python3
"""
Utility functions for s3share.
"""

import os
import logging
import mimetypes
from typing import Optional, Sequence, Union
from tqdm import tqdm

logger = logging.getLogger(__name__)

BLUE = "\033[94m"
END = "\033[0m"

# Number of leading bytes inspected when detecting a content type
SNIFF_LENGTH = 512

DEFAULT_CONTENT_TYPE = "application/octet-stream"
TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"

# (offset, signature, content type), checked in order
MAGIC_SIGNATURES = [
    (0, b"%PDF-", "application/pdf"),
    (0, b"%!PS-Adobe-", "application/postscript"),
    (0, b"\x89PNG\r\n\x1a\n", "image/png"),
    (0, b"\xff\xd8\xff", "image/jpeg"),
    (0, b"GIF87a", "image/gif"),
    (0, b"GIF89a", "image/gif"),
    (0, b"BM", "image/bmp"),
    (0, b"\x00\x00\x01\x00", "image/x-icon"),
    (0, b"II*\x00", "image/tiff"),
    (0, b"MM\x00*", "image/tiff"),
    (0, b"PK\x03\x04", "application/zip"),
    (0, b"\x1f\x8b\x08", "application/x-gzip"),
    (0, b"BZh", "application/x-bzip2"),
    (0, b"7z\xbc\xaf\x27\x1c", "application/x-7z-compressed"),
    (0, b"Rar!\x1a\x07", "application/x-rar-compressed"),
    (0, b"\xfd7zXZ\x00", "application/x-xz"),
    (0, b"\x00asm", "application/wasm"),
    (0, b"OggS\x00", "application/ogg"),
    (0, b"ID3", "audio/mpeg"),
    (0, b"fLaC", "audio/flac"),
    (0, b"\x1aE\xdf\xa3", "video/webm"),
    (4, b"ftyp", "video/mp4"),
    (0, b"\x7fELF", "application/x-executable"),
]

# RIFF containers carry their format at offset 8
RIFF_FORMATS = {
    b"WEBP": "image/webp",
    b"WAVE": "audio/wave",
    b"AVI ": "video/avi",
}

# Byte order marks announce text regardless of extension
TEXT_BOMS = [
    (b"\xef\xbb\xbf", "text/plain; charset=utf-8"),
    (b"\xfe\xff", "text/plain; charset=utf-16be"),
    (b"\xff\xfe", "text/plain; charset=utf-16le"),
]

MARKUP_PREFIXES = [
    (b"<!doctype html", "text/html; charset=utf-8"),
    (b"<html", "text/html; charset=utf-8"),
    (b"<head", "text/html; charset=utf-8"),
    (b"<body", "text/html; charset=utf-8"),
    (b"<?xml", "text/xml; charset=utf-8"),
]

# Control bytes that never appear in text files
BINARY_BYTES = frozenset(
    list(range(0x00, 0x09)) + [0x0B] + list(range(0x0E, 0x1B)) + list(range(0x1C, 0x20))
)


def format_time(seconds: float) -> str:
    """
    Format seconds into a human-readable time string.

    Args:
        seconds: Number of seconds

    Returns:
        Human-readable time string
    """
    hours, remainder = divmod(int(seconds), 3600)
    minutes, seconds = divmod(remainder, 60)

    if hours > 0:
        return f"{hours}h {minutes}m {seconds}s"
    elif minutes > 0:
        return f"{minutes}m {seconds}s"
    else:
        return f"{seconds}s"


def format_size(size_bytes: Union[int, float]) -> str:
    """
    Format a size in bytes to a human-readable string.

    Args:
        size_bytes: Size in bytes

    Returns:
        Human-readable string with appropriate unit (B, KB, MB, GB)
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.2f} KB"
    elif size_bytes < 1024 * 1024 * 1024:
        return f"{size_bytes / (1024 * 1024):.2f} MB"
    else:
        return f"{size_bytes / (1024 * 1024 * 1024):.2f} GB"


def format_speed(bytes_per_second: float) -> str:
    """
    Format a speed in bytes/second to a human-readable string.

    Args:
        bytes_per_second: Speed in bytes per second

    Returns:
        Human-readable string with appropriate unit (B/s, KB/s, MB/s, GB/s)
    """
    if bytes_per_second < 1024:
        return f"{bytes_per_second:.2f} B/s"
    elif bytes_per_second < 1024 * 1024:
        return f"{bytes_per_second / 1024:.2f} KB/s"
    elif bytes_per_second < 1024 * 1024 * 1024:
        return f"{bytes_per_second / (1024 * 1024):.2f} MB/s"
    else:
        return f"{bytes_per_second / (1024 * 1024 * 1024):.2f} GB/s"


def read_file_header(file_path: str, length: int = SNIFF_LENGTH) -> bytes:
    """
    Read the leading bytes of a file for content type detection.

    Args:
        file_path: Path to the file
        length: Maximum number of bytes to read

    Returns:
        At most `length` bytes; the whole file when it is smaller
    """
    with open(file_path, "rb") as f:
        return f.read(length)


def sniff_content_type(header: bytes, file_name: Optional[str] = None) -> str:
    """
    Detect a content type from the leading bytes of a file.

    Known binary signatures win, then the file extension, then a text/binary
    heuristic on the bytes themselves.

    Args:
        header: Leading bytes of the file (see SNIFF_LENGTH)
        file_name: Optional file name used as an extension hint

    Returns:
        A MIME content type string
    """
    for bom, content_type in TEXT_BOMS:
        if header.startswith(bom):
            return content_type

    for offset, signature, content_type in MAGIC_SIGNATURES:
        if header[offset:offset + len(signature)] == signature:
            return content_type

    if header[:4] == b"RIFF" and header[8:12] in RIFF_FORMATS:
        return RIFF_FORMATS[header[8:12]]

    stripped = header.lstrip(b" \t\n\r\x0c").lower()
    for prefix, content_type in MARKUP_PREFIXES:
        if stripped.startswith(prefix):
            return content_type

    if file_name:
        guessed = mimetypes.guess_type(file_name)[0]
        if guessed:
            return guessed

    if not any(byte in BINARY_BYTES for byte in header):
        return TEXT_CONTENT_TYPE

    return DEFAULT_CONTENT_TYPE


def create_progress_bar(total_size: int, desc: str = "sharing") -> tqdm:
    """
    Create a byte progress bar for an upload.

    Args:
        total_size: Number of bytes to transfer
        desc: Description for the progress bar

    Returns:
        A tqdm progress bar
    """
    return tqdm(
        total=total_size,
        unit="B",
        unit_scale=True,
        unit_divisor=1024,
        desc=f"↑ {desc}",
        bar_format="{desc}: {percentage:3.0f}%|{bar}| {n_fmt}/{total_fmt} [{elapsed}<{remaining}]",
    )


def confirm_action(message: str, require_yes: bool = True) -> bool:
    """
    Get user confirmation for an action with consistent formatting.

    Args:
        message: The confirmation message to display
        require_yes: If True, require exact 'yes' response; if False, accept 'y' or 'yes'

    Returns:
        bool: True if user confirmed, False otherwise
    """
    try:
        response = input(f"{message} ").strip().lower()
        if require_yes:
            return response == "yes"
        else:
            return response in ["y", "yes"]
    except (KeyboardInterrupt, EOFError):
        print("\nOperation cancelled.")
        return False


def select_from_list(label: str, items: Sequence[str]) -> Optional[str]:
    """
    Let the user pick one entry from a numbered list.

    Args:
        label: Heading shown above the list
        items: Entries to choose from

    Returns:
        The selected entry, or None if the user quit
    """
    if not items:
        return None

    print(label)
    for i, item in enumerate(items, 1):
        print(f"{i:>3}. {item}")

    while True:
        try:
            selection = input("Enter number to select or 'q' to quit: ").strip()

            if selection.lower() == "q":
                return None

            try:
                index = int(selection) - 1
                if 0 <= index < len(items):
                    return items[index]
                else:
                    logger.warning(
                        f"Invalid selection. Please enter a number between 1 and {len(items)}"
                    )
            except ValueError:
                logger.warning("Invalid input. Please enter a number or 'q' to quit")
        except (KeyboardInterrupt, EOFError):
            print("\nSelection cancelled.")
            return None


def file_base_name(file_path: str) -> str:
    """Return the object key used for a local file: its base name."""
    return os.path.basename(os.path.normpath(file_path))
