#!/usr/bin/env python3
"""
System clipboard access.
"""

import pyperclip

from .errors import ClipboardError
from .logging_utils import get_logger

logger = get_logger(__name__)


def copy_to_clipboard(text: str) -> None:
    """
    Copy text to the system clipboard.

    Raises:
        ClipboardError: If no clipboard mechanism is available
    """
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        raise ClipboardError(f"cannot access the clipboard: {e}") from e
    logger.debug("URL copied to clipboard")
