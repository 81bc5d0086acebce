#!/usr/bin/env python3
"""
Retry policy for part uploads.

A policy bounds the number of attempts per part and decides how long to wait
between them. The default retries immediately, up to three attempts.
"""

import time
import logging
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_DELAY = 1.0  # seconds
DEFAULT_MAX_RETRY_DELAY = 30.0  # seconds

BACKOFF_NONE = "none"
BACKOFF_FIXED = "fixed"
BACKOFF_EXPONENTIAL = "exponential"
BACKOFF_KINDS = (BACKOFF_NONE, BACKOFF_FIXED, BACKOFF_EXPONENTIAL)


class RetryPolicy:
    """Attempt ceiling plus backoff between attempts."""

    def __init__(
        self,
        max_retries: int = DEFAULT_MAX_RETRIES,
        backoff: str = BACKOFF_NONE,
        delay: float = DEFAULT_RETRY_DELAY,
        max_delay: float = DEFAULT_MAX_RETRY_DELAY,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        """
        Initialize the retry policy.

        Args:
            max_retries: Maximum number of attempts per part (at least 1)
            backoff: One of 'none', 'fixed' or 'exponential'
            delay: Base delay in seconds for 'fixed' and 'exponential'
            max_delay: Upper bound for a single delay in seconds
            sleep: Function used to wait, time.sleep by default
        """
        if max_retries < 1:
            raise ValueError(f"max_retries must be at least 1, got {max_retries}")
        if backoff not in BACKOFF_KINDS:
            raise ValueError(
                f"Unknown backoff '{backoff}', expected one of {', '.join(BACKOFF_KINDS)}"
            )
        self.max_retries = max_retries
        self.backoff = backoff
        self.delay = max(0.0, float(delay))
        self.max_delay = max(0.0, float(max_delay))
        self._sleep = sleep or time.sleep

    @classmethod
    def from_settings(cls, settings) -> "RetryPolicy":
        """
        Build a policy from the tool settings.

        Invalid values are logged and replaced by their defaults.
        """
        return cls(
            max_retries=_read_setting(
                settings, "max_retries", DEFAULT_MAX_RETRIES, int, lambda v: v >= 1
            ),
            backoff=_read_setting(
                settings, "retry_backoff", BACKOFF_NONE, str, lambda v: v in BACKOFF_KINDS
            ),
            delay=_read_setting(
                settings, "retry_delay", DEFAULT_RETRY_DELAY, float, lambda v: v >= 0
            ),
            max_delay=_read_setting(
                settings, "max_retry_delay", DEFAULT_MAX_RETRY_DELAY, float, lambda v: v >= 0
            ),
        )

    def delay_after(self, attempt: int) -> float:
        """
        Seconds to wait after a failed attempt.

        Args:
            attempt: The 1-based attempt that just failed

        Returns:
            The delay in seconds
        """
        if self.backoff == BACKOFF_FIXED:
            return min(self.delay, self.max_delay)
        if self.backoff == BACKOFF_EXPONENTIAL:
            return min(self.delay * (2 ** (attempt - 1)), self.max_delay)
        return 0.0

    def wait(self, attempt: int) -> None:
        """Sleep for the backoff that follows a failed attempt."""
        delay = self.delay_after(attempt)
        if delay > 0:
            self._sleep(delay)


def _read_setting(
    settings, key: str, default: Any, convert: Callable[[Any], Any], is_valid: Callable[[Any], bool]
) -> Any:
    """Read and convert one setting, falling back to its default when invalid."""
    value = settings.get(key, default)
    try:
        converted = convert(value)
        if is_valid(converted):
            return converted
    except (TypeError, ValueError):
        pass
    logger.warning(f"Invalid {key} {value!r} in settings, using {default!r}")
    return default
