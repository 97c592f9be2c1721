"""
Selection Capture Module
Simulates Cmd+C and reads the resulting clipboard text.

There is no completion signal for a synthesized copy, so readiness is
detected by polling the clipboard change counter a bounded number of
times. If it never changes (nothing selected, or the app was slow) the
current clipboard content is used as-is and may be stale.
"""

import logging
import random
import time
from typing import Callable, Optional

from clipboard_ai.exceptions import NoSelectionError
from clipboard_ai.platform.base import ClipboardBase

logger = logging.getLogger(__name__)


class SelectionCapture:
    """Captures the current selection through the clipboard."""

    def __init__(
        self,
        clipboard: ClipboardBase,
        attempts: int = 10,
        interval: float = 0.05,
        jitter: float = 0.02,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize selection capture.

        Args:
            clipboard: Clipboard accessor
            attempts: Maximum number of change-counter polls after the copy
            interval: Seconds between polls
            jitter: Maximum random extra delay added to each poll
            sleep: Sleep function (injectable for tests)
        """
        if attempts <= 0:
            raise ValueError("attempts must be positive")
        self.clipboard = clipboard
        self.attempts = attempts
        self.interval = interval
        self.jitter = jitter
        self._sleep = sleep

    def _wait_for_change(self, before: int) -> bool:
        """Poll until the change counter differs from before. Returns True if it did."""
        for attempt in range(self.attempts):
            self._sleep(self.interval + random.uniform(0, self.jitter))
            if self.clipboard.change_count() != before:
                logger.debug(f"Clipboard changed after {attempt + 1} poll(s)")
                return True
        return False

    def _require_text(self, text: Optional[str]) -> str:
        if text is None or not text.strip():
            raise NoSelectionError("No text on the clipboard")
        return text

    def capture(self) -> str:
        """
        Copy the current selection and return it.

        Returns:
            Captured text

        Raises:
            NoSelectionError: If the clipboard holds no text or only whitespace
            OutputError: If the clipboard cannot be accessed
        """
        before = self.clipboard.change_count()
        self.clipboard.simulate_copy()

        if not self._wait_for_change(before):
            logger.warning(
                f"Clipboard unchanged after {self.attempts} polls, using existing content"
            )

        return self._require_text(self.clipboard.read_text())

    def read_existing(self) -> str:
        """
        Return the current clipboard text without simulating a copy.

        Raises:
            NoSelectionError: If the clipboard holds no text or only whitespace
            OutputError: If the clipboard cannot be read
        """
        return self._require_text(self.clipboard.read_text())
