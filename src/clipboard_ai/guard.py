"""
Guard Filter Module
Rejects captures that are empty or look like our own error output.

Text containing a phrase this program writes into its failure messages,
or a fragment of a message already shown in a failure notification,
never reaches the rephrase service. SDK error text is surfaced only
behind the "Rephrase request failed:" prefix; the denylist matches that
prefix, not the SDK wording.
"""

import logging
import threading
from typing import Iterable, Optional, Set

from clipboard_ai.exceptions import NoSelectionError, ErrorLoopDetectedError

logger = logging.getLogger(__name__)

# Lower-case phrases that appear in this program's own failure messages
DEFAULT_DENYLIST = (
    "rephrasing failed",
    "rephrase request failed",
    "no response received",
    "gemini_api_key is not set",
    "groq_api_key is not set",
    "failed to copy to clipboard",
)

# Shortest selection treated as a fragment of a remembered failure message
MIN_FRAGMENT_LENGTH = 20


def _normalize(text: Optional[str]) -> str:
    """Lower-case with runs of whitespace collapsed."""
    return " ".join((text or "").split()).lower()


class GuardFilter:
    """Decides whether captured text may be sent to the rephrase service."""

    def __init__(self, denylist: Optional[Iterable[str]] = None):
        """
        Args:
            denylist: Substrings that mark text as a previously surfaced error.
                      Matched case-insensitively. Defaults to DEFAULT_DENYLIST.
        """
        phrases = DEFAULT_DENYLIST if denylist is None else denylist
        self.denylist = tuple(_normalize(p) for p in phrases if p and p.strip())
        self._surfaced: Set[str] = set()
        self._lock = threading.Lock()

    def remember(self, message: str) -> None:
        """Record a message this process showed in a failure notification."""
        normalized = _normalize(message)
        if normalized:
            with self._lock:
                self._surfaced.add(normalized)

    def _is_surfaced(self, normalized: str) -> bool:
        """Whether text equals, contains or is a long enough part of a remembered message."""
        with self._lock:
            surfaced = list(self._surfaced)
        for message in surfaced:
            if message == normalized:
                return True
            if len(message) >= MIN_FRAGMENT_LENGTH and message in normalized:
                return True
            if len(normalized) >= MIN_FRAGMENT_LENGTH and normalized in message:
                return True
        return False

    def check(self, text: Optional[str]) -> str:
        """
        Validate captured text.

        Args:
            text: Captured clipboard text

        Returns:
            The text unchanged.

        Raises:
            NoSelectionError: If text is empty or whitespace-only
            ErrorLoopDetectedError: If text matches the denylist or a surfaced message
        """
        if not text or not text.strip():
            raise NoSelectionError("No text selected")

        normalized = _normalize(text)
        for phrase in self.denylist:
            if phrase in normalized:
                logger.info(f"Rejected capture containing denylisted phrase '{phrase}'")
                raise ErrorLoopDetectedError(
                    f"Selection looks like an error message ('{phrase}')"
                )

        if self._is_surfaced(normalized):
            logger.info("Rejected capture matching a previously surfaced error")
            raise ErrorLoopDetectedError("Selection is a previously shown error message")

        return text

    def is_allowed(self, text: Optional[str]) -> bool:
        """Return True if check() would accept text."""
        try:
            self.check(text)
        except (NoSelectionError, ErrorLoopDetectedError):
            return False
        return True
