"""
macOS Notifier

Shows notifications through osascript and plays the system alert sound.
"""

import logging
import subprocess
import threading

from AppKit import NSBeep

from clipboard_ai.exceptions import NotificationError
from clipboard_ai.platform.base import NotifierBase

logger = logging.getLogger(__name__)


def _escape(value: str) -> str:
    """Escape a string for an AppleScript string literal."""
    # Handle backslash first, then quotes
    return value.replace('\\', '\\\\').replace('"', '\\"')


class MacOSNotifier(NotifierBase):
    """Fire-and-forget notifications on macOS."""

    def __init__(self, enabled: bool = True, background: bool = True):
        """
        Initialize notifier.

        Args:
            enabled: If False, notify() does nothing (beep still works)
            background: Deliver on a daemon thread instead of blocking
        """
        self.enabled = enabled
        self.background = background

    def send(self, title: str, message: str) -> None:
        """
        Show a notification via osascript, blocking until it returns.

        Raises:
            NotificationError: If osascript is missing, times out or fails
        """
        script = f'display notification "{_escape(message)}" with title "{_escape(title)}"'
        try:
            result = subprocess.run(
                ["osascript", "-e", script],
                capture_output=True,
                timeout=2
            )
        except (OSError, subprocess.SubprocessError) as e:
            raise NotificationError(f"osascript failed: {e}") from e
        if result.returncode != 0:
            stderr = result.stderr.decode(errors="replace") if result.stderr else ""
            raise NotificationError(f"osascript exited with {result.returncode}: {stderr.strip()}")

    def _deliver(self, title: str, message: str) -> None:
        try:
            self.send(title, message)
        except NotificationError as e:
            logger.debug(f"Notification not delivered: {e}")

    def notify(self, title: str, message: str) -> None:
        """Show a notification; failures are logged and ignored."""
        if not self.enabled:
            return
        logger.debug(f"Notify: {title} - {message}")
        if self.background:
            threading.Thread(target=self._deliver, args=(title, message), daemon=True).start()
        else:
            self._deliver(title, message)

    def beep(self) -> None:
        """Play the system alert sound."""
        try:
            NSBeep()
        except Exception as e:
            logger.debug(f"Beep failed: {e}")
