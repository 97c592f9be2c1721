"""
macOS Clipboard

Clipboard text via pyperclip, change counter via NSPasteboard, and the
copy shortcut synthesized with Quartz keyboard events.
"""

import logging
from typing import Optional

import pyperclip
import Quartz
from AppKit import NSPasteboard

from clipboard_ai.platform.base import ClipboardBase
from clipboard_ai.exceptions import OutputError

logger = logging.getLogger(__name__)

C_KEYCODE = 8  # 'c' key on macOS
CMD_KEYCODE = 55  # left Command key


class MacOSClipboard(ClipboardBase):
    """Reads, writes and captures clipboard text on macOS."""

    def __init__(self, pasteboard=None):
        """
        Initialize clipboard.

        Args:
            pasteboard: NSPasteboard to use for the change counter (general pasteboard if None)
        """
        self._pasteboard = pasteboard

    @property
    def pasteboard(self):
        if self._pasteboard is None:
            self._pasteboard = NSPasteboard.generalPasteboard()
        return self._pasteboard

    def read_text(self) -> Optional[str]:
        """
        Read the clipboard text payload.

        Returns:
            Clipboard text, or None if the clipboard holds no string

        Raises:
            OutputError: If clipboard read fails
        """
        try:
            text = pyperclip.paste()
        except Exception as e:
            raise OutputError(f"Failed to read clipboard: {e}")
        return text or None

    def write_text(self, text: str) -> None:
        """
        Clear the clipboard and set its text.

        Args:
            text: Text to copy to clipboard

        Raises:
            OutputError: If clipboard operation fails
        """
        try:
            self.pasteboard.clearContents()
            pyperclip.copy(text)
        except Exception as e:
            raise OutputError(f"Failed to copy to clipboard: {e}")

    def change_count(self) -> int:
        """Return NSPasteboard's change counter."""
        return int(self.pasteboard.changeCount())

    def _post_key(self, source, keycode: int, key_down: bool, flags: int) -> None:
        event = Quartz.CGEventCreateKeyboardEvent(source, keycode, key_down)
        Quartz.CGEventSetFlags(event, flags)
        Quartz.CGEventPost(Quartz.kCGHIDEventTap, event)

    def simulate_copy(self) -> None:
        """
        Simulate Cmd+C in the frontmost application.

        Flags are set explicitly to Command only so a still-held Shift
        from the hotkey does not turn this into Cmd+Shift+C.

        Raises:
            OutputError: If the events cannot be created
        """
        try:
            source = Quartz.CGEventSourceCreate(Quartz.kCGEventSourceStateHIDSystemState)
            cmd = Quartz.kCGEventFlagMaskCommand
            self._post_key(source, CMD_KEYCODE, True, cmd)
            self._post_key(source, C_KEYCODE, True, cmd)
            self._post_key(source, C_KEYCODE, False, cmd)
            self._post_key(source, CMD_KEYCODE, False, 0)
        except Exception as e:
            raise OutputError(f"Failed to simulate copy: {e}")
        logger.debug("Simulated Cmd+C")
