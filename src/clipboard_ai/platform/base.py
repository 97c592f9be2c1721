"""
Platform Abstraction - Base Classes

This module defines abstract base classes for platform-specific components.
Only macOS ships an implementation; the interfaces keep the orchestration
code free of PyObjC so it can be exercised with test doubles.
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional


class HotkeyListenerBase(ABC):
    """
    Abstract base class for the global shortcut.

    Implementations register one fixed modifier+key combination and call
    on_hotkey (no payload) on every press for the process lifetime.
    """

    def __init__(self, on_hotkey: Callable[[], None]):
        """
        Initialize hotkey listener.

        Args:
            on_hotkey: Called each time the shortcut is pressed
        """
        self.on_hotkey = on_hotkey

    @abstractmethod
    def start(self) -> None:
        """Start listening for the hotkey."""
        pass

    @abstractmethod
    def stop(self) -> None:
        """Stop listening and clean up resources."""
        pass

    @abstractmethod
    def get_hotkey_description(self) -> str:
        """
        Get human-readable description of the hotkey.

        Returns:
            Description like "Cmd+Shift+C"
        """
        pass


class ClipboardBase(ABC):
    """
    Abstract base class for clipboard access.

    Besides plain text read/write, capture needs a change counter that
    increments on every write, and a way to synthesize the copy shortcut
    in the frontmost application.
    """

    @abstractmethod
    def read_text(self) -> Optional[str]:
        """
        Read the clipboard text payload.

        Returns:
            Clipboard text, or None if it holds no string

        Raises:
            OutputError: If the clipboard cannot be read
        """
        pass

    @abstractmethod
    def write_text(self, text: str) -> None:
        """
        Clear the clipboard and set its text payload.

        Args:
            text: New clipboard text

        Raises:
            OutputError: If the clipboard cannot be written
        """
        pass

    @abstractmethod
    def change_count(self) -> int:
        """Return the clipboard change counter."""
        pass

    @abstractmethod
    def simulate_copy(self) -> None:
        """
        Send the copy shortcut to the frontmost application.

        Raises:
            OutputError: If the keystroke cannot be synthesized
        """
        pass


class NotifierBase(ABC):
    """
    Abstract base class for user feedback.

    Both methods are best effort and must never raise.
    """

    @abstractmethod
    def notify(self, title: str, message: str) -> None:
        """Show a transient notification."""
        pass

    @abstractmethod
    def beep(self) -> None:
        """Play the audible failure cue."""
        pass
