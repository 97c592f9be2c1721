"""macOS implementations of the platform interfaces."""

from clipboard_ai.platform.macos.clipboard import MacOSClipboard
from clipboard_ai.platform.macos.hotkey_listener import MacOSHotkeyListener
from clipboard_ai.platform.macos.notifier import MacOSNotifier

__all__ = [
    "MacOSClipboard",
    "MacOSHotkeyListener",
    "MacOSNotifier",
]
