"""
Platform Abstraction Layer

Detects the running platform and creates platform-specific components.
ClipboardAI currently runs on macOS only.
"""

import logging
import sys
from typing import Callable

from clipboard_ai.exceptions import PlatformNotSupportedError
from clipboard_ai.platform.base import (
    ClipboardBase,
    HotkeyListenerBase,
    NotifierBase,
)

logger = logging.getLogger(__name__)

PLATFORM_ERROR_MESSAGES = {
    "macos": {
        "hotkey": (
            "Hotkey listening requires Accessibility permission.\n"
            "Grant it in System Settings > Privacy & Security > Accessibility."
        ),
        "clipboard": (
            "Clipboard access failed. Ensure PyObjC is installed:\n"
            "  pip install pyobjc-framework-Quartz pyobjc-framework-Cocoa"
        ),
        "dependency": (
            "Missing macOS dependencies. Install with:\n"
            "  pip install pyobjc-framework-Quartz pyobjc-framework-Cocoa"
        ),
    },
    "windows": {
        "unsupported": "ClipboardAI is a macOS menu bar app; Windows is not supported.",
    },
    "linux": {
        "unsupported": "ClipboardAI is a macOS menu bar app; Linux is not supported.",
    },
    "unknown": {
        "unsupported": "ClipboardAI is a macOS menu bar app; this platform is not supported.",
    },
}


def get_platform() -> str:
    """
    Detect the current platform.

    Returns:
        One of "macos", "windows", "linux", "unknown"
    """
    if sys.platform == "darwin":
        return "macos"
    if sys.platform == "win32":
        return "windows"
    if sys.platform.startswith("linux"):
        return "linux"
    return "unknown"


def get_platform_error_message(platform: str, error_type: str) -> str:
    """Get a user-facing hint for a platform error."""
    messages = PLATFORM_ERROR_MESSAGES.get(platform, PLATFORM_ERROR_MESSAGES["unknown"])
    return messages.get(error_type) or messages.get(
        "unsupported", f"Unknown error on platform '{platform}'"
    )


def _require_macos(component: str) -> None:
    platform = get_platform()
    if platform != "macos":
        logger.error(f"Cannot create {component} on {platform}")
        raise PlatformNotSupportedError(get_platform_error_message(platform, "unsupported"))


def create_hotkey_listener(on_hotkey: Callable[[], None]) -> HotkeyListenerBase:
    """
    Create the global shortcut listener.

    Raises:
        PlatformNotSupportedError: If not running on macOS or PyObjC is missing
    """
    _require_macos("hotkey listener")
    try:
        from clipboard_ai.platform.macos import MacOSHotkeyListener
    except ImportError as e:
        raise PlatformNotSupportedError(
            f"{get_platform_error_message('macos', 'dependency')}\n({e})"
        ) from e
    logger.debug("Creating MacOSHotkeyListener")
    return MacOSHotkeyListener(on_hotkey)


def create_clipboard() -> ClipboardBase:
    """
    Create the clipboard accessor.

    Raises:
        PlatformNotSupportedError: If not running on macOS or PyObjC is missing
    """
    _require_macos("clipboard")
    try:
        from clipboard_ai.platform.macos import MacOSClipboard
    except ImportError as e:
        raise PlatformNotSupportedError(
            f"{get_platform_error_message('macos', 'dependency')}\n({e})"
        ) from e
    logger.debug("Creating MacOSClipboard")
    return MacOSClipboard()


def create_notifier(enabled: bool = True) -> NotifierBase:
    """
    Create the notifier.

    Raises:
        PlatformNotSupportedError: If not running on macOS or PyObjC is missing
    """
    _require_macos("notifier")
    try:
        from clipboard_ai.platform.macos import MacOSNotifier
    except ImportError as e:
        raise PlatformNotSupportedError(
            f"{get_platform_error_message('macos', 'dependency')}\n({e})"
        ) from e
    logger.debug("Creating MacOSNotifier")
    return MacOSNotifier(enabled=enabled)


def check_accessibility_permission(prompt: bool = True) -> bool:
    """
    Check (and optionally request) the Accessibility permission.

    Needed to synthesize the copy keystroke and to install the event tap.

    Returns:
        True if the process is trusted, False otherwise or if the check fails.
    """
    if get_platform() != "macos":
        return False
    try:
        from ApplicationServices import (
            AXIsProcessTrustedWithOptions,
            kAXTrustedCheckOptionPrompt,
        )
        trusted = AXIsProcessTrustedWithOptions({kAXTrustedCheckOptionPrompt: prompt})
    except Exception as e:
        logger.warning(f"Accessibility permission check failed: {e}")
        return False
    return bool(trusted)


__all__ = [
    "ClipboardBase",
    "HotkeyListenerBase",
    "NotifierBase",
    "PLATFORM_ERROR_MESSAGES",
    "check_accessibility_permission",
    "create_clipboard",
    "create_hotkey_listener",
    "create_notifier",
    "get_platform",
    "get_platform_error_message",
]
