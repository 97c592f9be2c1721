"""
Menu Bar Component for macOS

Provides a persistent menu bar icon with status and controls.
Uses PyObjC directly.
"""

import logging
import os
import sys
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)

# Only import PyObjC on macOS
MENUBAR_AVAILABLE = False
NSObject = object  # Default base class for non-macOS
objc = None

if sys.platform == "darwin":
    try:
        import objc
        from AppKit import (
            NSStatusBar,
            NSMenu,
            NSMenuItem,
            NSVariableStatusItemLength,
            NSObject,
        )
        MENUBAR_AVAILABLE = True
    except ImportError:
        MENUBAR_AVAILABLE = False


class ClipboardAIMenuDelegate(NSObject):
    """Objective-C delegate for handling menu actions."""

    _copy_callback = None
    _clipboard_callback = None
    _preferences_callback = None
    _quit_callback = None

    def init(self):
        if objc is not None:
            self = objc.super(ClipboardAIMenuDelegate, self).init()
        return self

    def setCallbacks_(self, callbacks):
        """Set (copy, clipboard, preferences, quit) callbacks."""
        (
            self._copy_callback,
            self._clipboard_callback,
            self._preferences_callback,
            self._quit_callback,
        ) = callbacks

    def copyAndRephrase_(self, sender):
        """Handle Copy & Rephrase menu click."""
        if self._copy_callback:
            self._copy_callback()

    def rephraseClipboard_(self, sender):
        """Handle Rephrase Clipboard menu click."""
        if self._clipboard_callback:
            self._clipboard_callback()

    def showPreferences_(self, sender):
        """Handle Preferences menu click."""
        if self._preferences_callback:
            self._preferences_callback()

    def quitApp_(self, sender):
        """Handle Quit menu click."""
        if self._quit_callback:
            self._quit_callback()


class MenuBarApp:
    """
    macOS menu bar item for ClipboardAI.

    Shows a clipboard icon that changes while a rephrase is running.
    """

    ICON_IDLE = "📋"
    ICON_BUSY = "⏳"

    def __init__(
        self,
        on_copy_and_rephrase: Callable[[], None],
        on_rephrase_clipboard: Callable[[], None],
        on_preferences: Callable[[], None],
        on_quit: Callable[[], None],
    ):
        """
        Initialize menu bar app.

        Args:
            on_copy_and_rephrase: Callback for "Copy & Rephrase"
            on_rephrase_clipboard: Callback for "Rephrase Clipboard"
            on_preferences: Callback for "Preferences…"
            on_quit: Callback for "Quit"
        """
        if not MENUBAR_AVAILABLE:
            raise RuntimeError("Menu bar not available (macOS only with PyObjC)")

        self._on_copy_and_rephrase = on_copy_and_rephrase
        self._on_rephrase_clipboard = on_rephrase_clipboard
        self._on_preferences = on_preferences
        self._on_quit = on_quit
        self._is_busy = False
        self._status_item = None
        self._menu = None
        self._delegate = None
        self._status_menu_item = None
        self._tone_menu_item = None
        self._lock = threading.Lock()
        self._initialized = False

    def _add_action(self, title: str, action: str, key: str = "") -> None:
        item = NSMenuItem.alloc().initWithTitle_action_keyEquivalent_(title, action, key)
        item.setTarget_(self._delegate)
        self._menu.addItem_(item)

    def _add_label(self, title: str):
        item = NSMenuItem.alloc().initWithTitle_action_keyEquivalent_(title, None, "")
        item.setEnabled_(False)
        self._menu.addItem_(item)
        return item

    def start(self, tone: str = "Professional") -> None:
        """
        Initialize the menu bar item.

        Must be called from the main thread.

        Set CLIPBOARD_AI_DISABLE_MENUBAR=1 to skip menu bar creation (useful for tests).
        """
        if self._initialized:
            return

        if os.environ.get("CLIPBOARD_AI_DISABLE_MENUBAR", "").lower() in ("1", "true", "yes"):
            raise RuntimeError("Menu bar disabled via CLIPBOARD_AI_DISABLE_MENUBAR environment variable")

        try:
            self._delegate = ClipboardAIMenuDelegate.alloc().init()
            self._delegate.setCallbacks_((
                self._on_copy_and_rephrase,
                self._on_rephrase_clipboard,
                self._on_preferences,
                self._on_quit,
            ))

            # May crash with SIGABRT outside a proper GUI context
            status_bar = NSStatusBar.systemStatusBar()
            self._status_item = status_bar.statusItemWithLength_(NSVariableStatusItemLength)
            self._status_item.setTitle_(self.ICON_IDLE)
        except Exception as e:
            self._delegate = None
            self._status_item = None
            raise RuntimeError(f"Failed to create status bar item: {e}") from e

        self._menu = NSMenu.alloc().init()

        self._status_menu_item = self._add_label("Status: Idle")
        self._tone_menu_item = self._add_label(f"Tone: {tone}")
        self._menu.addItem_(NSMenuItem.separatorItem())

        self._add_action("Copy & Rephrase (⇧⌘C)", "copyAndRephrase:")
        self._add_action("Rephrase Clipboard", "rephraseClipboard:")
        self._menu.addItem_(NSMenuItem.separatorItem())

        self._add_action("Preferences…", "showPreferences:", ",")
        self._menu.addItem_(NSMenuItem.separatorItem())

        self._add_action("Quit ClipboardAI", "quitApp:", "q")

        self._status_item.setMenu_(self._menu)
        self._initialized = True

    def set_busy(self, is_busy: bool, status: Optional[str] = None) -> None:
        """
        Update menu bar to reflect whether a rephrase is running.

        Call from the main thread.

        Args:
            is_busy: True while a rephrase is in flight
            status: Optional status line text (defaults to Idle/Rephrasing...)
        """
        with self._lock:
            self._is_busy = is_busy

        if not self._initialized or not self._status_item:
            return

        if status is None:
            status = "Rephrasing..." if is_busy else "Idle"
        try:
            self._status_item.setTitle_(self.ICON_BUSY if is_busy else self.ICON_IDLE)
            if self._status_menu_item:
                self._status_menu_item.setTitle_(f"Status: {status}")
        except Exception as e:
            logger.debug(f"Menu bar update failed: {e}")

    def set_tone(self, tone: str) -> None:
        """Show the current tone in the menu."""
        if self._tone_menu_item:
            self._tone_menu_item.setTitle_(f"Tone: {tone}")

    @property
    def is_busy(self) -> bool:
        """Current busy state."""
        with self._lock:
            return self._is_busy

    def stop(self) -> None:
        """Remove the status bar item."""
        if self._status_item:
            try:
                status_bar = NSStatusBar.systemStatusBar()
                status_bar.removeStatusItem_(self._status_item)
            except Exception as e:
                logger.debug(f"Failed to remove status item: {e}")
            self._status_item = None
        self._initialized = False


def create_menubar_app(
    on_copy_and_rephrase: Callable[[], None],
    on_rephrase_clipboard: Callable[[], None],
    on_preferences: Callable[[], None],
    on_quit: Callable[[], None],
) -> Optional[MenuBarApp]:
    """
    Create menu bar app if available.

    Returns:
        MenuBarApp instance or None if not on macOS or PyObjC not installed
    """
    if not MENUBAR_AVAILABLE:
        return None

    try:
        return MenuBarApp(on_copy_and_rephrase, on_rephrase_clipboard, on_preferences, on_quit)
    except Exception as e:
        logger.warning(f"Menu bar unavailable: {e}")
        return None


def is_menubar_available() -> bool:
    """Check if menu bar functionality is available."""
    return MENUBAR_AVAILABLE
