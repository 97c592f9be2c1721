"""ClipboardAI menu bar UI (macOS, PyObjC)."""

from clipboard_ai.ui.menubar import MenuBarApp, create_menubar_app, is_menubar_available

__all__ = [
    "MenuBarApp",
    "create_menubar_app",
    "is_menubar_available",
]
