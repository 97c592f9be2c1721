"""
ClipboardAI - Rephrase Selection

Main application entry point.
Wires the hotkey listener, menu bar, preferences and rephrase handler.
"""

import logging
import signal
import sys
import time
from typing import Callable, Optional

from dotenv import load_dotenv

from clipboard_ai.capture import SelectionCapture
from clipboard_ai.config import Config
from clipboard_ai.guard import GuardFilter
from clipboard_ai.handler import RephraseHandler, RephraseResult
from clipboard_ai.preferences import PreferencesStore
from clipboard_ai.rephraser import create_rephraser
from clipboard_ai.exceptions import (
    ConfigurationError,
    HotkeyListenerError,
    PlatformNotSupportedError,
)
from clipboard_ai.platform import (
    check_accessibility_permission,
    create_clipboard,
    create_hotkey_listener,
    create_notifier,
    get_platform,
)
from clipboard_ai.ui import create_menubar_app


logger = logging.getLogger(__name__)


def _set_macos_accessory_app() -> None:
    """Run as an accessory app: no Dock icon, no Cmd+Tab entry."""
    if sys.platform != "darwin":
        return
    try:
        from AppKit import NSApplication, NSApplicationActivationPolicyAccessory
        NSApplication.sharedApplication().setActivationPolicy_(
            NSApplicationActivationPolicyAccessory
        )
    except Exception as e:
        logger.debug(f"Could not set accessory activation policy: {e}")


class ClipboardAIApp:
    """Main application class coordinating all modules."""

    def __init__(self, config: Config):
        """
        Initialize all components.

        Args:
            config: Application configuration loaded from environment.
        """
        load_dotenv()

        platform = get_platform()
        logger.info(f"Platform detected: {platform}")

        self.config = config

        self.preferences = PreferencesStore(default=config.default_tone)
        logger.debug(f"Preferences loaded (tone={self.preferences.tone.value})")

        # API key is resolved per call, so a missing key does not stop startup
        self.rephraser = create_rephraser(config)

        self.clipboard = create_clipboard()
        self.notifier = create_notifier(enabled=config.notifications_enabled)
        self.guard = GuardFilter()
        self.capture = SelectionCapture(
            self.clipboard,
            attempts=config.capture_attempts,
            interval=config.capture_interval,
            jitter=config.capture_jitter,
        )

        self.handler = RephraseHandler(
            capture=self.capture,
            guard=self.guard,
            rephraser=self.rephraser,
            clipboard=self.clipboard,
            notifier=self.notifier,
            preferences=self.preferences,
            on_complete=self._handle_complete,
        )

        # Menu bar with graceful degradation
        self.menubar = None
        self.preferences_panel = None
        if config.menubar_enabled:
            self.menubar = create_menubar_app(
                on_copy_and_rephrase=self.handle_hotkey,
                on_rephrase_clipboard=self.handle_rephrase_clipboard,
                on_preferences=self.handle_preferences,
                on_quit=self._handle_quit_from_menu,
            )
            if self.menubar:
                from clipboard_ai.ui.preferences_panel import PreferencesPanel
                self.preferences_panel = PreferencesPanel(self.preferences)
            else:
                logger.warning("Menu bar unavailable, continuing without it")

        try:
            self.listener = create_hotkey_listener(on_hotkey=self.handle_hotkey)
            logger.info(f"Hotkey listener initialized: {type(self.listener).__name__}")
        except PlatformNotSupportedError:
            raise
        except Exception as e:
            logger.error(f"Hotkey listener initialization failed: {e}")
            raise HotkeyListenerError(
                f"Failed to initialize hotkey listener: {e}\n"
                "Grant Accessibility permission in System Settings."
            ) from e

        self._running = False

    @property
    def is_running(self) -> bool:
        """Whether the application is running."""
        return self._running

    def _dispatch(self, fn: Callable, *args) -> None:
        """Run fn on the main thread when the AppKit event loop is active."""
        if self.menubar:
            from PyObjCTools import AppHelper
            AppHelper.callAfter(fn, *args)
        else:
            fn(*args)

    def _start(self, action: Callable[[], Optional[object]]) -> None:
        future = action()
        if future is not None and self.menubar:
            self._dispatch(self._refresh_menubar)

    def _refresh_menubar(self, status: Optional[str] = None) -> None:
        """Show the handler's current busy state (main thread)."""
        if not self.menubar:
            return
        if self.handler.is_busy:
            self.menubar.set_busy(True)
        elif status is not None:
            self.menubar.set_busy(False, status)

    def handle_hotkey(self) -> None:
        """Called when Cmd+Shift+C is pressed or Copy & Rephrase is clicked."""
        self._start(self.handler.copy_and_rephrase)

    def handle_rephrase_clipboard(self) -> None:
        """Called when Rephrase Clipboard is clicked."""
        self._start(self.handler.rephrase_clipboard)

    def _handle_complete(self, result: RephraseResult) -> None:
        """Called on the worker thread when an invocation finishes."""
        if result.ok:
            logger.info("Rephrase complete")
        else:
            logger.info(f"Rephrase ended without result: {result.error}")
        if self.menubar:
            status = "Ready to paste" if result.ok else "Last attempt failed"
            self._dispatch(self._refresh_menubar, status)

    def handle_preferences(self) -> None:
        """Called when Preferences… is clicked (main thread)."""
        if not self.preferences_panel:
            return
        tone = self.preferences_panel.show()
        if tone is not None:
            print(f"[Preferences] Tone set to {tone.value}")
            if self.menubar:
                self.menubar.set_tone(tone.value)

    def _handle_quit_from_menu(self) -> None:
        """Called when user clicks Quit from menu bar."""
        logger.info("Quit requested from menu bar")
        self.stop()

    def run(self) -> None:
        """Start the application and run the event loop."""
        self._running = True

        if not check_accessibility_permission(prompt=True):
            logger.warning("Accessibility permission not granted yet")
            print("[Warning] Grant Accessibility permission in System Settings")
            print("          so ClipboardAI can listen for the hotkey and copy text.")

        if self.menubar:
            _set_macos_accessory_app()
            try:
                self.menubar.start(tone=self.preferences.tone.value)
            except RuntimeError as e:
                logger.warning(f"Menu bar failed to start, continuing without it: {e}")
                self.menubar = None

        self.listener.start()

        self._print_banner()

        if self.menubar:
            from PyObjCTools import AppHelper
            AppHelper.runEventLoop(installInterrupt=True)
        else:
            # No UI - just sleep loop
            while self._running:
                time.sleep(0.1)

    def _print_banner(self) -> None:
        """Print welcome message and instructions."""
        hotkey = self.listener.get_hotkey_description()

        print("=" * 55)
        print("  ClipboardAI - Rephrase Selection")
        print("=" * 55)
        print()
        print(f"  Backend: {self.config.backend} ({self.config.model_name})")
        print(f"  Tone: {self.preferences.tone.value}")
        print(f"  Hotkey: {hotkey}")
        print()
        print("  Usage:")
        print("    1. Select text in any app")
        print(f"    2. Press {hotkey}")
        print("    3. Paste the rephrased text with Cmd+V")
        print()
        if self.menubar:
            print("  Menu bar: Click the clipboard icon for controls")
        print("  Press Ctrl+C to exit")
        print("=" * 55)
        print()

    def stop(self) -> None:
        """Stop the application gracefully."""
        if not self._running:
            return

        self._running = False

        # In-flight requests are dropped, not awaited
        self.handler.shutdown()
        self.listener.stop()

        if self.menubar:
            self.menubar.stop()
            from PyObjCTools import AppHelper
            AppHelper.stopEventLoop()

        print("\nClipboardAI stopped. Goodbye!")


def setup_logging(debug: bool = False) -> None:
    """
    Configure logging for the application.

    Args:
        debug: If True, enable debug-level logging
    """
    level = logging.DEBUG if debug else logging.INFO
    format_str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=level,
        format=format_str,
        datefmt=date_format
    )

    # Also log to file if in debug mode
    if debug:
        file_handler = logging.FileHandler("clipboard-ai.log")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(format_str, datefmt=date_format))
        logging.getLogger().addHandler(file_handler)


def main():
    """Main entry point."""
    # Load and validate configuration
    try:
        config = Config.from_env()
        setup_logging(debug=config.debug)
        logger.info("ClipboardAI starting...")
        warnings = config.validate()
        for warning in warnings:
            print(f"Warning: {warning}")
            logger.warning(warning)
    except ValueError as e:
        setup_logging()
        print(f"Error: {e}")
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    # Create application with validated config
    try:
        app = ClipboardAIApp(config=config)
    except HotkeyListenerError as e:
        print(f"Error: {e}")
        logger.error(f"Hotkey listener error: {e}")
        sys.exit(1)
    except PlatformNotSupportedError as e:
        print(f"Error: {e}")
        logger.error(f"Platform not supported: {e}")
        sys.exit(1)
    except ConfigurationError as e:
        print(f"Error: {e}")
        logger.error(f"Configuration error: {e}")
        sys.exit(1)
    except Exception as e:
        print(f"Error: Failed to initialize application: {e}")
        logger.exception(f"Unexpected initialization error: {e}")
        sys.exit(1)

    # Set up signal handlers for graceful shutdown
    def signal_handler(sig, frame):
        logger.info("Received shutdown signal")
        app.stop()
        sys.exit(0)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    try:
        logger.info("ClipboardAI running")
        app.run()
    except Exception as e:
        print(f"Fatal error: {e}")
        logger.exception(f"Fatal error during execution: {e}")
        app.stop()
        sys.exit(1)


if __name__ == "__main__":
    main()
