"""
macOS Hotkey Listener

Detects Cmd+Shift+C using a macOS CGEvent tap and swallows it so the
frontmost application does not also receive the keystroke.
"""

import logging
import threading
from typing import Callable, Optional

import Quartz
from Quartz import (
    CGEventTapCreate, kCGSessionEventTap, kCGHeadInsertEventTap,
    kCGEventTapOptionDefault, CGEventMaskBit, kCGEventKeyDown,
    kCGEventTapDisabledByTimeout,
    CFMachPortCreateRunLoopSource, CFRunLoopGetCurrent, CFRunLoopAddSource,
    kCFRunLoopCommonModes, CFRunLoopRunInMode, kCFRunLoopDefaultMode,
    CGEventGetFlags
)

from clipboard_ai.platform.base import HotkeyListenerBase

logger = logging.getLogger(__name__)

# Hotkey constants
C_KEYCODE = 8  # 'c' key on macOS
CMD_FLAG = Quartz.kCGEventFlagMaskCommand
SHIFT_FLAG = Quartz.kCGEventFlagMaskShift
CTRL_FLAG = Quartz.kCGEventFlagMaskControl
ALT_FLAG = Quartz.kCGEventFlagMaskAlternate


class MacOSHotkeyListener(HotkeyListenerBase):
    """Invokes a callback on Cmd+Shift+C using a CGEvent tap."""

    def __init__(self, on_hotkey: Callable[[], None]):
        """
        Initialize hotkey listener.

        Args:
            on_hotkey: Called when Cmd+Shift+C is pressed
        """
        super().__init__(on_hotkey)
        self._tap = None
        self._running = False
        self._thread: Optional[threading.Thread] = None

    def _is_hotkey(self, keycode: int, flags: int) -> bool:
        """Match Cmd+Shift+C exactly (no Control or Option)."""
        if keycode != C_KEYCODE:
            return False
        if not (flags & CMD_FLAG) or not (flags & SHIFT_FLAG):
            return False
        return not (flags & CTRL_FLAG) and not (flags & ALT_FLAG)

    def _event_callback(self, proxy, event_type, event, refcon):
        """Handle CGEvent callback for Cmd+Shift+C detection."""
        # The system disables slow taps; turn it back on
        if event_type == kCGEventTapDisabledByTimeout:
            logger.warning("Event tap disabled by timeout, re-enabling")
            if self._tap:
                Quartz.CGEventTapEnable(self._tap, True)
            return event

        if event_type != kCGEventKeyDown:
            return event

        keycode = Quartz.CGEventGetIntegerValueField(
            event, Quartz.kCGKeyboardEventKeycode
        )
        flags = CGEventGetFlags(event)

        if self._is_hotkey(keycode, flags):
            autorepeat = Quartz.CGEventGetIntegerValueField(
                event, Quartz.kCGKeyboardEventAutorepeat
            )
            if not autorepeat:
                logger.debug("Hotkey pressed")
                try:
                    self.on_hotkey()
                except Exception as e:
                    logger.exception(f"Hotkey callback failed: {e}")
            # Swallow the event
            return None

        return event

    def _run_loop(self) -> None:
        """Run the CGEvent tap loop in a thread."""
        mask = CGEventMaskBit(kCGEventKeyDown)

        self._tap = CGEventTapCreate(
            kCGSessionEventTap,
            kCGHeadInsertEventTap,
            kCGEventTapOptionDefault,
            mask,
            self._event_callback,
            None
        )

        if self._tap is None:
            logger.error("Failed to create event tap (Accessibility permission missing?)")
            print("Error: Failed to create event tap.")
            print("Please grant Accessibility permission in System Settings.")
            return

        source = CFMachPortCreateRunLoopSource(None, self._tap, 0)
        CFRunLoopAddSource(CFRunLoopGetCurrent(), source, kCFRunLoopCommonModes)
        Quartz.CGEventTapEnable(self._tap, True)
        logger.info("Event tap installed")

        while self._running:
            CFRunLoopRunInMode(kCFRunLoopDefaultMode, 0.1, False)

    def get_hotkey_description(self) -> str:
        """Get human-readable description of the hotkey."""
        return "Cmd+Shift+C"

    @property
    def is_running(self) -> bool:
        """Whether the listener thread has been started and not stopped."""
        return self._running

    def start(self) -> None:
        """Start listening for Cmd+Shift+C."""
        if self._running:
            return
        self._running = True
        self._thread = threading.Thread(target=self._run_loop, daemon=True)
        self._thread.start()
        logger.info(f"Hotkey listener started ({self.get_hotkey_description()})")

    def stop(self) -> None:
        """Stop listening and clean up."""
        self._running = False
        if self._tap:
            Quartz.CGEventTapEnable(self._tap, False)
            self._tap = None
