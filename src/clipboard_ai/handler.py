"""
Rephrase Handler Module
Orchestrates capture -> guard -> rephrase -> clipboard -> notify.

Every collaborator is injected. Each invocation runs as one task on a
single-worker executor and its outcome is delivered through the returned
Future (and the optional on_complete callback).
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Optional

from clipboard_ai.capture import SelectionCapture
from clipboard_ai.exceptions import CaptureError, OutputError, RephraseError
from clipboard_ai.guard import GuardFilter
from clipboard_ai.platform.base import ClipboardBase, NotifierBase
from clipboard_ai.preferences import PreferencesStore, Tone
from clipboard_ai.rephraser import RephraserBase

logger = logging.getLogger(__name__)

# Notification texts
TITLE_IN_PROGRESS = "Rephrasing..."
MESSAGE_IN_PROGRESS = "Processing your text"
TITLE_SUCCESS = "Rephrasing Complete"
MESSAGE_SUCCESS = "Ready to paste!"
TITLE_FAILURE = "Rephrasing Failed"


@dataclass
class RephraseResult:
    """Outcome of one invocation."""
    original: Optional[str] = None
    tone: Optional[Tone] = None
    rephrased: Optional[str] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.rephrased is not None


class RephraseHandler:
    """Runs the rephrase sequence for hotkey and menu actions."""

    def __init__(
        self,
        capture: SelectionCapture,
        guard: GuardFilter,
        rephraser: RephraserBase,
        clipboard: ClipboardBase,
        notifier: NotifierBase,
        preferences: PreferencesStore,
        executor: Optional[ThreadPoolExecutor] = None,
        on_complete: Optional[Callable[[RephraseResult], None]] = None,
    ):
        """
        Initialize handler.

        Args:
            capture: Selection capture
            guard: Error-loop guard
            rephraser: Rephrase backend
            clipboard: Clipboard the result is written to
            notifier: User feedback
            preferences: Source of the current tone
            executor: Executor for invocations (a single-worker pool if None)
            on_complete: Called with each finished RephraseResult (worker thread)
        """
        self.capture = capture
        self.guard = guard
        self.rephraser = rephraser
        self.clipboard = clipboard
        self.notifier = notifier
        self.preferences = preferences
        self.on_complete = on_complete

        self._executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="rephrase"
        )
        self._lock = threading.Lock()
        self._busy = False
        self._pending: Optional[Future] = None

    @property
    def is_busy(self) -> bool:
        """Whether an invocation is queued or running."""
        with self._lock:
            return self._busy

    def copy_and_rephrase(self) -> Optional[Future]:
        """Capture the selection and rephrase it (hotkey / menu action)."""
        return self._submit(simulate_copy=True)

    def rephrase_clipboard(self) -> Optional[Future]:
        """Rephrase the existing clipboard text without simulating a copy."""
        return self._submit(simulate_copy=False)

    def _submit(self, simulate_copy: bool) -> Optional[Future]:
        """
        Queue one invocation.

        Returns:
            Future resolving to a RephraseResult, or None if the request was
            rejected because another invocation is still in flight.
        """
        with self._lock:
            if self._busy:
                logger.info("Rephrase already in progress, ignoring request")
                busy = True
            else:
                self._busy = True
                busy = False

        if busy:
            self.notifier.beep()
            return None

        try:
            future = self._executor.submit(self.process, simulate_copy)
        except RuntimeError as e:
            # Executor already shut down
            logger.warning(f"Cannot start rephrase: {e}")
            with self._lock:
                self._busy = False
            return None

        self._pending = future
        future.add_done_callback(self._on_done)
        return future

    def _on_done(self, future: Future) -> None:
        with self._lock:
            self._busy = False

        if future.cancelled():
            logger.info("Rephrase cancelled")
            return

        if self.on_complete:
            try:
                self.on_complete(future.result())
            except Exception as e:
                logger.exception(f"Completion callback failed: {e}")

    def process(self, simulate_copy: bool = True) -> RephraseResult:
        """
        Run the full sequence synchronously.

        Never raises. Capture-stage failures beep; rephrase-stage failures
        show a failure notification and beep.

        Args:
            simulate_copy: If True, send Cmd+C first; otherwise use the
                           current clipboard content

        Returns:
            RephraseResult describing the outcome.
        """
        result = RephraseResult()
        try:
            try:
                if simulate_copy:
                    text = self.capture.capture()
                else:
                    text = self.capture.read_existing()
                self.guard.check(text)
            except (CaptureError, OutputError) as e:
                logger.info(f"Nothing to rephrase: {e}")
                print(f"[Skipped] {e}")
                self.notifier.beep()
                result.error = e
                return result

            result.original = text
            result.tone = self.preferences.tone
            logger.debug(f"Captured {len(text)} characters, tone={result.tone.value}")

            self.notifier.notify(TITLE_IN_PROGRESS, MESSAGE_IN_PROGRESS)

            try:
                rephrased = self.rephraser.rephrase(text, result.tone)
                self.clipboard.write_text(rephrased)
            except (RephraseError, OutputError) as e:
                message = str(e)
                print(f"[Error] Rephrasing failed: {message}")
                self.guard.remember(message)
                self.notifier.notify(TITLE_FAILURE, message)
                self.notifier.beep()
                result.error = e
                return result

            result.rephrased = rephrased
            print("[Output] Rephrased text copied to clipboard")
            self.notifier.notify(TITLE_SUCCESS, MESSAGE_SUCCESS)
            return result

        except Exception as e:
            logger.exception(f"Unexpected error during rephrase: {e}")
            self.notifier.beep()
            result.error = e
            return result

    def cancel(self) -> bool:
        """
        Cancel the queued invocation if it has not started yet.

        Returns:
            True if an invocation was cancelled.
        """
        future = self._pending
        if future is None:
            return False
        return future.cancel()

    def shutdown(self) -> None:
        """Cancel queued work and stop the executor without waiting for in-flight calls."""
        self.cancel()
        self._executor.shutdown(wait=False, cancel_futures=True)
