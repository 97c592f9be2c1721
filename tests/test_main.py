"""
Tests for the main module.

Tests cover ClipboardAIApp wiring, the menu/hotkey entry points and the
main() exit paths. Platform factories are patched with test doubles.
"""

import logging
import threading
from concurrent.futures import Executor, Future
from unittest.mock import MagicMock, PropertyMock, patch

import pytest

from clipboard_ai.config import Config
from clipboard_ai.exceptions import (
    ConfigurationError,
    HotkeyListenerError,
    PlatformNotSupportedError,
)
from clipboard_ai.handler import RephraseResult
from clipboard_ai.preferences import PreferencesStore, Tone
from clipboard_ai.main import ClipboardAIApp, main, setup_logging
from fakes import FakeClipboard, FakeDefaults, FakeNotifier


@pytest.fixture
def platform_doubles():
    """Patch every factory used by ClipboardAIApp."""
    clipboard = FakeClipboard(text="hello")
    notifier = FakeNotifier()
    listener = MagicMock()
    listener.get_hotkey_description.return_value = "Cmd+Shift+C"
    rephraser = MagicMock()
    rephraser.rephrase.return_value = "Hello."
    defaults = FakeDefaults()

    with patch('clipboard_ai.main.load_dotenv'), \
         patch('clipboard_ai.main.PreferencesStore',
               side_effect=lambda default: PreferencesStore(defaults=defaults, default=default)), \
         patch('clipboard_ai.main.create_rephraser', return_value=rephraser), \
         patch('clipboard_ai.main.create_clipboard', return_value=clipboard), \
         patch('clipboard_ai.main.create_notifier', return_value=notifier) as mock_notifier, \
         patch('clipboard_ai.main.create_hotkey_listener', return_value=listener) as mock_listener, \
         patch('clipboard_ai.main.create_menubar_app', return_value=None) as mock_menubar:
        yield {
            "clipboard": clipboard,
            "notifier": notifier,
            "listener": listener,
            "rephraser": rephraser,
            "defaults": defaults,
            "create_notifier": mock_notifier,
            "create_hotkey_listener": mock_listener,
            "create_menubar_app": mock_menubar,
        }


class ImmediateExecutor(Executor):
    """Runs each submitted call before submit() returns."""

    def submit(self, fn, *args, **kwargs):
        future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as e:
            future.set_exception(e)
        return future


def make_app(**overrides):
    options = {"menubar_enabled": False}
    options.update(overrides)
    return ClipboardAIApp(Config(**options))


class TestClipboardAIAppInit:
    """Tests for ClipboardAIApp initialization."""

    def test_wires_components(self, platform_doubles):
        app = make_app()
        assert app.clipboard is platform_doubles["clipboard"]
        assert app.handler.rephraser is platform_doubles["rephraser"]
        assert app.handler.notifier is platform_doubles["notifier"]
        assert app.listener is platform_doubles["listener"]
        assert app.is_running is False
        app.handler.shutdown()

    def test_hotkey_routes_to_handler(self, platform_doubles):
        app = make_app()
        callback = platform_doubles["create_hotkey_listener"].call_args[1]["on_hotkey"]
        assert callback == app.handle_hotkey
        app.handler.shutdown()

    def test_default_tone_from_config(self, platform_doubles):
        app = make_app(default_tone="Casual")
        assert app.preferences.tone is Tone.CASUAL
        app.handler.shutdown()

    def test_notifications_flag_passed(self, platform_doubles):
        make_app(notifications_enabled=False).handler.shutdown()
        platform_doubles["create_notifier"].assert_called_once_with(enabled=False)

    def test_menubar_disabled_not_created(self, platform_doubles):
        app = make_app()
        platform_doubles["create_menubar_app"].assert_not_called()
        assert app.menubar is None
        app.handler.shutdown()

    def test_menubar_unavailable_degrades(self, platform_doubles):
        app = make_app(menubar_enabled=True)
        platform_doubles["create_menubar_app"].assert_called_once()
        assert app.menubar is None
        assert app.preferences_panel is None
        app.handler.shutdown()

    def test_listener_failure_becomes_hotkey_error(self, platform_doubles):
        platform_doubles["create_hotkey_listener"].side_effect = Exception("tap failed")
        with pytest.raises(HotkeyListenerError):
            make_app()

    def test_platform_error_propagates(self, platform_doubles):
        platform_doubles["create_hotkey_listener"].side_effect = PlatformNotSupportedError("linux")
        with pytest.raises(PlatformNotSupportedError):
            make_app()


class TestClipboardAIAppActions:
    """Entry points run the handler on its worker."""

    def test_rephrase_clipboard_action(self, platform_doubles):
        app = make_app()
        done = threading.Event()
        original = app._handle_complete

        def complete(result):
            original(result)
            done.set()

        app.handler.on_complete = complete
        try:
            app.handle_rephrase_clipboard()
            assert done.wait(timeout=5)
            assert platform_doubles["clipboard"].text == "Hello."
            platform_doubles["rephraser"].rephrase.assert_called_once_with("hello", Tone.PROFESSIONAL)
        finally:
            app.handler.shutdown()

    def test_complete_updates_menubar(self, platform_doubles):
        app = make_app()
        app.menubar = MagicMock()
        with patch('PyObjCTools.AppHelper.callAfter') as mock_call_after:
            app._handle_complete(RephraseResult(original="a", rephrased="b"))
        mock_call_after.assert_called_once_with(app._refresh_menubar, "Ready to paste")
        app._refresh_menubar("Ready to paste")
        app.menubar.set_busy.assert_called_once_with(False, "Ready to paste")
        app.handler.shutdown()

    def test_failed_complete_status(self, platform_doubles):
        app = make_app()
        app.menubar = MagicMock()
        app._dispatch = MagicMock()
        app._handle_complete(RephraseResult(error=ValueError("x")))
        app._dispatch.assert_called_once_with(app._refresh_menubar, "Last attempt failed")
        app.handler.shutdown()

    def test_refresh_shows_busy_while_in_flight(self, platform_doubles):
        app = make_app()
        app.menubar = MagicMock()
        with patch.object(type(app.handler), 'is_busy', new_callable=PropertyMock, return_value=True):
            app._refresh_menubar("Ready to paste")
        app.menubar.set_busy.assert_called_once_with(True)
        app.handler.shutdown()

    def test_refresh_without_status_when_idle_leaves_menubar(self, platform_doubles):
        app = make_app()
        app.menubar = MagicMock()
        app._refresh_menubar()
        app.menubar.set_busy.assert_not_called()
        app.handler.shutdown()

    def test_menubar_not_stuck_busy_when_completion_runs_first(self, platform_doubles):
        """The worker can finish before the start update reaches the main thread."""
        with patch('clipboard_ai.handler.ThreadPoolExecutor', return_value=ImmediateExecutor()):
            app = make_app()
        app.menubar = MagicMock()
        queued = []
        app._dispatch = lambda fn, *args: queued.append((fn, args))

        app.handle_rephrase_clipboard()

        assert platform_doubles["clipboard"].text == "Hello."
        assert [fn for fn, _ in queued] == [app._refresh_menubar, app._refresh_menubar]
        for fn, args in queued:
            fn(*args)
        app.menubar.set_busy.assert_called_once_with(False, "Ready to paste")
        app.handler.shutdown()

    def test_menubar_shows_busy_then_ready_in_normal_order(self, platform_doubles):
        app = make_app()
        app.menubar = MagicMock()
        queued = []
        app._dispatch = lambda fn, *args: queued.append((fn, args))
        release = threading.Event()
        done = threading.Event()
        platform_doubles["rephraser"].rephrase.side_effect = lambda *a: release.wait(5) and "Hello."
        original = app._handle_complete

        def complete(result):
            original(result)
            done.set()

        app.handler.on_complete = complete
        try:
            app.handle_rephrase_clipboard()
            fn, args = queued.pop(0)
            fn(*args)
            app.menubar.set_busy.assert_called_once_with(True)

            release.set()
            assert done.wait(timeout=5)
            fn, args = queued.pop(0)
            fn(*args)
            assert app.menubar.set_busy.call_args_list[-1][0] == (False, "Ready to paste")
        finally:
            release.set()
            app.handler.shutdown()

    def test_preferences_updates_menu_tone(self, platform_doubles):
        app = make_app()
        app.menubar = MagicMock()
        app.preferences_panel = MagicMock()
        app.preferences_panel.show.return_value = Tone.FORMAL

        app.handle_preferences()

        app.menubar.set_tone.assert_called_once_with("Formal")
        app.handler.shutdown()

    def test_preferences_cancel(self, platform_doubles):
        app = make_app()
        app.menubar = MagicMock()
        app.preferences_panel = MagicMock()
        app.preferences_panel.show.return_value = None
        app.handle_preferences()
        app.menubar.set_tone.assert_not_called()
        app.handler.shutdown()

    def test_preferences_without_panel_is_noop(self, platform_doubles):
        app = make_app()
        app.handle_preferences()
        app.handler.shutdown()


class TestClipboardAIAppStop:

    def test_stop_shuts_down(self, platform_doubles):
        app = make_app()
        app._running = True
        app.handler = MagicMock()

        app.stop()

        assert app.is_running is False
        app.handler.shutdown.assert_called_once()
        platform_doubles["listener"].stop.assert_called_once()

    def test_stop_when_not_running(self, platform_doubles):
        app = make_app()
        app.stop()
        platform_doubles["listener"].stop.assert_not_called()
        app.handler.shutdown()


class TestSetupLogging:

    def test_info_level(self):
        with patch('clipboard_ai.main.logging.basicConfig') as mock_basic:
            setup_logging(debug=False)
        assert mock_basic.call_args[1]["level"] == logging.INFO

    def test_debug_adds_file_handler(self):
        with patch('clipboard_ai.main.logging.basicConfig') as mock_basic, \
             patch('clipboard_ai.main.logging.FileHandler') as mock_file_handler, \
             patch('clipboard_ai.main.logging.getLogger') as mock_get_logger:
            setup_logging(debug=True)
        assert mock_basic.call_args[1]["level"] == logging.DEBUG
        mock_file_handler.assert_called_once_with("clipboard-ai.log")
        mock_get_logger.return_value.addHandler.assert_called_once_with(
            mock_file_handler.return_value
        )


class TestMainExitPaths:
    """main() exits with status 1 on startup failures."""

    @pytest.fixture(autouse=True)
    def quiet_logging(self):
        with patch('clipboard_ai.main.setup_logging'):
            yield

    def test_invalid_config_exits(self):
        with patch('clipboard_ai.main.Config.from_env', side_effect=ValueError("bad")):
            with pytest.raises(SystemExit) as exc_info:
                main()
        assert exc_info.value.code == 1

    def test_validation_error_exits(self):
        with patch('clipboard_ai.main.Config.from_env', return_value=Config(backend="openai")):
            with pytest.raises(SystemExit) as exc_info:
                main()
        assert exc_info.value.code == 1

    @pytest.mark.parametrize("error", [
        HotkeyListenerError("no tap"),
        PlatformNotSupportedError("linux"),
        ConfigurationError("bad backend"),
        RuntimeError("unexpected"),
    ])
    def test_init_failure_exits(self, error):
        with patch('clipboard_ai.main.Config.from_env', return_value=Config()), \
             patch('clipboard_ai.main.ClipboardAIApp', side_effect=error):
            with pytest.raises(SystemExit) as exc_info:
                main()
        assert exc_info.value.code == 1

    def test_runs_app(self):
        app = MagicMock()
        with patch('clipboard_ai.main.Config.from_env', return_value=Config()), \
             patch('clipboard_ai.main.ClipboardAIApp', return_value=app), \
             patch('clipboard_ai.main.signal.signal') as mock_signal:
            main()
        app.run.assert_called_once()
        assert mock_signal.call_count == 2

    def test_run_failure_stops_and_exits(self):
        app = MagicMock()
        app.run.side_effect = RuntimeError("loop died")
        with patch('clipboard_ai.main.Config.from_env', return_value=Config()), \
             patch('clipboard_ai.main.ClipboardAIApp', return_value=app), \
             patch('clipboard_ai.main.signal.signal'):
            with pytest.raises(SystemExit) as exc_info:
                main()
        assert exc_info.value.code == 1
        app.stop.assert_called_once()
