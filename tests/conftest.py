"""
Pytest configuration and fixtures for clipboard_ai tests.

IMPORTANT: This file sets up mocks for macOS-specific modules BEFORE any
test imports happen, so the suite runs on Linux CI as well as macOS.
"""

import os
import sys
from unittest.mock import MagicMock


# Real values of the Quartz constants used by clipboard_ai
QUARTZ_CONSTANTS = {
    "kCGEventFlagMaskCommand": 0x100000,
    "kCGEventFlagMaskShift": 0x20000,
    "kCGEventFlagMaskControl": 0x40000,
    "kCGEventFlagMaskAlternate": 0x80000,
    "kCGEventKeyDown": 10,
    "kCGEventTapDisabledByTimeout": 0xFFFFFFFE,
    "kCGKeyboardEventKeycode": 9,
    "kCGKeyboardEventAutorepeat": 8,
    "kCGHIDEventTap": 0,
    "kCGEventSourceStateHIDSystemState": 1,
}


def _setup_global_mocks():
    """
    Set up mocks for modules that are unavailable off macOS.

    Also disables the menu bar to prevent NSStatusBar SIGABRT crashes in pytest.
    """
    os.environ["CLIPBOARD_AI_DISABLE_MENUBAR"] = "1"

    if sys.platform != 'darwin':
        if 'Quartz' not in sys.modules:
            mock_quartz = MagicMock()
            for name, value in QUARTZ_CONSTANTS.items():
                setattr(mock_quartz, name, value)
            sys.modules['Quartz'] = mock_quartz
        for name in ('AppKit', 'Foundation', 'ApplicationServices', 'objc'):
            if name not in sys.modules:
                sys.modules[name] = MagicMock()
        if 'PyObjCTools' not in sys.modules:
            mock_tools = MagicMock()
            sys.modules['PyObjCTools'] = mock_tools
            sys.modules['PyObjCTools.AppHelper'] = mock_tools.AppHelper


# Run mocks setup immediately when conftest is loaded
_setup_global_mocks()


import logging

import pytest

from fakes import FakeClipboard, FakeDefaults, FakeNotifier


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line(
        "markers", "requires_macos: marks tests that need a real macOS session"
    )


# =============================================================================
# LOGGING PROTECTION
# =============================================================================

@pytest.fixture(autouse=True)
def _protect_logging_handlers():
    """
    Ensure logging handlers keep integer levels.

    MagicMock patches can leak into handler attributes and break level
    comparisons in later tests.
    """
    def _fix_handler_levels():
        for handler in logging.root.handlers[:]:
            if not isinstance(handler.level, int):
                handler.level = logging.NOTSET

    _fix_handler_levels()
    yield
    _fix_handler_levels()


# =============================================================================
# TEST DOUBLE FIXTURES
# =============================================================================

@pytest.fixture
def fake_clipboard():
    return FakeClipboard()


@pytest.fixture
def fake_notifier():
    return FakeNotifier()


@pytest.fixture
def fake_defaults():
    return FakeDefaults()


@pytest.fixture
def no_api_keys(monkeypatch):
    """Remove all rephrase API keys from the environment."""
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("GROQ_API_KEY", raising=False)


@pytest.fixture
def gemini_api_key_env(monkeypatch):
    """Set GEMINI_API_KEY for a single test."""
    monkeypatch.setenv("GEMINI_API_KEY", "test-api-key")
    return "test-api-key"


# =============================================================================
# AUTO-SKIP FIXTURES
# =============================================================================

@pytest.fixture(autouse=True)
def _auto_skip_by_marker(request):
    """Automatically skip tests based on markers."""
    if request.node.get_closest_marker("requires_macos") and sys.platform != "darwin":
        pytest.skip("Test requires macOS")
