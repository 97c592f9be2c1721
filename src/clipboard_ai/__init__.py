"""
ClipboardAI - Rephrase Selection

A macOS menu bar application that uses Cmd+Shift+C to capture the
current selection, rephrase it in the chosen tone via a cloud
generative-language API, and put the result on the clipboard.
"""

from clipboard_ai.capture import SelectionCapture
from clipboard_ai.config import Config
from clipboard_ai.exceptions import (
    ClipboardAIError,
    ConfigurationError,
    CaptureError,
    NoSelectionError,
    ErrorLoopDetectedError,
    RephraseError,
    MissingCredentialError,
    EmptyResponseError,
    ServiceError,
    OutputError,
)
from clipboard_ai.guard import GuardFilter
from clipboard_ai.handler import RephraseHandler, RephraseResult
from clipboard_ai.preferences import PreferencesStore, Tone
from clipboard_ai.rephraser import (
    GeminiRephraser,
    GroqRephraser,
    build_prompt,
    create_rephraser,
)

__version__ = "0.1.0"

__all__ = [
    "SelectionCapture",
    "Config",
    "ClipboardAIError",
    "ConfigurationError",
    "CaptureError",
    "NoSelectionError",
    "ErrorLoopDetectedError",
    "RephraseError",
    "MissingCredentialError",
    "EmptyResponseError",
    "ServiceError",
    "OutputError",
    "GuardFilter",
    "RephraseHandler",
    "RephraseResult",
    "PreferencesStore",
    "Tone",
    "GeminiRephraser",
    "GroqRephraser",
    "build_prompt",
    "create_rephraser",
]
