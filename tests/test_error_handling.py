"""Tests for the exception hierarchy."""

import pytest

from clipboard_ai.exceptions import (
    CaptureError,
    ClipboardAIError,
    ConfigurationError,
    EmptyResponseError,
    ErrorLoopDetectedError,
    HotkeyListenerError,
    MissingCredentialError,
    NoSelectionError,
    NotificationError,
    OutputError,
    PlatformNotSupportedError,
    RephraseError,
    ServiceError,
)


class TestExceptionHierarchy:

    @pytest.mark.parametrize("exc_class", [
        ConfigurationError,
        CaptureError,
        RephraseError,
        OutputError,
        NotificationError,
        PlatformNotSupportedError,
        HotkeyListenerError,
    ])
    def test_inherits_from_base(self, exc_class):
        assert issubclass(exc_class, ClipboardAIError)

    @pytest.mark.parametrize("exc_class", [NoSelectionError, ErrorLoopDetectedError])
    def test_capture_errors(self, exc_class):
        assert issubclass(exc_class, CaptureError)
        assert not issubclass(exc_class, RephraseError)

    @pytest.mark.parametrize("exc_class", [
        MissingCredentialError, EmptyResponseError, ServiceError
    ])
    def test_rephrase_errors(self, exc_class):
        assert issubclass(exc_class, RephraseError)
        assert not issubclass(exc_class, CaptureError)

    def test_message_preserved(self):
        error = MissingCredentialError("GEMINI_API_KEY is not set.")
        assert str(error) == "GEMINI_API_KEY is not set."

    def test_catch_by_base(self):
        with pytest.raises(ClipboardAIError):
            raise ServiceError("503")
