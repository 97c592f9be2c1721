"""
Custom Exceptions for ClipboardAI application.

This module defines the exception hierarchy used throughout the application.
"""


class ClipboardAIError(Exception):
    """Base exception for all ClipboardAI errors."""
    pass


class ConfigurationError(ClipboardAIError):
    """Error in application configuration."""
    pass


class CaptureError(ClipboardAIError):
    """Error capturing the current selection."""
    pass


class NoSelectionError(CaptureError):
    """Clipboard holds no usable text after a capture."""
    pass


class ErrorLoopDetectedError(CaptureError):
    """Captured text looks like one of our own error messages."""
    pass


class RephraseError(ClipboardAIError):
    """Error rephrasing text via the remote service."""
    pass


class MissingCredentialError(RephraseError):
    """No API key configured for the rephrase backend."""
    pass


class EmptyResponseError(RephraseError):
    """The service returned nothing usable."""
    pass


class ServiceError(RephraseError):
    """The remote call itself failed (network, auth, quota, malformed reply)."""
    pass


class OutputError(ClipboardAIError):
    """Error reading from or writing to the clipboard."""
    pass


class NotificationError(ClipboardAIError):
    """Error delivering a user notification."""
    pass


class PlatformNotSupportedError(ClipboardAIError):
    """Error when running on an unsupported platform."""
    pass


class HotkeyListenerError(ClipboardAIError):
    """Error when hotkey listener fails to initialize or start."""
    pass
