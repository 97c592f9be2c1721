"""
Configuration Module
Loads and validates settings from environment variables.
"""

import os
from dataclasses import dataclass
from typing import Optional, List

from dotenv import load_dotenv


# Valid rephrase backends
VALID_BACKENDS = ["gemini", "groq"]

# Default model per backend
DEFAULT_MODELS = {
    "gemini": "gemini-2.0-flash",
    "groq": "llama-3.3-70b-versatile",
}

# Environment variable holding the API key for each backend
API_KEY_ENV_VARS = {
    "gemini": "GEMINI_API_KEY",
    "groq": "GROQ_API_KEY",
}

# Valid tone names (mirrors preferences.Tone)
VALID_TONES = ["Professional", "Friendly", "Concise", "Formal", "Casual"]


@dataclass
class Config:
    """Application configuration from environment variables."""

    # Rephrase backend
    backend: str = "gemini"  # "gemini" or "groq"
    model: Optional[str] = None  # Backend default if not set

    # Generation parameters
    temperature: float = 1.0
    top_p: float = 0.95
    top_k: int = 40
    max_output_tokens: int = 8192

    # Tone used when no preference has been stored yet
    default_tone: str = "Professional"

    # Selection capture polling
    capture_attempts: int = 10
    capture_interval: float = 0.05
    capture_jitter: float = 0.02

    # UI
    notifications_enabled: bool = True
    menubar_enabled: bool = True

    debug: bool = False

    @property
    def model_name(self) -> str:
        """Model to use, falling back to the backend default."""
        return self.model or DEFAULT_MODELS.get(self.backend, DEFAULT_MODELS["gemini"])

    @property
    def api_key_env_var(self) -> str:
        """Name of the environment variable holding the backend API key."""
        return API_KEY_ENV_VARS.get(self.backend, API_KEY_ENV_VARS["gemini"])

    @classmethod
    def from_env(cls) -> "Config":
        """
        Load configuration from environment variables.

        The API key is not part of Config. The rephraser reads it at call time.

        Environment Variables:
            CLIPBOARD_AI_BACKEND: Optional. Rephrase backend: "gemini" or "groq" (default: gemini).
            CLIPBOARD_AI_MODEL: Optional. Model name (default depends on backend).
            CLIPBOARD_AI_TEMPERATURE: Optional. Sampling temperature (default: 1.0).
            CLIPBOARD_AI_TOP_P: Optional. Nucleus sampling threshold (default: 0.95).
            CLIPBOARD_AI_TOP_K: Optional. Top-k restriction, Gemini only (default: 40).
            CLIPBOARD_AI_MAX_OUTPUT_TOKENS: Optional. Maximum output length (default: 8192).
            CLIPBOARD_AI_DEFAULT_TONE: Optional. Tone when none is stored (default: Professional).
            CLIPBOARD_AI_CAPTURE_ATTEMPTS: Optional. Clipboard polls after Cmd+C (default: 10).
            CLIPBOARD_AI_CAPTURE_INTERVAL: Optional. Seconds between polls (default: 0.05).
            CLIPBOARD_AI_CAPTURE_JITTER: Optional. Max random extra delay per poll (default: 0.02).
            CLIPBOARD_AI_NOTIFICATIONS: Optional. Show notifications (default: true).
            CLIPBOARD_AI_MENUBAR: Optional. Show the menu bar icon (default: true).
            CLIPBOARD_AI_DEBUG: Optional. Debug logging (default: false).

        Returns:
            Config instance with loaded values.

        Raises:
            ValueError: If a numeric value cannot be parsed.
        """
        load_dotenv()

        # Parse boolean environment variables
        def parse_bool(value: str, default: bool) -> bool:
            if not value:
                return default
            return value.lower() in ("true", "1", "yes")

        try:
            return cls(
                backend=os.environ.get("CLIPBOARD_AI_BACKEND", "gemini").lower(),
                model=os.environ.get("CLIPBOARD_AI_MODEL") or None,
                temperature=float(os.environ.get("CLIPBOARD_AI_TEMPERATURE", "1.0")),
                top_p=float(os.environ.get("CLIPBOARD_AI_TOP_P", "0.95")),
                top_k=int(os.environ.get("CLIPBOARD_AI_TOP_K", "40")),
                max_output_tokens=int(os.environ.get("CLIPBOARD_AI_MAX_OUTPUT_TOKENS", "8192")),
                default_tone=os.environ.get("CLIPBOARD_AI_DEFAULT_TONE", "Professional"),
                capture_attempts=int(os.environ.get("CLIPBOARD_AI_CAPTURE_ATTEMPTS", "10")),
                capture_interval=float(os.environ.get("CLIPBOARD_AI_CAPTURE_INTERVAL", "0.05")),
                capture_jitter=float(os.environ.get("CLIPBOARD_AI_CAPTURE_JITTER", "0.02")),
                notifications_enabled=parse_bool(os.environ.get("CLIPBOARD_AI_NOTIFICATIONS", ""), True),
                menubar_enabled=parse_bool(os.environ.get("CLIPBOARD_AI_MENUBAR", ""), True),
                debug=parse_bool(os.environ.get("CLIPBOARD_AI_DEBUG", ""), False),
            )
        except ValueError as e:
            raise ValueError(f"Invalid numeric configuration value: {e}") from e

    def validate(self) -> List[str]:
        """
        Validate configuration values.

        Returns:
            List of warning messages (empty if no warnings).

        Raises:
            ValueError: If configuration values are invalid.
        """
        warnings = []

        if self.backend not in VALID_BACKENDS:
            raise ValueError(
                f"CLIPBOARD_AI_BACKEND must be one of: {', '.join(VALID_BACKENDS)}. "
                f"Got: {self.backend}"
            )

        if not 0.0 <= self.temperature <= 2.0:
            raise ValueError("CLIPBOARD_AI_TEMPERATURE must be between 0 and 2")

        if not 0.0 < self.top_p <= 1.0:
            raise ValueError("CLIPBOARD_AI_TOP_P must be in (0, 1]")

        if self.top_k <= 0:
            raise ValueError("CLIPBOARD_AI_TOP_K must be positive")

        if self.max_output_tokens <= 0:
            raise ValueError("CLIPBOARD_AI_MAX_OUTPUT_TOKENS must be positive")

        tone_names = [t.lower() for t in VALID_TONES]
        if self.default_tone.lower() not in tone_names:
            raise ValueError(
                f"CLIPBOARD_AI_DEFAULT_TONE must be one of: {', '.join(VALID_TONES)}. "
                f"Got: {self.default_tone}"
            )

        if self.capture_attempts <= 0:
            raise ValueError("CLIPBOARD_AI_CAPTURE_ATTEMPTS must be positive")

        if self.capture_interval < 0:
            raise ValueError("CLIPBOARD_AI_CAPTURE_INTERVAL must be non-negative")

        if self.capture_jitter < 0:
            raise ValueError("CLIPBOARD_AI_CAPTURE_JITTER must be non-negative")

        if self.backend == "groq" and self.top_k != 40:
            warnings.append(
                "CLIPBOARD_AI_TOP_K is ignored by the groq backend"
            )

        total_wait = self.capture_attempts * (self.capture_interval + self.capture_jitter)
        if total_wait > 2.0:
            warnings.append(
                f"Selection capture may wait up to {total_wait:.1f}s before giving up"
            )

        if not os.environ.get(self.api_key_env_var):
            warnings.append(
                f"{self.api_key_env_var} is not set. Rephrasing will fail until it is configured."
            )

        return warnings
