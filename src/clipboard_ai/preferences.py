"""
Preferences Module
Persists the rephrase tone in per-user NSUserDefaults.
"""

import logging
from enum import Enum
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)

TONE_KEY = "rephrase_tone"


class Tone(str, Enum):
    """Writing tones offered in the preferences panel."""
    PROFESSIONAL = "Professional"
    FRIENDLY = "Friendly"
    CONCISE = "Concise"
    FORMAL = "Formal"
    CASUAL = "Casual"

    @classmethod
    def parse(cls, value: Optional[str], default: Optional["Tone"] = None) -> "Tone":
        """
        Map a stored or configured string to a Tone.

        Matching is case-insensitive. Unknown or empty values map to default.

        Args:
            value: Tone name, e.g. "casual"
            default: Tone to return for unknown values (Professional if None)

        Returns:
            A Tone member.
        """
        if isinstance(value, cls):
            return value
        fallback = default if default is not None else cls.PROFESSIONAL
        if not value:
            return fallback
        needle = str(value).strip().lower()
        for tone in cls:
            if tone.value.lower() == needle:
                return tone
        return fallback

    @property
    def instruction(self) -> str:
        """Lower-case form embedded in the prompt."""
        return self.value.lower()


def _standard_user_defaults() -> Any:
    from Foundation import NSUserDefaults
    return NSUserDefaults.standardUserDefaults()


class PreferencesStore:
    """
    Get/set of the single tone preference.

    Backed by NSUserDefaults by default. Any object exposing
    stringForKey_ and setObject_forKey_ can be injected instead.
    """

    def __init__(
        self,
        defaults: Any = None,
        key: str = TONE_KEY,
        default: Union[Tone, str] = Tone.PROFESSIONAL,
    ):
        self._defaults = defaults if defaults is not None else _standard_user_defaults()
        self.key = key
        self.default = Tone.parse(default) if isinstance(default, str) else default

    @property
    def tone(self) -> Tone:
        """Current tone; the default applies when unset or unrecognized."""
        stored = self._defaults.stringForKey_(self.key)
        tone = Tone.parse(stored, self.default)
        if stored and tone.value.lower() != stored.strip().lower():
            logger.warning(f"Ignoring unknown stored tone '{stored}', using {tone.value}")
        return tone

    @tone.setter
    def tone(self, value: Union[Tone, str]) -> None:
        if isinstance(value, Tone):
            tone = value
        else:
            tone = Tone.parse(value, default=None)
            if tone.value.lower() != str(value).strip().lower():
                raise ValueError(
                    f"Tone must be one of: {', '.join(t.value for t in Tone)}. Got: {value}"
                )
        self._defaults.setObject_forKey_(tone.value, self.key)
        logger.info(f"Tone preference set to {tone.value}")

    def reset(self) -> None:
        """Remove the stored tone so the default applies again."""
        self._defaults.removeObjectForKey_(self.key)
