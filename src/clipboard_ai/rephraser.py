"""
Rephraser Module
Sends captured text to a generative-language API and returns the rewrite.
"""

import logging
import os
from abc import ABC, abstractmethod
from typing import Optional, Union

import google.generativeai as genai
from groq import Groq

from clipboard_ai.config import Config, DEFAULT_MODELS
from clipboard_ai.exceptions import (
    ConfigurationError,
    EmptyResponseError,
    MissingCredentialError,
    RephraseError,
    ServiceError,
)
from clipboard_ai.preferences import Tone

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = (
    "Please rephrase the following text in a {tone} manner. "
    "Just return the rephrased text, no other text or comment. "
    "Only return one option, no other options. Don't return an array. "
    "Here is the text to rephrase: {text}"
)


def build_prompt(text: str, tone: Union[Tone, str]) -> str:
    """
    Build the rephrase instruction.

    Args:
        text: Literal text to rephrase (embedded unchanged)
        tone: Tone member or tone name

    Returns:
        Prompt string with the lower-case tone and the text.
    """
    return PROMPT_TEMPLATE.format(tone=Tone.parse(tone).instruction, text=text)


class RephraserBase(ABC):
    """
    Base class for rephrase backends.

    Subclasses implement _generate() for one single-turn request.
    No retries, no streaming; the transport default timeout applies.
    """

    API_KEY_ENV = ""
    DEFAULT_MODEL = ""

    def __init__(
        self,
        model: Optional[str] = None,
        temperature: float = 1.0,
        top_p: float = 0.95,
        top_k: int = 40,
        max_output_tokens: int = 8192,
        api_key: Optional[str] = None,
    ):
        """
        Initialize rephraser.

        Args:
            model: Model name (backend default if None)
            temperature: Sampling temperature
            top_p: Nucleus sampling threshold
            top_k: Top-k restriction (ignored by backends without it)
            max_output_tokens: Maximum output length
            api_key: Explicit API key. If None, read from the environment on each call.
        """
        self.model = model or self.DEFAULT_MODEL
        self.temperature = temperature
        self.top_p = top_p
        self.top_k = top_k
        self.max_output_tokens = max_output_tokens
        self._api_key = api_key

    def get_api_key(self) -> str:
        """
        Resolve the API key at call time.

        Raises:
            MissingCredentialError: If no key is configured
        """
        api_key = self._api_key or os.environ.get(self.API_KEY_ENV)
        if not api_key:
            raise MissingCredentialError(
                f"{self.API_KEY_ENV} is not set. Add it to your environment or .env file."
            )
        return api_key

    @abstractmethod
    def _generate(self, prompt: str, api_key: str) -> Optional[str]:
        """
        Send one request and return the raw reply text.

        Args:
            prompt: Complete instruction
            api_key: Resolved credential

        Returns:
            Reply text, or None if the service returned no text.
        """
        pass

    def rephrase(self, text: str, tone: Union[Tone, str] = Tone.PROFESSIONAL) -> str:
        """
        Rephrase text in the given tone.

        Args:
            text: Text to rephrase
            tone: Target tone

        Returns:
            Rephrased text, trimmed.

        Raises:
            MissingCredentialError: If no API key is configured (no request is made)
            EmptyResponseError: If the reply is empty after trimming
            ServiceError: If the request itself fails
        """
        api_key = self.get_api_key()
        prompt = build_prompt(text, tone)
        logger.debug(f"Rephrase request: model={self.model}, tone={Tone.parse(tone).value}")

        try:
            reply = self._generate(prompt, api_key)
        except RephraseError:
            raise
        except Exception as e:
            logger.error(f"Rephrase request failed: {e}")
            raise ServiceError(f"Rephrase request failed: {e}") from e

        result = (reply or "").strip()
        if not result:
            logger.warning("Rephrase service returned an empty response")
            raise EmptyResponseError("No response received")

        logger.debug(f"Rephrase response: {len(result)} characters")
        return result


class GeminiRephraser(RephraserBase):
    """Rephrases text using the Google Gemini API."""

    API_KEY_ENV = "GEMINI_API_KEY"
    DEFAULT_MODEL = DEFAULT_MODELS["gemini"]

    def _generate(self, prompt: str, api_key: str) -> Optional[str]:
        genai.configure(api_key=api_key)
        model = genai.GenerativeModel(
            model_name=self.model,
            generation_config={
                "temperature": self.temperature,
                "top_p": self.top_p,
                "top_k": self.top_k,
                "max_output_tokens": self.max_output_tokens,
                "response_mime_type": "text/plain",
            },
        )

        # Fresh chat per request
        chat = model.start_chat(history=[])
        response = chat.send_message(prompt)

        try:
            return response.text
        except ValueError:
            # Raised when the candidate has no text parts (e.g. blocked)
            return None


class GroqRephraser(RephraserBase):
    """Rephrases text using the Groq chat completions API."""

    API_KEY_ENV = "GROQ_API_KEY"
    DEFAULT_MODEL = DEFAULT_MODELS["groq"]

    def _generate(self, prompt: str, api_key: str) -> Optional[str]:
        client = Groq(api_key=api_key)
        completion = client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=self.temperature,
            top_p=self.top_p,
            max_tokens=self.max_output_tokens,
        )
        if not completion.choices:
            return None
        return completion.choices[0].message.content


REPHRASERS = {
    "gemini": GeminiRephraser,
    "groq": GroqRephraser,
}


def create_rephraser(config: Config) -> RephraserBase:
    """
    Create the rephraser selected by configuration.

    Args:
        config: Application configuration

    Returns:
        Rephraser instance (API key is resolved later, per call)

    Raises:
        ConfigurationError: If the backend is unknown
    """
    rephraser_class = REPHRASERS.get(config.backend)
    if rephraser_class is None:
        raise ConfigurationError(
            f"Unknown rephrase backend '{config.backend}'. "
            f"Choose one of: {', '.join(REPHRASERS)}"
        )

    logger.info(f"Using {config.backend} rephraser (model: {config.model_name})")
    return rephraser_class(
        model=config.model_name,
        temperature=config.temperature,
        top_p=config.top_p,
        top_k=config.top_k,
        max_output_tokens=config.max_output_tokens,
    )
