"""Base classes and shared utilities for LLM providers."""

import logging
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from gitai.config import SYSTEM_PROMPT
from gitai.llm.exceptions import (
    CompletionServiceError,
    EmptyResponseError,
    MissingAPIKeyError,
)

logger = logging.getLogger(__name__)


@dataclass
class LLMResult:
    """Result from an LLM generation call, including token usage."""

    message: str
    model: str
    input_tokens: int
    output_tokens: int


def clean_message(raw_response: Optional[str]) -> str:
    """Normalize a raw completion into a commit message.

    Strips surrounding whitespace and markdown code fences the model may have
    added despite instructions.

    Args:
        raw_response: The raw text returned by the model.

    Returns:
        The cleaned message.

    Raises:
        EmptyResponseError: If nothing usable remains.
    """
    cleaned = (raw_response or "").strip()

    if cleaned.startswith("```"):
        lines = cleaned.split("\n")
        # Remove first line (```text or ```)
        lines = lines[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        cleaned = "\n".join(lines).strip()

    if not cleaned:
        raise EmptyResponseError("The completion service returned an empty message.")
    return cleaned


class BaseLLMProvider(ABC):
    """Abstract base class for LLM providers."""

    #: Human-readable name used in error messages
    display_name = "LLM"

    def __init__(
        self,
        model: str,
        api_key_env_var: str,
        max_tokens: int,
        temperature: float,
        system_prompt: str = SYSTEM_PROMPT,
    ):
        self.model = model
        self.api_key_env_var = api_key_env_var
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.system_prompt = system_prompt

    @abstractmethod
    def complete(self, api_key: str, diff_text: str) -> tuple[Optional[str], int, int]:
        """Call the provider API.

        Args:
            api_key: The resolved API key.
            diff_text: The diff document sent as the user message.

        Returns:
            Tuple of (raw response text, input tokens, output tokens).
        """

    def generate(self, diff_text: str) -> LLMResult:
        """Generate a commit message from a diff document.

        Args:
            diff_text: The unified diff of the working tree.

        Returns:
            An LLMResult containing the commit message and metadata.

        Raises:
            MissingAPIKeyError: If the API key is not set.
            EmptyResponseError: If the response holds no message.
            CompletionServiceError: For other provider errors.
        """
        api_key = self.get_api_key()
        logger.debug(
            "Requesting commit message from %s (%s), %d diff chars",
            self.display_name,
            self.model,
            len(diff_text),
        )

        try:
            raw_response, input_tokens, output_tokens = self.complete(api_key, diff_text)
        except CompletionServiceError:
            raise
        except Exception as e:
            raise CompletionServiceError(f"{self.display_name} API call failed: {e}") from e

        message = clean_message(raw_response)
        logger.debug("Received %d input / %d output tokens", input_tokens, output_tokens)
        return LLMResult(
            message=message,
            model=self.model,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
        )

    def get_api_key(self) -> str:
        """Get the API key from environment or credentials file.

        Checks in order:
        1. Environment variable (including values loaded from ~/.gitai.env or .env)
        2. ~/.gitai/credentials file

        Returns:
            The API key string.

        Raises:
            MissingAPIKeyError: If the API key is not found.
        """
        api_key = os.getenv(self.api_key_env_var)
        if api_key:
            return api_key

        from gitai.global_config import get_credential
        api_key = get_credential(self.api_key_env_var)
        if api_key:
            return api_key

        raise MissingAPIKeyError(
            f"{self.display_name} API key not found. Set it using:\n"
            f"  1. Environment variable: export {self.api_key_env_var}=your_key_here\n"
            f"  2. The ~/.gitai.env file: {self.api_key_env_var}=your_key_here\n"
            f"  3. Run: gitai config set-key {self.display_name.lower()}"
        )
