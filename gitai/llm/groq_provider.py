"""Groq provider implementation."""

from typing import Optional

from groq import Groq

from gitai.config import API_KEY_ENV_VARS, DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE, LLMProvider
from gitai.llm.base import BaseLLMProvider


class GroqProvider(BaseLLMProvider):
    """Groq LLM provider (fast inference for open-source models)."""

    display_name = "Groq"

    def __init__(
        self,
        model: str | None = None,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: float = DEFAULT_TEMPERATURE,
        base_url: str | None = None,
    ):
        """Initialize the Groq provider.

        Args:
            model: The model to use. Defaults to llama-3.3-70b-versatile.
            max_tokens: Completion token limit.
            temperature: Sampling temperature.
            base_url: Optional gateway URL in front of the Groq API.
        """
        super().__init__(
            model=model or "llama-3.3-70b-versatile",
            api_key_env_var=API_KEY_ENV_VARS[LLMProvider.GROQ],
            max_tokens=max_tokens,
            temperature=temperature,
        )
        self.base_url = base_url

    def complete(self, api_key: str, diff_text: str) -> tuple[Optional[str], int, int]:
        client = Groq(api_key=api_key, base_url=self.base_url)

        response = client.chat.completions.create(
            model=self.model,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            messages=[
                {"role": "system", "content": self.system_prompt},
                {"role": "user", "content": diff_text},
            ],
        )

        raw_response = response.choices[0].message.content if response.choices else None
        usage = response.usage
        return (
            raw_response,
            usage.prompt_tokens if usage else 0,
            usage.completion_tokens if usage else 0,
        )
