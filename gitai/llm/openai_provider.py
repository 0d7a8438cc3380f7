"""OpenAI GPT provider implementation.

Also serves any OpenAI-compatible endpoint through ``base_url``.
"""

from typing import Optional

from openai import OpenAI

from gitai.config import API_KEY_ENV_VARS, DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE, LLMProvider
from gitai.llm.base import BaseLLMProvider


class OpenAIProvider(BaseLLMProvider):
    """OpenAI GPT LLM provider."""

    display_name = "OpenAI"

    def __init__(
        self,
        model: str | None = None,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: float = DEFAULT_TEMPERATURE,
        base_url: str | None = None,
    ):
        """Initialize the OpenAI provider.

        Args:
            model: The model to use. Defaults to gpt-4o-mini.
            max_tokens: Completion token limit.
            temperature: Sampling temperature.
            base_url: Optional OpenAI-compatible endpoint.
        """
        super().__init__(
            model=model or "gpt-4o-mini",
            api_key_env_var=API_KEY_ENV_VARS[LLMProvider.OPENAI],
            max_tokens=max_tokens,
            temperature=temperature,
        )
        self.base_url = base_url

    def complete(self, api_key: str, diff_text: str) -> tuple[Optional[str], int, int]:
        client = OpenAI(api_key=api_key, base_url=self.base_url)

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
