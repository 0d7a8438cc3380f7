"""Anthropic Claude provider implementation."""

from typing import Optional

from anthropic import Anthropic

from gitai.config import API_KEY_ENV_VARS, DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE, LLMProvider
from gitai.llm.base import BaseLLMProvider


class AnthropicProvider(BaseLLMProvider):
    """Anthropic Claude LLM provider."""

    display_name = "Anthropic"

    def __init__(
        self,
        model: str | None = None,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: float = DEFAULT_TEMPERATURE,
        base_url: str | None = None,
    ):
        """Initialize the Anthropic provider.

        Args:
            model: The model to use. Defaults to claude-3-5-haiku-latest.
            max_tokens: Completion token limit.
            temperature: Sampling temperature (Anthropic accepts 0.0 to 1.0).
            base_url: Optional API endpoint override.
        """
        super().__init__(
            model=model or "claude-3-5-haiku-latest",
            api_key_env_var=API_KEY_ENV_VARS[LLMProvider.ANTHROPIC],
            max_tokens=max_tokens,
            temperature=min(temperature, 1.0),
        )
        self.base_url = base_url

    def complete(self, api_key: str, diff_text: str) -> tuple[Optional[str], int, int]:
        client = Anthropic(api_key=api_key, base_url=self.base_url)

        message = client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            system=self.system_prompt,
            messages=[{"role": "user", "content": diff_text}],
        )

        text_blocks = [block.text for block in message.content if getattr(block, "type", None) == "text"]
        raw_response = "".join(text_blocks) if text_blocks else None
        return raw_response, message.usage.input_tokens, message.usage.output_tokens
