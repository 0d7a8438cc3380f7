"""LLM provider module for gitai.

This module provides a unified interface to the supported completion
services. The active provider comes from gitai.config.Settings.
"""

from gitai.config import LLMProvider, Settings
from gitai.llm.base import BaseLLMProvider, LLMResult, clean_message
from gitai.llm.exceptions import (
    CompletionServiceError,
    EmptyResponseError,
    MissingAPIKeyError,
)


def get_provider(settings: Settings | None = None) -> BaseLLMProvider:
    """Get an LLM provider instance.

    Args:
        settings: Resolved settings. Defaults to built-in defaults.

    Returns:
        An instance of the appropriate LLM provider.

    Raises:
        ValueError: If the provider is not supported.
    """
    settings = settings or Settings()
    kwargs = dict(
        model=settings.model,
        max_tokens=settings.max_tokens,
        temperature=settings.temperature,
        base_url=settings.base_url,
    )

    if settings.provider == LLMProvider.GROQ:
        from gitai.llm.groq_provider import GroqProvider

        provider = GroqProvider(**kwargs)

    elif settings.provider == LLMProvider.OPENAI:
        from gitai.llm.openai_provider import OpenAIProvider

        provider = OpenAIProvider(**kwargs)

    elif settings.provider == LLMProvider.ANTHROPIC:
        from gitai.llm.anthropic_provider import AnthropicProvider

        provider = AnthropicProvider(**kwargs)

    else:
        raise ValueError(f"Unsupported provider: {settings.provider}")

    provider.system_prompt = settings.system_prompt
    return provider


def generate_commit_message(diff_text: str, settings: Settings | None = None) -> str:
    """Generate a commit message for a diff document.

    This is the completion capability handed to the retry loop.

    Args:
        diff_text: The unified diff of the working tree.
        settings: Resolved settings.

    Returns:
        The proposed commit message.

    Raises:
        MissingAPIKeyError: If the API key is not set.
        CompletionServiceError: For other LLM-related errors.
    """
    return get_provider(settings).generate(diff_text).message


__all__ = [
    "BaseLLMProvider",
    "CompletionServiceError",
    "EmptyResponseError",
    "MissingAPIKeyError",
    "LLMResult",
    "clean_message",
    "get_provider",
    "generate_commit_message",
]
