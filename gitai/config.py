"""Configuration for gitai.

Settings are resolved in this order (later wins):
1. The defaults below
2. ~/.gitai/config.yaml (managed with 'gitai config' commands)

API keys come from the environment, which is seeded from ~/.gitai.env and a
local .env file, or from ~/.gitai/credentials.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

logger = logging.getLogger(__name__)


class LLMProvider(Enum):
    """Supported LLM providers."""

    GROQ = "groq"
    OPENAI = "openai"
    ANTHROPIC = "anthropic"


# ============================================================
# DEFAULT FALLBACK VALUES
# ============================================================
# These are used only if ~/.gitai/config.yaml doesn't set them

DEFAULT_PROVIDER = LLMProvider.GROQ
DEFAULT_MODEL = "llama-3.3-70b-versatile"
DEFAULT_MAX_TOKENS = 8000
DEFAULT_TEMPERATURE = 1.0
DEFAULT_MAX_ATTEMPTS = 5

# Dotenv file in the home directory holding provider API keys
GLOBAL_ENV_FILE = Path.home() / ".gitai.env"


# ============================================================
# SYSTEM PROMPT
# ============================================================

SYSTEM_PROMPT = """You are a highly skilled developer tasked with generating precise and meaningful git commit messages. Follow these guidelines:

1. Use the Conventional Commits format: <type>(<scope>): <description>
2. Choose the most appropriate type (feat, fix, refactor, style, docs, test, chore, etc.)
3. Identify the specific scope of the changes
4. Write a concise but informative description of the changes, but limit to one line
5. Aim for clarity and specificity in your message
6. Analyze the entire diff to understand the full context of the changes
7. Focus on the most significant changes if there are multiple modifications
8. Avoid generic messages like "Update file" or "Fix bug"
9. Do not mention "using AI" or "automatic commit" in the message

Respond only with the commit message, without any additional text or explanations."""


# ============================================================
# AVAILABLE MODELS PER PROVIDER
# ============================================================

AVAILABLE_MODELS = {
    LLMProvider.GROQ: [
        "llama-3.3-70b-versatile",
        "llama-3.1-8b-instant",
        "openai/gpt-oss-120b",
        "openai/gpt-oss-20b",
    ],
    LLMProvider.OPENAI: [
        "gpt-4.1",
        "gpt-4.1-mini",
        "gpt-4.1-nano",
        "gpt-4o",
        "gpt-4o-mini",
    ],
    LLMProvider.ANTHROPIC: [
        "claude-sonnet-4-20250514",
        "claude-3-5-haiku-latest",
        "claude-3-5-sonnet-latest",
    ],
}

# ============================================================
# API KEY ENVIRONMENT VARIABLES
# ============================================================

API_KEY_ENV_VARS = {
    LLMProvider.GROQ: "GROQ_API_KEY",
    LLMProvider.OPENAI: "OPENAI_API_KEY",
    LLMProvider.ANTHROPIC: "ANTHROPIC_API_KEY",
}


class Settings(BaseModel):
    """Resolved runtime settings.

    Attributes:
        provider: Which LLM provider generates messages.
        model: Model name understood by the provider.
        max_tokens: Completion token limit.
        temperature: Sampling temperature.
        max_attempts: How many proposals the operator may reject before giving up.
        base_url: Optional endpoint override for OpenAI-compatible gateways.
        system_prompt: Fixed instruction sent ahead of the diff.
    """

    provider: LLMProvider = DEFAULT_PROVIDER
    model: str = DEFAULT_MODEL
    max_tokens: int = DEFAULT_MAX_TOKENS
    temperature: float = DEFAULT_TEMPERATURE
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    base_url: Optional[str] = None
    system_prompt: str = SYSTEM_PROMPT

    @field_validator("max_attempts")
    @classmethod
    def max_attempts_must_be_positive(cls, v: int) -> int:
        """Ensure at least one proposal can be made."""
        if v < 1:
            raise ValueError("max_attempts must be at least 1")
        return v

    @field_validator("max_tokens")
    @classmethod
    def max_tokens_must_be_positive(cls, v: int) -> int:
        """Ensure the completion has room for a message."""
        if v < 1:
            raise ValueError("max_tokens must be at least 1")
        return v


def load_env_files(global_env_file: Optional[Path] = None) -> None:
    """Seed the process environment from dotenv files.

    Existing environment variables always win over file contents.

    Args:
        global_env_file: Path of the home-directory env file. Defaults to ~/.gitai.env.
    """
    env_file = global_env_file or GLOBAL_ENV_FILE
    if env_file.exists():
        load_dotenv(env_file, override=False)
        logger.debug("Loaded environment from %s", env_file)
    else:
        logger.debug("No global env file at %s", env_file)

    # Repo-level .env (searched from the working directory upwards)
    load_dotenv(override=False)


def load_config() -> Settings:
    """Load settings from the env files and the global config file.

    This should be called by the CLI before using the LLM.

    Returns:
        The resolved Settings.

    Raises:
        GlobalConfigError: If the config file cannot be read.
        pydantic.ValidationError: If the config file holds invalid values.
    """
    # Import here to avoid circular dependency
    from gitai import global_config

    load_env_files()

    overrides = {}
    provider = global_config.get_active_provider()
    model = global_config.get_active_model()
    if provider:
        overrides["provider"] = provider
        # A provider switch without an explicit model falls back to that provider's first model
        overrides["model"] = model or AVAILABLE_MODELS[provider][0]
    elif model:
        overrides["model"] = model

    for key, getter in (
        ("max_tokens", global_config.get_max_tokens),
        ("temperature", global_config.get_temperature),
        ("max_attempts", global_config.get_max_attempts),
        ("base_url", global_config.get_base_url),
    ):
        value = getter()
        if value is not None:
            overrides[key] = value

    settings = Settings(**overrides)
    logger.debug(
        "Using provider=%s model=%s max_attempts=%d",
        settings.provider.value,
        settings.model,
        settings.max_attempts,
    )
    return settings
