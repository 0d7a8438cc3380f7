"""Shared utility functions for CLI commands."""

import logging
import os
import sys

import typer

from gitai.retry import Operator

LOG_LEVEL_ENV_VAR = "GITAI_LOG_LEVEL"


def configure_logging() -> None:
    """Send log records to stderr at the level named by GITAI_LOG_LEVEL.

    Defaults to WARNING; unknown level names fall back to WARNING too.
    """
    level_name = os.environ.get(LOG_LEVEL_ENV_VAR, "WARNING").upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )


def mask_secret(value: str) -> str:
    """Shorten a secret for display."""
    return value[:8] + "..." + value[-4:] if len(value) > 12 else "***"


class TerminalOperator(Operator):
    """Operator that reviews proposals on the terminal."""

    def present(self, message: str, attempt: int, max_attempts: int) -> None:
        typer.echo(f"\nGenerated commit message (Attempt {attempt}/{max_attempts}):")
        typer.echo(message)

    def ask(self) -> str:
        return typer.prompt(
            "Do you want to use this commit message? (Y/n)",
            default="",
            show_default=False,
        )

    def reject_invalid(self, response: str) -> None:
        typer.echo(f"Invalid response: {response!r}. Please answer 'y' or 'n'.", err=True)
