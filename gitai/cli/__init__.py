"""CLI entry point for gitai.

This module provides the main CLI application that combines the default
commit workflow with the configuration subcommands.
"""

import typer

from gitai.cli.config import config_app
from gitai.cli.main import main_command

# Main application
app = typer.Typer(
    name="gitai",
    help="gitai: AI-generated commit messages for your working tree",
    add_completion=False,
)

# Add subcommand groups
app.add_typer(config_app, name="config")

# Set the main callback for default behavior
app.callback(invoke_without_command=True)(main_command)


def main() -> None:
    """Console script entry point."""
    app()


__all__ = [
    "app",
    "config_app",
    "main_command",
    "main",
]
