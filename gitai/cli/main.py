"""Main CLI command: generate a message for the working tree and commit."""

from functools import partial

import typer
from pydantic import ValidationError

from gitai.cli.utils import TerminalOperator, configure_logging
from gitai.config import load_config
from gitai.git import (
    CommitError,
    ContentReadError,
    GitError,
    GitRepository,
    VCSQueryError,
)
from gitai.global_config import GlobalConfigError
from gitai.llm import CompletionServiceError, MissingAPIKeyError, generate_commit_message
from gitai.workflow import Outcome, run_workflow

NO_CHANGES_MESSAGE = "No changes detected."
EXHAUSTED_MESSAGE = "Maximum attempts reached. Exiting without committing."


def _fail(message: str) -> typer.Exit:
    typer.echo(message, err=True)
    return typer.Exit(1)


def main_command(ctx: typer.Context) -> None:
    """Generate an AI commit message for all working tree changes and commit them."""
    # If a subcommand is invoked, don't run the default behavior
    if ctx.invoked_subcommand is not None:
        return

    configure_logging()

    try:
        settings = load_config()
    except (GlobalConfigError, ValidationError) as e:
        raise _fail(f"Error loading configuration: {e}")

    try:
        repo = GitRepository()
        result = run_workflow(
            repo,
            partial(generate_commit_message, settings=settings),
            TerminalOperator(),
            max_attempts=settings.max_attempts,
        )
    except VCSQueryError as e:
        raise _fail(f"Error reading repository state: {e}")
    except ContentReadError as e:
        raise _fail(f"Error getting diff: {e}")
    except CommitError as e:
        raise _fail(f"Error committing changes: {e}")
    except GitError as e:
        raise _fail(f"Error opening repository: {e}")
    except MissingAPIKeyError as e:
        raise _fail(f"API key error: {e}")
    except CompletionServiceError as e:
        raise _fail(f"Error generating commit message: {e}")
    except GlobalConfigError as e:
        raise _fail(f"Error loading configuration: {e}")
    except (KeyboardInterrupt, typer.Abort):
        typer.echo("\nAborted.", err=True)
        raise typer.Exit(130)

    if result.outcome is Outcome.NO_CHANGES:
        typer.echo(NO_CHANGES_MESSAGE)
    elif result.outcome is Outcome.EXHAUSTED:
        typer.echo(EXHAUSTED_MESSAGE)
    else:
        typer.echo(f"Committed {result.commit_id[:7]}: {result.message}")
