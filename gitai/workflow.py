"""End-to-end flow: diff the working tree, agree on a message, commit.

The flow only depends on injected capabilities, so the CLI wires in the git
adapter, an LLM provider and a terminal operator while tests use fakes.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from gitai.config import DEFAULT_MAX_ATTEMPTS
from gitai.git.base import VersionControl
from gitai.git.commit import CommitCoordinator
from gitai.git.diff import collect_diff
from gitai.retry import MessageRetryLoop, Operator, UserAbort

logger = logging.getLogger(__name__)


class Outcome(Enum):
    """How a run ended."""

    NO_CHANGES = "no_changes"
    COMMITTED = "committed"
    EXHAUSTED = "exhausted"


@dataclass
class WorkflowResult:
    """Result of a run."""

    outcome: Outcome
    message: Optional[str] = None
    commit_id: Optional[str] = None
    attempts: int = 0


def run_workflow(
    vcs: VersionControl,
    generate: Callable[[str], str],
    operator: Operator,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    reference: str = "HEAD",
) -> WorkflowResult:
    """Generate a commit message for the working tree and commit it.

    Args:
        vcs: The version-control capability.
        generate: Completion capability turning a diff into a message.
        operator: Reviews proposed messages.
        max_attempts: Number of proposals the operator may reject.
        reference: Revision the working tree is compared against.

    Returns:
        The run result. An empty diff ends the run before any generation.

    Raises:
        VCSQueryError: If repository state cannot be queried.
        ContentReadError: If a changed file cannot be read.
        CompletionServiceError: If message generation fails.
        CommitError: If staging or committing fails.
    """
    diff_text = collect_diff(vcs, reference)
    if not diff_text:
        logger.debug("Empty diff; nothing to commit")
        return WorkflowResult(Outcome.NO_CHANGES)

    loop = MessageRetryLoop(generate, operator, max_attempts)
    try:
        message = loop.run(diff_text)
    except UserAbort as e:
        return WorkflowResult(Outcome.EXHAUSTED, attempts=e.attempts)

    commit_id = CommitCoordinator(vcs).commit(message)
    return WorkflowResult(
        Outcome.COMMITTED,
        message=message,
        commit_id=commit_id,
        attempts=loop.attempt,
    )
