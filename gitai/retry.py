"""Propose commit messages until the operator accepts one.

Contains:
- LoopState: States of the accept/retry cycle
- Confirmation, parse_confirmation: Interpret operator answers
- Operator: Capability used to show proposals and read answers
- UserAbort: Raised when every attempt was rejected
- MessageRetryLoop: The bounded generate/confirm cycle
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable

from gitai.config import DEFAULT_MAX_ATTEMPTS

logger = logging.getLogger(__name__)


class LoopState(Enum):
    """States of the message retry loop."""

    GENERATING = "generating"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    REGENERATING = "regenerating"
    ACCEPTED = "accepted"
    EXHAUSTED = "exhausted"


class Confirmation(Enum):
    """Operator decision on a proposed message."""

    ACCEPT = "accept"
    REJECT = "reject"
    INVALID = "invalid"


ACCEPT_ANSWERS = frozenset({"", "y", "yes"})
REJECT_ANSWERS = frozenset({"n", "no"})


def parse_confirmation(response: str) -> Confirmation:
    """Interpret an operator answer.

    Empty input counts as acceptance. Matching is case-insensitive and
    ignores surrounding whitespace.

    Args:
        response: The raw text the operator entered.

    Returns:
        The decision the answer represents.
    """
    answer = (response or "").strip().lower()
    if answer in ACCEPT_ANSWERS:
        return Confirmation.ACCEPT
    if answer in REJECT_ANSWERS:
        return Confirmation.REJECT
    return Confirmation.INVALID


class UserAbort(Exception):
    """Raised when the operator rejected every proposal.

    This is a normal termination, not an error.
    """

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__("Maximum attempts reached. Exiting without committing.")


class Operator(ABC):
    """Interactive counterpart that reviews proposed messages."""

    @abstractmethod
    def present(self, message: str, attempt: int, max_attempts: int) -> None:
        """Show a proposed message and the attempt count."""

    @abstractmethod
    def ask(self) -> str:
        """Ask whether to use the message and return the raw answer."""

    def reject_invalid(self, response: str) -> None:
        """Tell the operator an answer was not understood."""


class MessageRetryLoop:
    """Generate commit messages until one is accepted or attempts run out.

    Args:
        generate: Completion capability turning a diff into a message. Its
            errors propagate unchanged and end the loop.
        operator: Shows proposals and collects answers.
        max_attempts: Number of proposals the operator may see.
    """

    def __init__(
        self,
        generate: Callable[[str], str],
        operator: Operator,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.generate = generate
        self.operator = operator
        self.max_attempts = max_attempts
        self.state = LoopState.GENERATING
        self.attempt = 1

    def run(self, diff_text: str) -> str:
        """Drive the loop to a terminal state.

        Args:
            diff_text: The diff document sent to the completion service.

        Returns:
            The accepted commit message.

        Raises:
            UserAbort: If every proposal was rejected.
            CompletionServiceError: If message generation fails.
        """
        self.state = LoopState.GENERATING
        self.attempt = 1
        message = ""

        while True:
            if self.state is LoopState.GENERATING:
                message = self.generate(diff_text)
                self.state = LoopState.AWAITING_CONFIRMATION

            elif self.state is LoopState.AWAITING_CONFIRMATION:
                decision = self._confirm(message)
                if decision is Confirmation.ACCEPT:
                    self.state = LoopState.ACCEPTED
                    logger.debug("Message accepted on attempt %d", self.attempt)
                    return message
                if self.attempt >= self.max_attempts:
                    self.state = LoopState.EXHAUSTED
                    logger.debug("All %d attempts rejected", self.max_attempts)
                    raise UserAbort(self.attempt)
                self.attempt += 1
                self.state = LoopState.REGENERATING

            elif self.state is LoopState.REGENERATING:
                logger.debug("Regenerating message, attempt %d/%d", self.attempt, self.max_attempts)
                self.state = LoopState.GENERATING

            else:
                raise RuntimeError(f"Loop cannot continue from state {self.state}")

    def _confirm(self, message: str) -> Confirmation:
        self.operator.present(message, self.attempt, self.max_attempts)
        while True:
            response = self.operator.ask()
            decision = parse_confirmation(response)
            if decision is not Confirmation.INVALID:
                return decision
            self.operator.reject_invalid(response)
