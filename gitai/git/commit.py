"""Stage the working tree and commit it.

Contains:
- resolve_identity: Pick the author identity, local config before global
- CommitCoordinator: Restage every changed path and create the commit
"""

import logging

from gitai.git.base import Identity, StatusCode, VersionControl
from gitai.git.exceptions import CommitError, VCSQueryError

logger = logging.getLogger(__name__)


def resolve_identity(vcs: VersionControl) -> Identity:
    """Resolve the author identity for a commit.

    Args:
        vcs: The version-control capability.

    Returns:
        The local identity if set, otherwise the global one.

    Raises:
        CommitError: If neither identity is configured.
    """
    identity = vcs.local_identity()
    if identity is not None:
        return identity

    identity = vcs.global_identity()
    if identity is not None:
        logger.debug("Local identity unset; using global identity %s", identity)
        return identity

    raise CommitError(
        "No author identity configured. Set one with:\n"
        '  git config --global user.name "Your Name"\n'
        '  git config --global user.email "you@example.com"'
    )


class CommitCoordinator:
    """Stage all changes and commit them with an accepted message."""

    def __init__(self, vcs: VersionControl):
        self.vcs = vcs

    def changed_paths(self) -> list[str]:
        """Return every path that still needs staging, in status order.

        Paths whose removal is already recorded in the index (a staged
        deletion, or the source of a staged rename) exist neither on disk
        nor in the index, so there is nothing left to add for them.
        """
        try:
            entries = self.vcs.status()
        except VCSQueryError as e:
            raise CommitError(f"Could not list changes to stage: {e}") from e

        paths: list[str] = []
        for entry in entries:
            if entry.orig_path and entry.worktree is StatusCode.RENAMED:
                paths.append(entry.orig_path)
            if entry.staging is StatusCode.DELETED:
                logger.debug("%s already staged for deletion", entry.path)
                continue
            paths.append(entry.path)
        return list(dict.fromkeys(paths))

    def commit(self, message: str) -> str:
        """Restage the working tree and commit it.

        Status is queried again because the tree may have changed while the
        message was being reviewed.

        Args:
            message: The accepted commit message.

        Returns:
            The new commit id.

        Raises:
            CommitError: If staging or committing fails.
        """
        for path in self.changed_paths():
            self.vcs.stage_path(path)

        author = resolve_identity(self.vcs)
        commit_id = self.vcs.commit(message, author)
        logger.debug("Created commit %s as %s", commit_id, author)
        return commit_id
