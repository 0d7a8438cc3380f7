"""Classify working tree changes into change records.

Contains:
- ChangeKind: How a path differs from the reference commit
- ChangeRecord: A changed path together with its before/after content
- StatusScanner: Turns status entries into change records
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from gitai.git.base import FileStatus, StatusCode, VersionControl
from gitai.git.exceptions import ContentReadError

logger = logging.getLogger(__name__)


class ChangeKind(Enum):
    """How a path differs from the reference commit."""

    UNTRACKED = "untracked"
    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"


@dataclass(frozen=True)
class ChangeRecord:
    """One changed path with the content on each side of the change.

    Attributes:
        path: Path relative to the repository root.
        kind: The change classification.
        old_content: Content at the reference commit (None for new files).
        new_content: Content in the working tree (None for deletions).
    """

    path: str
    kind: ChangeKind
    old_content: Optional[bytes] = None
    new_content: Optional[bytes] = None


class StatusScanner:
    """Enumerate changed paths and load their content.

    Args:
        vcs: The version-control capability to query.
        reference: Commit id the working tree is compared against.
    """

    def __init__(self, vcs: VersionControl, reference: str):
        self.vcs = vcs
        self.reference = reference

    def statuses(self) -> list[FileStatus]:
        """Return the raw status entries (path, staging, worktree)."""
        return self.vcs.status()

    def scan(self) -> list[ChangeRecord]:
        """Build a change record for every changed path, in status order.

        Raises:
            VCSQueryError: If the status query fails.
            ContentReadError: If a changed file cannot be read.
        """
        records: list[ChangeRecord] = []
        for entry in self.statuses():
            records.extend(self.classify(entry))
        return records

    def classify(self, entry: FileStatus) -> list[ChangeRecord]:
        """Turn one status entry into zero or more change records."""
        staging, worktree = entry.staging, entry.worktree

        if entry.is_untracked:
            return [self._new_file(entry.path, ChangeKind.UNTRACKED)]

        if staging in (StatusCode.RENAMED, StatusCode.COPIED):
            records = []
            if worktree is not StatusCode.DELETED:
                records.append(self._new_file(entry.path, ChangeKind.ADDED))
            if staging is StatusCode.RENAMED and entry.orig_path:
                records.append(self._deleted(entry.orig_path))
            return records

        if staging is StatusCode.ADDED:
            if worktree is StatusCode.DELETED:
                # Added to the index, then removed from disk: nothing left to describe
                logger.debug("Skipping %s: added then deleted", entry.path)
                return []
            return [self._new_file(entry.path, ChangeKind.ADDED)]

        if StatusCode.DELETED in (staging, worktree):
            return [self._deleted(entry.path)]

        return [self._modified(entry.path)]

    def _new_file(self, path: str, kind: ChangeKind) -> ChangeRecord:
        return ChangeRecord(path, kind, new_content=self.vcs.read_working_file(path))

    def _deleted(self, path: str) -> ChangeRecord:
        old = self.vcs.read_blob_at(self.reference, path)
        if old is None:
            raise ContentReadError(path, f"not found in {self.reference}")
        return ChangeRecord(path, ChangeKind.DELETED, old_content=old)

    def _modified(self, path: str) -> ChangeRecord:
        new = self.vcs.read_working_file(path)
        old = self.vcs.read_blob_at(self.reference, path)
        if old is None:
            # Not in the reference tree, so it is new relative to the commit
            logger.debug("%s missing from reference tree; treating as added", path)
            return ChangeRecord(path, ChangeKind.ADDED, new_content=new)
        return ChangeRecord(path, ChangeKind.MODIFIED, old_content=old, new_content=new)
