"""Version-control capability interface.

The diff and commit logic only talks to a VersionControl object. The git CLI
adapter lives in gitai.git.repository; tests supply in-memory fakes.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class StatusCode(Enum):
    """One column of a porcelain status entry."""

    UNMODIFIED = " "
    MODIFIED = "M"
    TYPE_CHANGED = "T"
    ADDED = "A"
    DELETED = "D"
    RENAMED = "R"
    COPIED = "C"
    UPDATED_UNMERGED = "U"
    UNTRACKED = "?"
    IGNORED = "!"


@dataclass(frozen=True)
class FileStatus:
    """Status of one changed path.

    Attributes:
        path: Path relative to the repository root.
        staging: Index state relative to the reference commit.
        worktree: Working tree state relative to the index.
        orig_path: Source path for renames and copies.
    """

    path: str
    staging: StatusCode
    worktree: StatusCode
    orig_path: Optional[str] = None

    @property
    def is_untracked(self) -> bool:
        return self.staging is StatusCode.UNTRACKED


@dataclass(frozen=True)
class Identity:
    """Author identity used for commits."""

    name: str
    email: str

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"


class VersionControl(ABC):
    """Abstract capability set needed to diff and commit a working tree."""

    @abstractmethod
    def status(self) -> list[FileStatus]:
        """List every path that differs from the reference commit.

        Raises:
            VCSQueryError: If the status query fails.
        """

    @abstractmethod
    def resolve_reference(self, name: str = "HEAD") -> str:
        """Resolve a revision name to a commit id.

        Raises:
            VCSQueryError: If the revision does not exist.
        """

    @abstractmethod
    def read_blob_at(self, reference: str, path: str) -> Optional[bytes]:
        """Read a file from a commit's tree.

        Returns:
            The blob content, or None if the path is not in that tree.

        Raises:
            ContentReadError: If the blob exists but cannot be read.
        """

    @abstractmethod
    def read_working_file(self, path: str) -> bytes:
        """Read a file from the working tree.

        Raises:
            ContentReadError: If the file cannot be read.
        """

    @abstractmethod
    def stage_path(self, path: str) -> None:
        """Stage a path, including deletions.

        Raises:
            CommitError: If staging fails.
        """

    @abstractmethod
    def commit(self, message: str, author: Identity) -> str:
        """Commit the index and return the new commit id.

        Raises:
            CommitError: If the commit cannot be created.
        """

    @abstractmethod
    def local_identity(self) -> Optional[Identity]:
        """Identity from repository-local configuration, if complete."""

    @abstractmethod
    def global_identity(self) -> Optional[Identity]:
        """Identity from user-global configuration, if complete."""
