"""Git-related exception classes.

Contains all exception classes for version-control operations:
- GitError: Base exception for git-related errors
- VCSQueryError: Status, HEAD or object lookups failed
- ContentReadError: A file could not be read from disk or the reference tree
- CommitError: Staging or commit creation failed
"""

from typing import Optional


class GitError(Exception):
    """Custom exception for git-related errors."""

    pass


class VCSQueryError(GitError):
    """Raised when querying repository state fails."""

    pass


class ContentReadError(GitError):
    """Raised when a changed file's content cannot be read."""

    def __init__(self, path: str, cause: Optional[str] = None):
        self.path = path
        self.cause = cause
        message = f"Failed to read {path}"
        if cause:
            message += f": {cause}"
        super().__init__(message)


class CommitError(GitError):
    """Raised when staging or committing fails."""

    pass
