"""Git layer for gitai.

This package provides:
- exceptions: GitError, VCSQueryError, ContentReadError, CommitError
- base: VersionControl capability, FileStatus, StatusCode, Identity
- repository: GitRepository adapter, parse_porcelain_status
- status: StatusScanner, ChangeRecord, ChangeKind
- linediff: diff_lines, split_lines
- diff: synthesize_file_diff, build_diff_document, collect_diff
- commit: CommitCoordinator, resolve_identity
"""

from gitai.git.exceptions import (
    CommitError,
    ContentReadError,
    GitError,
    VCSQueryError,
)
from gitai.git.base import FileStatus, Identity, StatusCode, VersionControl
from gitai.git.runner import get_repo_root
from gitai.git.repository import GitRepository, parse_porcelain_status
from gitai.git.status import ChangeKind, ChangeRecord, StatusScanner
from gitai.git.linediff import DiffLine, LineMarker, diff_lines, split_lines
from gitai.git.diff import (
    blob_hash,
    build_diff_document,
    collect_diff,
    synthesize_file_diff,
)
from gitai.git.commit import CommitCoordinator, resolve_identity


__all__ = [
    # Exceptions
    "GitError",
    "VCSQueryError",
    "ContentReadError",
    "CommitError",
    # Capability
    "VersionControl",
    "FileStatus",
    "StatusCode",
    "Identity",
    # Adapter
    "get_repo_root",
    "GitRepository",
    "parse_porcelain_status",
    # Scanning
    "ChangeKind",
    "ChangeRecord",
    "StatusScanner",
    # Diffing
    "DiffLine",
    "LineMarker",
    "diff_lines",
    "split_lines",
    "blob_hash",
    "synthesize_file_diff",
    "build_diff_document",
    "collect_diff",
    # Committing
    "CommitCoordinator",
    "resolve_identity",
]
