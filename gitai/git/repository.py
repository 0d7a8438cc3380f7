"""Git CLI adapter for the VersionControl capability.

Contains:
- parse_porcelain_status: Parse `git status --porcelain=v1 -z` output
- GitRepository: VersionControl implementation that shells out to git
"""

import logging
import os
from pathlib import Path
from typing import Optional

from gitai.git.base import FileStatus, Identity, StatusCode, VersionControl
from gitai.git.exceptions import (
    CommitError,
    ContentReadError,
    GitError,
    VCSQueryError,
)
from gitai.git.runner import _run_git, _run_git_command, get_repo_root

logger = logging.getLogger(__name__)


def parse_porcelain_status(raw: bytes) -> list[FileStatus]:
    """Parse NUL-separated porcelain v1 status output.

    Each entry is ``XY <path>``; renames and copies are followed by an extra
    field holding the source path.

    Args:
        raw: stdout of ``git status --porcelain=v1 -z``.

    Returns:
        Status entries in the order git reported them.

    Raises:
        VCSQueryError: If an entry cannot be parsed.
    """
    fields = raw.split(b"\0")
    entries: list[FileStatus] = []
    i = 0
    while i < len(fields):
        field = fields[i]
        i += 1
        if not field:
            continue
        if len(field) < 4 or field[2:3] != b" ":
            raise VCSQueryError(f"Malformed status entry: {field!r}")

        codes = field[:2].decode("ascii", errors="replace")
        try:
            staging = StatusCode(codes[0])
            worktree = StatusCode(codes[1])
        except ValueError as e:
            raise VCSQueryError(f"Unknown status code {codes!r} in entry {field!r}") from e

        path = os.fsdecode(field[3:])
        orig_path = None
        if staging in (StatusCode.RENAMED, StatusCode.COPIED) or worktree in (
            StatusCode.RENAMED,
            StatusCode.COPIED,
        ):
            if i >= len(fields) or not fields[i]:
                raise VCSQueryError(f"Missing source path for entry {field!r}")
            orig_path = os.fsdecode(fields[i])
            i += 1

        entries.append(FileStatus(path, staging, worktree, orig_path))
    return entries


class GitRepository(VersionControl):
    """VersionControl backed by the git command line."""

    def __init__(self, root: Optional[Path] = None):
        """Open the repository containing root (or the working directory).

        Raises:
            GitError: If the directory is not inside a git repository.
        """
        self.root = get_repo_root(root)

    def status(self) -> list[FileStatus]:
        try:
            result = _run_git(
                ["status", "--porcelain=v1", "-z", "--untracked-files=all"],
                cwd=self.root,
            )
        except GitError as e:
            raise VCSQueryError(str(e)) from e
        entries = parse_porcelain_status(result.stdout)
        logger.debug("Status reported %d changed path(s)", len(entries))
        return entries

    def resolve_reference(self, name: str = "HEAD") -> str:
        try:
            return _run_git_command(
                ["rev-parse", "--verify", "--quiet", f"{name}^{{commit}}"],
                cwd=self.root,
            )
        except GitError as e:
            raise VCSQueryError(
                f"Cannot resolve {name}; the repository may have no commits yet."
            ) from e

    def read_blob_at(self, reference: str, path: str) -> Optional[bytes]:
        object_name = f"{reference}:{path}"
        probe = _run_git(["cat-file", "-e", object_name], cwd=self.root, check=False)
        if probe.returncode != 0:
            logger.debug("%s not present in %s", path, reference)
            return None
        try:
            return _run_git(["cat-file", "blob", object_name], cwd=self.root).stdout
        except GitError as e:
            raise ContentReadError(path, str(e)) from e

    def read_working_file(self, path: str) -> bytes:
        try:
            return (self.root / path).read_bytes()
        except OSError as e:
            raise ContentReadError(path, e.strerror or str(e)) from e

    def stage_path(self, path: str) -> None:
        try:
            _run_git(["add", "--all", "--", path], cwd=self.root)
        except GitError as e:
            raise CommitError(f"Error adding file {path} to staging area: {e}") from e

    def commit(self, message: str, author: Identity) -> str:
        try:
            _run_git(
                [
                    "-c", f"user.name={author.name}",
                    "-c", f"user.email={author.email}",
                    "commit", "--file", "-",
                ],
                cwd=self.root,
                input_bytes=message.encode("utf-8"),
            )
            return _run_git_command(["rev-parse", "HEAD"], cwd=self.root)
        except GitError as e:
            raise CommitError(f"git commit failed: {e}") from e

    def _config_value(self, scope: str, key: str) -> Optional[str]:
        result = _run_git(["config", f"--{scope}", "--get", key], cwd=self.root, check=False)
        if result.returncode != 0:
            return None
        value = result.stdout.decode("utf-8", errors="replace").strip()
        return value or None

    def _identity(self, scope: str) -> Optional[Identity]:
        name = self._config_value(scope, "user.name")
        email = self._config_value(scope, "user.email")
        if name and email:
            return Identity(name, email)
        return None

    def local_identity(self) -> Optional[Identity]:
        return self._identity("local")

    def global_identity(self) -> Optional[Identity]:
        return self._identity("global")
