"""Shared test fixtures and configuration."""

import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Optional

import pytest

from gitai.git.base import FileStatus, Identity, StatusCode, VersionControl
from gitai.git.exceptions import ContentReadError, VCSQueryError
from gitai.retry import Operator

HEAD_ID = "4b825dc642cb6eb9a060e54bf8d69288fbee4904"


def status(path: str, codes: str, orig_path: Optional[str] = None) -> FileStatus:
    """Build a FileStatus from a two-letter porcelain code."""
    return FileStatus(path, StatusCode(codes[0]), StatusCode(codes[1]), orig_path)


class FakeVCS(VersionControl):
    """In-memory VersionControl that records staging and commits."""

    def __init__(
        self,
        statuses: Optional[list[FileStatus]] = None,
        head: Optional[dict[str, bytes]] = None,
        worktree: Optional[dict[str, bytes]] = None,
        local: Optional[Identity] = Identity("Local Dev", "local@example.com"),
        global_: Optional[Identity] = None,
        has_head: bool = True,
    ):
        self.statuses = statuses or []
        self.head = head or {}
        self.worktree = worktree or {}
        self.local = local
        self.global_ = global_
        self.has_head = has_head
        self.status_calls = 0
        self.staged: list[str] = []
        self.commits: list[tuple[str, Identity]] = []

    def status(self) -> list[FileStatus]:
        self.status_calls += 1
        return list(self.statuses)

    def resolve_reference(self, name: str = "HEAD") -> str:
        if not self.has_head:
            raise VCSQueryError(f"Cannot resolve {name}")
        return HEAD_ID

    def read_blob_at(self, reference: str, path: str) -> Optional[bytes]:
        assert reference == HEAD_ID
        return self.head.get(path)

    def read_working_file(self, path: str) -> bytes:
        if path not in self.worktree:
            raise ContentReadError(path, "No such file or directory")
        return self.worktree[path]

    def stage_path(self, path: str) -> None:
        self.staged.append(path)

    def commit(self, message: str, author: Identity) -> str:
        self.commits.append((message, author))
        return "c0ffee" + "0" * 34

    def local_identity(self) -> Optional[Identity]:
        return self.local

    def global_identity(self) -> Optional[Identity]:
        return self.global_


class ScriptedOperator(Operator):
    """Operator that replays canned answers and records what it was shown."""

    def __init__(self, answers: list[str]):
        self.answers = list(answers)
        self.presented: list[tuple[str, int, int]] = []
        self.invalid: list[str] = []
        self.asked = 0

    def present(self, message: str, attempt: int, max_attempts: int) -> None:
        self.presented.append((message, attempt, max_attempts))

    def ask(self) -> str:
        self.asked += 1
        return self.answers.pop(0)

    def reject_invalid(self, response: str) -> None:
        self.invalid.append(response)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def fake_vcs():
    """An empty fake repository."""
    return FakeVCS()


@pytest.fixture
def git_repo(temp_dir):
    """A real git repository with one commit containing README.md."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    def git(*args):
        subprocess.run(["git", *args], cwd=temp_dir, check=True, capture_output=True)

    git("init", "-q")
    git("config", "user.name", "Test User")
    git("config", "user.email", "test@example.com")
    git("config", "commit.gpgsign", "false")
    (temp_dir / "README.md").write_text("# Project\n\nHello\n")
    git("add", "README.md")
    git("commit", "-q", "-m", "Initial commit")
    return temp_dir


@pytest.fixture
def sample_diff():
    """A small diff document as produced for a modified file."""
    return (
        "diff --git a/app.py b/app.py\n"
        "index 1234567..abcdefg 100644\n"
        "--- a/app.py\n"
        "+++ b/app.py\n"
        "@@ -1,2 +1,2 @@\n"
        " def main():\n"
        "-    print(\"old\")\n"
        "+    print(\"new\")\n"
    )
