"""Git command runner and repository utilities.

Contains:
- _run_git: Run a git command and return the completed process
- _run_git_command: Run a git command and return its text output
- get_repo_root: Get the root directory of the current git repository
"""

import logging
import subprocess
from pathlib import Path
from typing import Optional

from gitai.git.exceptions import GitError

logger = logging.getLogger(__name__)


def _run_git(
    args: list[str],
    cwd: Optional[Path] = None,
    input_bytes: Optional[bytes] = None,
    check: bool = True,
) -> subprocess.CompletedProcess:
    """Run a git command and return the raw completed process.

    Output is kept as bytes so callers can handle file contents and
    NUL-separated listings exactly.

    Args:
        args: List of arguments to pass to git.
        cwd: Directory to run in. Defaults to the process working directory.
        input_bytes: Optional data fed to the command's stdin.
        check: Raise GitError on a non-zero exit status.

    Returns:
        The completed process with bytes stdout/stderr.

    Raises:
        GitError: If git is missing, or the command fails and check is set.
    """
    logger.debug("Running: git %s", " ".join(args))
    try:
        result = subprocess.run(
            ["git"] + args,
            cwd=cwd,
            input=input_bytes,
            capture_output=True,
        )
    except FileNotFoundError as e:
        raise GitError("Git is not installed or not in PATH.") from e

    if check and result.returncode != 0:
        stderr = result.stderr.decode("utf-8", errors="replace").strip()
        raise GitError(f"Git command failed: git {' '.join(args)}\n{stderr}")
    return result


def _run_git_command(args: list[str], cwd: Optional[Path] = None) -> str:
    """Run a git command and return its output.

    Args:
        args: List of arguments to pass to git.
        cwd: Directory to run in. Defaults to the process working directory.

    Returns:
        The stdout of the git command, decoded and stripped.

    Raises:
        GitError: If the command fails.
    """
    result = _run_git(args, cwd=cwd)
    return result.stdout.decode("utf-8", errors="replace").strip()


def get_repo_root(start: Optional[Path] = None) -> Path:
    """Get the root directory of the git repository containing start.

    Returns:
        Path to the repository root.

    Raises:
        GitError: If not in a git repository.
    """
    try:
        root = _run_git_command(["rev-parse", "--show-toplevel"], cwd=start)
    except GitError as e:
        raise GitError(
            "Not in a git repository. Please run this command from within a git repo."
        ) from e
    return Path(root)
