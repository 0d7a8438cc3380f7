"""Unified diff synthesis for working tree changes.

Contains:
- blob_hash: Git object id of a blob
- synthesize_file_diff: Render one change record as a unified diff block
- build_diff_document: Concatenate the blocks for many records
- collect_diff: Scan a repository and build its diff document
"""

import hashlib
import logging

from gitai.git.base import VersionControl
from gitai.git.exceptions import ContentReadError
from gitai.git.linediff import diff_lines, split_lines
from gitai.git.status import ChangeKind, ChangeRecord, StatusScanner

logger = logging.getLogger(__name__)

NULL_HASH = "0000000"
FILE_MODE = "100644"


def blob_hash(content: bytes) -> str:
    """Compute the git blob object id for content.

    Args:
        content: Raw file bytes.

    Returns:
        The 40-character hex SHA-1 git would assign to the blob.
    """
    header = f"blob {len(content)}\0".encode("ascii")
    return hashlib.sha1(header + content).hexdigest()


def _decode(content: bytes) -> str:
    return content.decode("utf-8", errors="replace")


def _require(record: ChangeRecord, content):
    if content is None:
        raise ContentReadError(record.path, f"no content available for {record.kind.value} file")
    return content


def _render_new_file(record: ChangeRecord) -> str:
    content = _require(record, record.new_content)
    lines = split_lines(_decode(content))
    path = record.path
    header = (
        f"diff --git a/{path} b/{path}\n"
        f"new file mode {FILE_MODE}\n"
        f"index {NULL_HASH}..{blob_hash(content)}\n"
        f"--- /dev/null\n"
        f"+++ b/{path}\n"
        f"@@ -0,0 +1,{len(lines)} @@\n"
    )
    return header + "".join(f"+{line}\n" for line in lines)


def _render_deleted_file(record: ChangeRecord) -> str:
    content = _require(record, record.old_content)
    lines = split_lines(_decode(content))
    path = record.path
    header = (
        f"diff --git a/{path} b/{path}\n"
        f"deleted file mode {FILE_MODE}\n"
        f"index {blob_hash(content)}..{NULL_HASH}\n"
        f"--- a/{path}\n"
        f"+++ /dev/null\n"
        f"@@ -1,{len(lines)} +0,0 @@\n"
    )
    return header + "".join(f"-{line}\n" for line in lines)


def _render_modified_file(record: ChangeRecord) -> str:
    old = _require(record, record.old_content)
    new = _require(record, record.new_content)
    if old == new:
        return ""

    old_lines = split_lines(_decode(old))
    new_lines = split_lines(_decode(new))
    hunk = diff_lines(old_lines, new_lines)
    if not hunk:
        # Only line endings differ
        return ""

    path = record.path
    header = (
        f"diff --git a/{path} b/{path}\n"
        f"index {blob_hash(old)}..{blob_hash(new)} {FILE_MODE}\n"
        f"--- a/{path}\n"
        f"+++ b/{path}\n"
        f"@@ -1,{len(old_lines)} +1,{len(new_lines)} @@\n"
    )
    return header + "".join(line.render() for line in hunk)


def synthesize_file_diff(record: ChangeRecord) -> str:
    """Render one change record as a unified diff block.

    Args:
        record: The change to render.

    Returns:
        The diff block, or an empty string if the content did not change.

    Raises:
        ContentReadError: If content required for the record's kind is missing.
    """
    if record.kind in (ChangeKind.UNTRACKED, ChangeKind.ADDED):
        return _render_new_file(record)
    if record.kind is ChangeKind.DELETED:
        return _render_deleted_file(record)
    return _render_modified_file(record)


def build_diff_document(records: list[ChangeRecord]) -> str:
    """Concatenate the diff blocks of all records in order.

    Args:
        records: Change records in enumeration order.

    Returns:
        The full diff document; empty if nothing changed.
    """
    blocks = []
    for record in records:
        block = synthesize_file_diff(record)
        if block:
            blocks.append(block)
        else:
            logger.debug("No content change for %s", record.path)
    return "".join(blocks)


def collect_diff(vcs: VersionControl, reference: str = "HEAD") -> str:
    """Build the diff document for every change against a reference commit.

    Args:
        vcs: The version-control capability.
        reference: Revision to compare against.

    Returns:
        The complete diff document.

    Raises:
        VCSQueryError: If the reference or status cannot be resolved.
        ContentReadError: If a changed file cannot be read.
    """
    commit_id = vcs.resolve_reference(reference)
    records = StatusScanner(vcs, commit_id).scan()
    document = build_diff_document(records)
    logger.debug("Diff document covers %d record(s), %d chars", len(records), len(document))
    return document
