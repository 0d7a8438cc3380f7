"""Position-aligned line diff.

Lines are compared index by index rather than by longest common
subsequence, so an insertion near the top of a file shows every following
line as a removed/added pair.
"""

from dataclasses import dataclass
from enum import Enum


class LineMarker(Enum):
    """Prefix character used when rendering a diff line."""

    CONTEXT = " "
    ADDED = "+"
    REMOVED = "-"


@dataclass(frozen=True)
class DiffLine:
    """A single line of a hunk body."""

    marker: LineMarker
    text: str

    def render(self) -> str:
        return f"{self.marker.value}{self.text}\n"


def split_lines(text: str) -> list[str]:
    """Split text into lines, normalizing CRLF to LF.

    A trailing newline ends the last line instead of starting an empty one,
    so ``"a\\nb\\n"`` and ``"a\\nb"`` both have two lines and ``""`` has none.

    Args:
        text: The decoded file content.

    Returns:
        The lines without their terminators.
    """
    normalized = text.replace("\r\n", "\n")
    if not normalized:
        return []
    lines = normalized.split("\n")
    if normalized.endswith("\n"):
        lines.pop()
    return lines


def diff_lines(old_lines: list[str], new_lines: list[str]) -> list[DiffLine]:
    """Compare two line lists position by position.

    Args:
        old_lines: Lines before the change.
        new_lines: Lines after the change.

    Returns:
        The hunk body; empty when both lists are equal.
    """
    if old_lines == new_lines:
        return []

    hunk: list[DiffLine] = []
    for i in range(max(len(old_lines), len(new_lines))):
        if i >= len(old_lines):
            hunk.append(DiffLine(LineMarker.ADDED, new_lines[i]))
        elif i >= len(new_lines):
            hunk.append(DiffLine(LineMarker.REMOVED, old_lines[i]))
        elif old_lines[i] != new_lines[i]:
            hunk.append(DiffLine(LineMarker.REMOVED, old_lines[i]))
            hunk.append(DiffLine(LineMarker.ADDED, new_lines[i]))
        else:
            hunk.append(DiffLine(LineMarker.CONTEXT, old_lines[i]))
    return hunk
