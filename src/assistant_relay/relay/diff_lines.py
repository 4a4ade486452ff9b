# src/assistant_relay/relay/diff_lines.py
import re
import logging
from unidiff import PatchSet
from assistant_relay.models.response import FileChange, LineChangeSet, UNKNOWN_PATH


logger = logging.getLogger(__name__)

HUNK_HEADER_RE = re.compile(r"^@@ -\d+(?:,\d+)? \+\d+(?:,\d+)? @@")


def _has_file_header(lines: list[str]) -> bool:
    for previous, line in zip(lines, lines[1:]):
        if previous.startswith("--- ") and line.startswith("+++ "):
            return True
    return False


def to_unified_diff(diff_lines: list[str], file_path: str = UNKNOWN_PATH) -> str:
    """Join diff lines, adding a file header in front of bare hunks so unidiff accepts them."""
    if _has_file_header(diff_lines):
        return "\n".join(diff_lines)

    for i, line in enumerate(diff_lines):
        if HUNK_HEADER_RE.match(line):
            header = [f"--- a/{file_path}", f"+++ b/{file_path}"]
            return "\n".join(diff_lines[:i] + header + diff_lines[i:])

    return "\n".join(diff_lines)


def parse_unified_line_numbers(diff_text: str) -> LineChangeSet:
    """Read added/removed line numbers from a well-formed unified diff.

    Raises ValueError when the text holds no hunk, and lets unidiff's
    UnidiffParseError through when a hunk does not match its header.
    """
    patch = PatchSet(diff_text)
    added_lines = []
    removed_lines = []
    hunks = 0

    for patched_file in patch:
        for hunk in patched_file:
            hunks += 1
            for line in hunk:
                if line.is_added and line.target_line_no is not None:
                    added_lines.append(line.target_line_no)
                elif line.is_removed and line.source_line_no is not None:
                    removed_lines.append(line.source_line_no)

    if hunks == 0:
        raise ValueError("No unified diff hunks found")

    return LineChangeSet(added_lines=added_lines, removed_lines=removed_lines)


def positional_line_numbers(diff_text: str) -> LineChangeSet:
    """Approximate line numbers from +/- prefixes alone.

    Removed lines are reported at the position after the last counted line and do
    not advance the counter, so consecutive removals share a number.
    """
    added_lines = []
    removed_lines = []
    current = 0

    for line in diff_text.split("\n"):
        # Hunk headers are metadata, not file lines; counting them shifts every number by one.
        if HUNK_HEADER_RE.match(line):
            continue
        if line.startswith("+"):
            current += 1
            added_lines.append(current)
        elif line.startswith("-"):
            removed_lines.append(current + 1)
        elif line.strip():
            current += 1

    return LineChangeSet(added_lines=added_lines, removed_lines=removed_lines)


def changed_line_numbers(diff_text: str, file_path: str = UNKNOWN_PATH) -> LineChangeSet:
    """Exact numbers from a unified diff, or the positional estimate when it won't parse.

    The fallback covers the whole blob, never individual hunks.
    """
    try:
        return parse_unified_line_numbers(to_unified_diff(diff_text.split("\n"), file_path))
    except Exception as e:
        logger.debug(f"Falling back to positional line numbers for {file_path}: {e}")
        return positional_line_numbers(diff_text)


class DiffLineAnalyzer:
    def analyze(self, file_change: FileChange) -> LineChangeSet:
        return changed_line_numbers(file_change.diff_text, file_change.file_path)
