# src/assistant_relay/relay/parser.py
import re
from typing import Callable
from assistant_relay.models.lines import MarkerLine, PlainLine
from assistant_relay.models.response import FileChange, ParsedResponse, UNKNOWN_PATH


# Substrings the CLI prints when it edits a file or invokes an edit tool.
MARKERS = ("⎿ Updated", "● Call(", "⏺ Call(")

PROMPT_ECHO_RE = re.compile(r"^> .*\n")
UPDATED_PATH_RE = re.compile(r"⎿ Updated (.*?) with")
CALL_PATH_RE = re.compile(r"Call\(Edit, file_path=([^,)]+)")
CHANGE_STATS_RE = re.compile(r"with (\d+) additions? and (\d+) removals?")


def _updated_path(line: str) -> str | None:
    match = UPDATED_PATH_RE.search(line)
    return match.group(1) if match else None


def _call_path(line: str) -> str | None:
    match = CALL_PATH_RE.search(line)
    if not match:
        return None
    return re.sub(r"['\"]", "", match.group(1).strip())


# Tried in order; the first non-empty result wins.
PATH_EXTRACTORS: tuple[Callable[[str], str | None], ...] = (_updated_path, _call_path)


def extract_file_path(line: str) -> str:
    for extractor in PATH_EXTRACTORS:
        path = extractor(line)
        if path:
            return path
    return UNKNOWN_PATH


def extract_change_stats(line: str) -> tuple[int, int]:
    """Return (additions, deletions) from "with N additions and M removals", else (0, 0)."""
    match = CHANGE_STATS_RE.search(line)
    if not match:
        return 0, 0
    return int(match.group(1)), int(match.group(2))


def is_marker(line: str) -> bool:
    return any(marker in line for marker in MARKERS)


def classify_line(line: str) -> MarkerLine | PlainLine:
    if not is_marker(line):
        return PlainLine(text=line)
    additions, deletions = extract_change_stats(line)
    return MarkerLine(
        file_path=extract_file_path(line),
        additions=additions,
        deletions=deletions,
    )


def strip_prompt_echo(text: str) -> str:
    """Drop the echoed "> query" line, only when it is the very first line."""
    return PROMPT_ECHO_RE.sub("", text, count=1)


def parse_lines(text: str) -> ParsedResponse:
    """Split CLI output into the answer text and the file changes that follow it.

    Everything before the first marker is the answer. Every line after a marker
    belongs to that marker's change until the next marker or the end of input,
    including plain prose between two diff blocks.
    """
    answer_lines: list[str] = []
    file_changes: list[FileChange] = []
    current: MarkerLine | None = None
    current_lines: list[str] = []
    changes_started = False

    for line in text.splitlines():
        classified = classify_line(line)

        if isinstance(classified, MarkerLine):
            if current is not None:
                file_changes.append(_to_file_change(current, current_lines))
            current = classified
            current_lines = []
            changes_started = True
            continue

        if current is not None:
            current_lines.append(line)
        elif not changes_started:
            answer_lines.append(line)

    if current is not None:
        file_changes.append(_to_file_change(current, current_lines))

    return ParsedResponse(
        answer_text="\n".join(answer_lines).strip(),
        file_changes=file_changes,
    )


def _to_file_change(marker: MarkerLine, diff_lines: list[str]) -> FileChange:
    return FileChange(
        file_path=marker.file_path,
        additions=marker.additions,
        deletions=marker.deletions,
        diff_lines=diff_lines,
    )


def parse_response(text: str) -> ParsedResponse | None:
    """Parse one CLI turn. Returns None when nothing is left after cleaning."""
    cleaned = strip_prompt_echo(text)
    if not cleaned.strip():
        return None
    return parse_lines(cleaned)


class ResponseParser:
    def parse(self, text: str) -> ParsedResponse | None:
        return parse_response(text)
