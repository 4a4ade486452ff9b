# src/assistant_relay/relay/index.py
import logging
import os
from assistant_relay.models.response import FileChange, LineChangeSet
from .diff_lines import DiffLineAnalyzer


logger = logging.getLogger(__name__)


class FileHighlightIndex:
    """Maps file paths from the latest response to their changed line numbers.

    Paths are stored and looked up in normalized, workspace-relative form.
    Every rebuild replaces the whole mapping; nothing carries over between responses.
    """

    def __init__(self, analyzer: DiffLineAnalyzer | None = None, workspace_root: str | None = None):
        self.analyzer = analyzer or DiffLineAnalyzer()
        self.workspace_root = workspace_root
        self._entries: dict[str, LineChangeSet] = {}

    def _key(self, path: str) -> str:
        if self.workspace_root and os.path.isabs(path):
            path = os.path.relpath(path, os.path.abspath(self.workspace_root))
        return os.path.normpath(path)

    def rebuild(self, file_changes: list[FileChange]) -> None:
        entries = {}
        for change in file_changes:
            # A later change to the same path wins, as in a plain dict assignment.
            entries[self._key(change.file_path)] = self.analyzer.analyze(change)
        self._entries = entries
        logger.info(f"Highlight index rebuilt: {len(entries)} file(s)")

    def lookup(self, path: str) -> LineChangeSet | None:
        return self._entries.get(self._key(path))

    def clear(self) -> None:
        self._entries = {}

    def paths(self) -> list[str]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
