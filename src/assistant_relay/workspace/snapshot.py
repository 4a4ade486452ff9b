# src/assistant_relay/workspace/snapshot.py
"""
Workspace snapshots - detect files the assistant changed on disk
"""

import fnmatch
import logging
import os
from dataclasses import dataclass
from difflib import unified_diff
from pathlib import Path
from assistant_relay.models.response import FileChange


logger = logging.getLogger(__name__)


@dataclass
class WorkspaceChange:
    """A file whose content differs from the snapshot."""
    path: str
    file_name: str
    old_content: str
    new_content: str
    unified_diff: str

    def to_file_change(self, relative_to: str | None = None) -> FileChange:
        """Build a FileChange with counts taken from the generated diff."""
        diff_lines = self.unified_diff.splitlines()
        additions = sum(1 for line in diff_lines if line.startswith("+") and not line.startswith("+++"))
        deletions = sum(1 for line in diff_lines if line.startswith("-") and not line.startswith("---"))
        file_path = os.path.relpath(self.path, relative_to) if relative_to else self.path
        return FileChange(
            file_path=file_path,
            additions=additions,
            deletions=deletions,
            diff_lines=diff_lines,
        )


def is_excluded(name: str, patterns: list[str]) -> bool:
    """Check if a file or directory name matches any exclude pattern."""
    for pattern in patterns:
        if fnmatch.fnmatch(name, pattern):
            return True
    return False


def generate_diff(old_content: str, new_content: str, file_path: str) -> str:
    old_lines = old_content.splitlines(keepends=True)
    new_lines = new_content.splitlines(keepends=True)

    # unified_diff output is only well formed when every line ends with a newline
    if old_lines and not old_lines[-1].endswith("\n"):
        old_lines[-1] += "\n"
    if new_lines and not new_lines[-1].endswith("\n"):
        new_lines[-1] += "\n"

    return "".join(
        unified_diff(old_lines, new_lines, fromfile=f"a/{file_path}", tofile=f"b/{file_path}")
    )


class WorkspaceSnapshot:
    """In-memory copy of every readable text file under a workspace root."""

    def __init__(self, files: dict[str, str] | None = None):
        self.files: dict[str, str] = files or {}

    @classmethod
    def take(cls, root: str | Path, exclude: list[str]) -> "WorkspaceSnapshot":
        files = {}
        for path in iter_files(root, exclude):
            content = _read_text(path)
            if content is not None:
                files[str(path)] = content
        logger.info(f"Snapshot taken: {len(files)} file(s) under {root}")
        return cls(files)

    def compare(self) -> list[WorkspaceChange]:
        """List files whose current content differs from the snapshot.

        Files deleted since the snapshot are skipped; new files were never tracked.
        """
        changes = []
        for path, old_content in self.files.items():
            if not os.path.exists(path):
                continue
            new_content = _read_text(Path(path))
            if new_content is None or new_content == old_content:
                continue
            changes.append(WorkspaceChange(
                path=path,
                file_name=os.path.basename(path),
                old_content=old_content,
                new_content=new_content,
                unified_diff=generate_diff(old_content, new_content, path),
            ))
        return changes

    def __len__(self) -> int:
        return len(self.files)


def iter_files(root: str | Path, exclude: list[str]):
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if not is_excluded(d, exclude))
        for filename in sorted(filenames):
            if not is_excluded(filename, exclude):
                yield Path(dirpath) / filename


def _read_text(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not read {path}: {e}")
        return None
