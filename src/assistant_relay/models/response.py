# src/assistant_relay/models/response.py
from pydantic import BaseModel, ConfigDict, Field


UNKNOWN_PATH = "unknown"


class FileChange(BaseModel):
    """One file edit announced by the CLI, with the raw lines that followed it."""
    model_config = ConfigDict(frozen=True)

    file_path: str = UNKNOWN_PATH
    additions: int = Field(default=0, ge=0)
    deletions: int = Field(default=0, ge=0)
    diff_lines: list[str] = Field(default_factory=list)

    @property
    def diff_text(self) -> str:
        return "\n".join(self.diff_lines)


class ParsedResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    answer_text: str
    file_changes: list[FileChange] = Field(default_factory=list)

    @property
    def total_additions(self) -> int:
        return sum(change.additions for change in self.file_changes)

    @property
    def total_deletions(self) -> int:
        return sum(change.deletions for change in self.file_changes)


class LineChangeSet(BaseModel):
    """1-based line numbers: added ones in the new file, removed ones in the old file.

    Both lists are unordered and may hold duplicates when malformed input reports
    the same line twice.
    """
    added_lines: list[int] = Field(default_factory=list)
    removed_lines: list[int] = Field(default_factory=list)

    @property
    def first_added_line(self) -> int | None:
        return min(self.added_lines) if self.added_lines else None
