# src/assistant_relay/models/__init__.py
from .config import WorkspaceConfig
from .lines import MarkerLine, PlainLine, ClassifiedLine
from .response import FileChange, ParsedResponse, LineChangeSet, UNKNOWN_PATH

__all__ = [
    "WorkspaceConfig",
    "MarkerLine",
    "PlainLine",
    "ClassifiedLine",
    "FileChange",
    "ParsedResponse",
    "LineChangeSet",
    "UNKNOWN_PATH",
]
