# src/assistant_relay/workspace/__init__.py
from .snapshot import WorkspaceSnapshot, WorkspaceChange, generate_diff

__all__ = ["WorkspaceSnapshot", "WorkspaceChange", "generate_diff"]
