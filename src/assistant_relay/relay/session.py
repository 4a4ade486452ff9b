# src/assistant_relay/relay/session.py
import yaml
import logging
from datetime import datetime
from pathlib import Path
from assistant_relay.models.config import WorkspaceConfig
from assistant_relay.models.response import FileChange, LineChangeSet, ParsedResponse
from assistant_relay.providers.base import AssistantCLI
from assistant_relay.workspace.snapshot import WorkspaceChange, WorkspaceSnapshot, iter_files
from .index import FileHighlightIndex
from .parser import ResponseParser


logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".assistant-relay.yaml"


class SessionBusyError(Exception):
    """A prompt was sent while the CLI is still answering the previous one."""


def load_workspace_config(root: str | Path) -> WorkspaceConfig:
    """Load .assistant-relay.yaml from the workspace root or use defaults."""
    config_path = Path(root) / CONFIG_FILENAME
    if not config_path.is_file():
        return WorkspaceConfig()

    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
        return WorkspaceConfig(**data)
    except Exception as e:
        logger.warning(f"Invalid {CONFIG_FILENAME}: {e}")
        return WorkspaceConfig()


def with_context_files(prompt: str, files: list[str] | None) -> str:
    if not files:
        return prompt
    return f"use the following files as context: {', '.join(files)} {prompt}"


class RelaySession:
    """State for one editor session: highlight index, running flag and file snapshot."""

    def __init__(
        self,
        cli: AssistantCLI | None = None,
        workspace_root: str = ".",
        config: WorkspaceConfig | None = None,
        log_dir: str | None = None,
    ):
        self.cli = cli
        self.config = config or WorkspaceConfig()
        self.parser = ResponseParser()
        self.index = FileHighlightIndex(workspace_root=workspace_root)
        self.snapshot: WorkspaceSnapshot | None = None
        self.log_dir = Path(log_dir) if log_dir else None
        if self.log_dir:
            self.log_dir.mkdir(parents=True, exist_ok=True)
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    @property
    def workspace_root(self) -> str:
        return self.index.workspace_root

    @workspace_root.setter
    def workspace_root(self, root: str) -> None:
        self.index.workspace_root = root

    def process_response(self, raw: str) -> ParsedResponse | None:
        """Parse one CLI turn and reindex highlights.

        Returns None when the text is empty after cleaning; the index is left untouched.
        """
        self._save_response_log(raw)

        response = self.parser.parse(raw)
        if response is None:
            logger.info("Empty response after cleaning, skipping processing")
            return None

        self.index.rebuild(response.file_changes)

        if not response.answer_text:
            response = response.model_copy(update={"answer_text": self.config.fallback_answer})

        logger.info(
            f"Parsed response: {len(response.file_changes)} file change(s), "
            f"+{response.total_additions}/-{response.total_deletions}"
        )
        return response

    def highlights_for(self, path: str) -> LineChangeSet | None:
        return self.index.lookup(path)

    async def ask(self, prompt: str, files: list[str] | None = None) -> ParsedResponse | None:
        """Send a prompt to the CLI and process its output.

        Selected workspace files are named in front of the prompt as context.
        """
        if self.cli is None:
            raise RuntimeError("No assistant CLI configured")
        if self._running:
            raise SessionBusyError("The assistant is still working on the previous prompt")

        prompt = with_context_files(prompt, files)
        self._running = True
        try:
            preview = prompt[:50] + ("..." if len(prompt) > 50 else "")
            logger.info(f"Prompt sent to assistant: {preview}")
            output = await self.cli.run(prompt)
        finally:
            self._running = False

        return self.process_response(output)

    def take_snapshot(self) -> int:
        self.snapshot = WorkspaceSnapshot.take(self.workspace_root, self.config.exclude)
        return len(self.snapshot)

    def list_files(self) -> list[str]:
        """Workspace files a user can attach as context, sorted, honoring the exclude globs."""
        return sorted(str(path) for path in iter_files(self.workspace_root, self.config.exclude))

    def detect_changes(self) -> list[tuple[WorkspaceChange, FileChange]]:
        """Compare the workspace with the last snapshot; changed files replace the highlight index."""
        if self.snapshot is None:
            return []

        changes = [
            (change, change.to_file_change(self.workspace_root))
            for change in self.snapshot.compare()
        ]
        if changes:
            self.index.rebuild([file_change for _, file_change in changes])
        return changes

    def close(self) -> None:
        self.index.clear()
        self.snapshot = None
        self._running = False
        logger.info("Relay session closed")

    def _save_response_log(self, raw: str) -> None:
        """Save the raw CLI output into a timestamped file."""
        if not self.log_dir or not raw:
            return
        try:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
            log_path = self.log_dir / f"{timestamp}_response.txt"
            log_path.write_text(raw, encoding="utf-8")
            logger.debug(f"Response log saved: {log_path}")
        except Exception as e:
            logger.warning(f"Failed to save response log: {e}")
