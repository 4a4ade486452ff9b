# src/assistant_relay/providers/base.py
from abc import ABC, abstractmethod


class CLIError(Exception):
    """The assistant CLI could not be run or exited with an error."""

    def __init__(self, message: str, returncode: int | None = None, stderr: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class AssistantCLI(ABC):
    @abstractmethod
    async def run(self, prompt: str) -> str:
        """Send one prompt to the assistant CLI and return its raw text output."""
        pass
