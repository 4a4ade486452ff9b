# src/assistant_relay/models/config.py
from pydantic import BaseModel, Field


DEFAULT_FALLBACK_ANSWER = (
    "I received your message, but I'm still processing "
    "or there was an issue with the response format."
)


class WorkspaceConfig(BaseModel):
    """Per-workspace overrides read from .assistant-relay.yaml."""
    fallback_answer: str = DEFAULT_FALLBACK_ANSWER
    cli_args: list[str] = Field(default_factory=lambda: ["-p"])
    exclude: list[str] = Field(
        default_factory=lambda: [
            "node_modules",
            ".git",
            "dist",
            "out",
            ".next",
            ".cache",
            "build",
        ]
    )
