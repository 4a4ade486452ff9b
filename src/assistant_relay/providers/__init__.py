# src/assistant_relay/providers/__init__.py
from .base import AssistantCLI, CLIError
from .process import SubprocessCLI

__all__ = ["AssistantCLI", "CLIError", "SubprocessCLI"]
