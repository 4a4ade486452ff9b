# src/assistant_relay/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="RELAY_")

    # Assistant CLI
    cli_command: str = "claude"
    cli_timeout: float = 300.0

    # Workspace
    workspace_root: str = "."
    fallback_answer: str | None = None

    # Defaults
    log_dir: str | None = None
    log_level: str = "INFO"
