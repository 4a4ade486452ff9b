# src/assistant_relay/providers/process.py
import asyncio
import logging
from .base import AssistantCLI, CLIError


logger = logging.getLogger(__name__)


class SubprocessCLI(AssistantCLI):
    """Runs the assistant CLI once per prompt and returns whatever it printed."""

    def __init__(
        self,
        command: str = "claude",
        args: list[str] | None = None,
        cwd: str | None = None,
        timeout: float = 300.0,
    ):
        self.command = command
        self.args = list(args) if args is not None else ["-p"]
        self.cwd = cwd
        self.timeout = timeout

    async def run(self, prompt: str) -> str:
        try:
            process = await asyncio.create_subprocess_exec(
                self.command,
                *self.args,
                prompt,
                cwd=self.cwd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as e:
            raise CLIError(f"{self.command} not found; make sure it is installed and on PATH") from e

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise CLIError(f"{self.command} did not finish within {self.timeout}s") from e
        finally:
            # Timed out or cancelled: never leave the CLI running behind us.
            if process.returncode is None:
                process.kill()
                await process.wait()

        output = stdout.decode("utf-8", errors="replace")
        error_text = stderr.decode("utf-8", errors="replace")
        logger.info(f"{self.command} exited with {process.returncode}, {len(output)} chars of output")

        if process.returncode != 0:
            raise CLIError(
                f"{self.command} exited with code {process.returncode}",
                returncode=process.returncode,
                stderr=error_text,
            )
        return output
