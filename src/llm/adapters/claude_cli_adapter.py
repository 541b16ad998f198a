# src/llm/adapters/claude_cli_adapter.py - v1
"""Local authenticated Claude command-line session as a provider.

Runs `claude --print --output-format text <prompt>` and takes stdout as the
completion. Available when the executable is found on PATH.
"""

from __future__ import annotations

import asyncio
import logging
import shutil

from procflow.core.errors import BackendError, ResponseFormatError
from procflow.llm.base_client import BaseProvider
from procflow.llm.models import CompletionRequest, CompletionResponse

logger = logging.getLogger(__name__)


class ClaudeCLIAdapter(BaseProvider):
    """Provider 'claude-cli'. No token usage is reported."""

    PRIORITY = 95

    def __init__(self, binary: str = "claude") -> None:
        self.binary = binary

    @property
    def name(self) -> str:
        return "claude-cli"

    @property
    def priority(self) -> int:
        return self.PRIORITY

    def build_command(self, prompt: str) -> list[str]:
        return [self.binary, "--print", "--output-format", "text", prompt]

    async def is_available(self) -> bool:
        return shutil.which(self.binary) is not None

    async def complete(self, request: CompletionRequest) -> CompletionResponse:
        command = self.build_command(request.prompt)
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as exc:
            raise BackendError(self.name, f"executable not found: {self.binary}") from exc
        except OSError as exc:
            raise BackendError(self.name, f"cannot run {self.binary}: {exc}") from exc

        stdout, stderr = await process.communicate()
        if process.returncode != 0:
            detail = stderr.decode("utf-8", errors="replace").strip()
            raise BackendError(self.name, f"exit code {process.returncode}: {detail}")

        content = stdout.decode("utf-8", errors="replace").strip()
        if not content:
            raise ResponseFormatError(self.name, "empty output")

        logger.debug("claude CLI returned %d characters", len(content))
        return CompletionResponse(content=content, usage=None, provider=self.name)
