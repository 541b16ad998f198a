# src/llm/adapters/manual_adapter.py - v1
"""Human-in-the-loop fallback provider.

Prints the prompt and reads the answer from the terminal, one line at a
time, until a line consisting of END (or end of input).
"""

from __future__ import annotations

import asyncio
import sys
from typing import TextIO

from procflow.core.errors import ResponseFormatError
from procflow.llm.base_client import BaseProvider
from procflow.llm.models import CompletionRequest, CompletionResponse

END_MARKER = "END"


class ManualAdapter(BaseProvider):
    """Provider 'manual'. Available only when stdin is a terminal."""

    PRIORITY = 1

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        self._stdin = stdin
        self._stdout = stdout

    @property
    def name(self) -> str:
        return "manual"

    @property
    def priority(self) -> int:
        return self.PRIORITY

    @property
    def stdin(self) -> TextIO:
        return self._stdin if self._stdin is not None else sys.stdin

    @property
    def stdout(self) -> TextIO:
        return self._stdout if self._stdout is not None else sys.stdout

    async def is_available(self) -> bool:
        return self.stdin.isatty()

    async def complete(self, request: CompletionRequest) -> CompletionResponse:
        content = await asyncio.to_thread(self._prompt_and_read, request.prompt)
        if not content:
            raise ResponseFormatError(self.name, "empty input")
        return CompletionResponse(content=content, usage=None, provider=self.name)

    def _prompt_and_read(self, prompt: str) -> str:
        out = self.stdout
        out.write("\n--- PROMPT ---\n")
        out.write(prompt)
        out.write(f"\n--- Paste the response, then a line containing only {END_MARKER} ---\n")
        out.flush()

        lines: list[str] = []
        for line in self.stdin:
            line = line.rstrip("\r\n")
            if line.strip() == END_MARKER:
                break
            lines.append(line)
        return "\n".join(lines).strip()
