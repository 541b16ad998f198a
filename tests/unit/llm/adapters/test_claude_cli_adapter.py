# tests/unit/llm/adapters/test_claude_cli_adapter.py - v1
"""Tests for llm/adapters/claude_cli_adapter.py - subprocess provider."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from procflow.core.errors import BackendError, ResponseFormatError
from procflow.llm.adapters.claude_cli_adapter import ClaudeCLIAdapter
from procflow.llm.models import CompletionRequest

_EXEC = "procflow.llm.adapters.claude_cli_adapter.asyncio.create_subprocess_exec"
_WHICH = "procflow.llm.adapters.claude_cli_adapter.shutil.which"


def _process(stdout: bytes = b"", stderr: bytes = b"", returncode: int = 0):
    proc = MagicMock()
    proc.returncode = returncode
    proc.communicate = AsyncMock(return_value=(stdout, stderr))
    return proc


class TestIdentity:
    def test_name_and_priority(self):
        adapter = ClaudeCLIAdapter()
        assert adapter.name == "claude-cli"
        assert adapter.priority == 95

    def test_build_command(self):
        assert ClaudeCLIAdapter(binary="claude").build_command("do it") == [
            "claude", "--print", "--output-format", "text", "do it",
        ]


class TestAvailability:
    @pytest.mark.asyncio
    async def test_on_path(self):
        with patch(_WHICH, return_value="/usr/local/bin/claude"):
            assert await ClaudeCLIAdapter().is_available()

    @pytest.mark.asyncio
    async def test_not_on_path(self):
        with patch(_WHICH, return_value=None):
            assert not await ClaudeCLIAdapter().is_available()


class TestComplete:
    @pytest.mark.asyncio
    async def test_stdout_is_content(self):
        with patch(_EXEC, new=AsyncMock(return_value=_process(b"generated text\n"))) as exec_mock:
            resp = await ClaudeCLIAdapter(binary="claude").complete(CompletionRequest(prompt="p"))
        assert resp.content == "generated text"
        assert resp.usage is None
        assert exec_mock.call_args.args == ("claude", "--print", "--output-format", "text", "p")

    @pytest.mark.asyncio
    async def test_nonzero_exit(self):
        proc = _process(stderr=b"not logged in", returncode=1)
        with patch(_EXEC, new=AsyncMock(return_value=proc)):
            with pytest.raises(BackendError, match="not logged in"):
                await ClaudeCLIAdapter().complete(CompletionRequest(prompt="p"))

    @pytest.mark.asyncio
    async def test_empty_output(self):
        with patch(_EXEC, new=AsyncMock(return_value=_process(b"  \n"))):
            with pytest.raises(ResponseFormatError):
                await ClaudeCLIAdapter().complete(CompletionRequest(prompt="p"))

    @pytest.mark.asyncio
    async def test_missing_executable(self):
        with patch(_EXEC, new=AsyncMock(side_effect=FileNotFoundError())):
            with pytest.raises(BackendError, match="not found"):
                await ClaudeCLIAdapter(binary="nope").complete(CompletionRequest(prompt="p"))

    @pytest.mark.asyncio
    async def test_not_executable(self):
        error = PermissionError(13, "Permission denied")
        with patch(_EXEC, new=AsyncMock(side_effect=error)):
            with pytest.raises(BackendError, match="Permission denied") as exc_info:
                await ClaudeCLIAdapter(binary="./claude").complete(CompletionRequest(prompt="p"))
        assert exc_info.value.provider == "claude-cli"

    @pytest.mark.asyncio
    async def test_prompt_too_long_for_argv(self):
        error = OSError(7, "Argument list too long")
        with patch(_EXEC, new=AsyncMock(side_effect=error)):
            with pytest.raises(BackendError, match="Argument list too long"):
                await ClaudeCLIAdapter().complete(CompletionRequest(prompt="x" * 200_000))

    @pytest.mark.asyncio
    async def test_real_non_executable_file(self, tmp_path):
        binary = tmp_path / "claude"
        binary.write_text("#!/bin/sh\necho hi\n", encoding="utf-8")
        binary.chmod(0o644)
        with pytest.raises(BackendError, match="cannot run"):
            await ClaudeCLIAdapter(binary=str(binary)).complete(CompletionRequest(prompt="p"))
