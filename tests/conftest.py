# tests/conftest.py - v2
"""Shared test fixtures for all unit tests.

Provides an initialized project directory, environment-free Settings,
and fake providers. No network and no subprocesses: every backend is a
fake or has its SDK client injected.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from procflow.config.settings import Settings
from procflow.core.errors import BackendError
from procflow.core.state import init_project
from procflow.llm.base_client import BaseProvider
from procflow.llm.models import CompletionRequest, CompletionResponse, TokenUsage
from procflow.logging.context import clear_context
from procflow.pipeline.plugin_kit.base_pass import BasePass

_ENV_VARS = (
    "PROCFLOW_AI_PROVIDER",
    "ANTHROPIC_API_KEY",
    "ANTHROPIC_MODEL",
    "ANTHROPIC_BASE_URL",
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "OPENAI_BASE_URL",
    "OLLAMA_MODEL",
    "OLLAMA_BASE_URL",
    "CLAUDE_CLI_BINARY",
    "PROBE_TIMEOUT_SECONDS",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_FILE",
)

VALID_SEED = """\
idea: "Track reading habits"
target_user: "Commuters reading on phones"
constraints:
  - "Offline first"
non_goals:
  - "Social features"
success_criteria:
  - "Log a session in under 5 seconds"
reversibility_budget: "high"
"""


# === FAKES ===


class FakeProvider(BaseProvider):
    """In-memory provider with configurable priority, availability and reply."""

    def __init__(
        self,
        name: str,
        priority: int = 50,
        available: bool = True,
        reply: str = "ok: true",
        probe_error: Exception | None = None,
    ) -> None:
        self._name = name
        self._priority = priority
        self.available = available
        self.reply = reply
        self.probe_error = probe_error
        self.requests: list[CompletionRequest] = []
        self.probe_calls = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def priority(self) -> int:
        return self._priority

    async def is_available(self) -> bool:
        self.probe_calls += 1
        if self.probe_error is not None:
            raise self.probe_error
        return self.available

    async def complete(self, request: CompletionRequest) -> CompletionResponse:
        self.requests.append(request)
        if not self.available:
            raise BackendError(self.name, "unavailable")
        return CompletionResponse(
            content=self.reply,
            usage=TokenUsage.from_counts(10, 5),
            provider=self.name,
        )


class FakeResolver:
    """Stands in for ProviderResolver; always returns the same provider."""

    def __init__(self, provider: BaseProvider) -> None:
        self.provider = provider
        self.branches: list[str | None] = []

    async def resolve(self, branch: str | None = None) -> BaseProvider:
        self.branches.append(branch)
        return self.provider


# === FIXTURES ===


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory) -> None:
    """Keep the developer's environment and global config out of every test."""
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path_factory.mktemp("home")))


@pytest.fixture(autouse=True)
def _clean_log_context():
    clear_context()
    yield
    clear_context()


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Initialized project root with the default seed template."""
    init_project(tmp_path)
    return tmp_path


@pytest.fixture
def valid_seed() -> str:
    """Content of a complete seed.yaml."""
    return VALID_SEED


@pytest.fixture
def seeded_project(project: Path) -> Path:
    """Initialized project whose seed.yaml is complete."""
    (project / ".process" / "seed.yaml").write_text(VALID_SEED, encoding="utf-8")
    return project


@pytest.fixture
def fake_provider() -> FakeProvider:
    return FakeProvider("fake", priority=50, reply="```yaml\nresult: generated\n```")


@pytest.fixture
def fake_resolver(fake_provider: FakeProvider) -> FakeResolver:
    return FakeResolver(fake_provider)


@pytest.fixture
def make_provider():
    """Factory for FakeProvider instances."""
    return FakeProvider


@pytest.fixture
def make_resolver():
    return FakeResolver


class StubPass(BasePass):
    """Pass whose body writes fixed content for each produced kind."""

    def __init__(self, name, requires=(), produces=(), body=None, branch=None):
        self._name = name
        self._requires = list(requires)
        self._produces = list(produces)
        self._body = body
        self._branch = branch
        self.runs = 0
        self.seen: dict = {}

    @property
    def name(self):
        return self._name

    @property
    def description(self):
        return f"stub {self._name}"

    @property
    def requires(self):
        return self._requires

    @property
    def produces(self):
        return self._produces

    @property
    def branch(self):
        return self._branch

    async def run(self, ctx):
        self.runs += 1
        self.seen = {kind: ctx.get(kind) for kind in self._requires}
        if self._body is not None:
            await self._body(ctx)
            return
        for kind in self._produces:
            ctx.save_artifact(kind, f"by: {self._name}\n")


@pytest.fixture
def make_pass():
    """Factory for StubPass instances."""
    return StubPass
