# src/pipeline/context.py - v1
"""Per-invocation pass context.

Holds the project root, the workflow branch (if any), the artifacts read
or written during this run, and the provider resolver used by AI-assisted
passes. A fresh context is built for every pass invocation.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from procflow.core.artifacts import ArtifactKind
from procflow.core.errors import NoProviderAvailableError
from procflow.core.layout import artifact_path
from procflow.llm.models import CompletionRequest, CompletionResponse
from procflow.logging.context import set_provider_context

if TYPE_CHECKING:
    from procflow.llm.client_factory import ProviderResolver

logger = logging.getLogger(__name__)


class PassContext:
    """Artifact cache and provider access for one pass run."""

    def __init__(
        self,
        project_root: Path,
        branch: str | None = None,
        providers: ProviderResolver | None = None,
    ) -> None:
        self.project_root = Path(project_root)
        self.branch = branch
        self.providers = providers
        self.artifacts: dict[ArtifactKind, str] = {}
        self.last_provider: str | None = None

    def load_artifact(self, kind: ArtifactKind) -> str:
        """Read an artifact file into the cache and return its content.

        Raises:
            FileNotFoundError: If the file does not exist.
        """
        path = artifact_path(self.project_root, kind.relative_path)
        content = path.read_text(encoding="utf-8")
        self.artifacts[kind] = content
        return content

    def save_artifact(self, kind: ArtifactKind, content: str) -> Path:
        """Write an artifact file (creating parent dirs) and cache it."""
        path = artifact_path(self.project_root, kind.relative_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        self.artifacts[kind] = content
        logger.debug("Saved artifact %s -> %s", kind, path)
        return path

    def get(self, kind: ArtifactKind) -> str | None:
        """Content already loaded or saved in this run, or None."""
        return self.artifacts.get(kind)

    async def complete(self, prompt: str, max_tokens: int | None = None) -> CompletionResponse:
        """Resolve a provider for this context's branch and run one completion."""
        if self.providers is None:
            raise NoProviderAvailableError("No provider resolver configured for this run")
        provider = await self.providers.resolve(self.branch)
        self.last_provider = provider.name
        set_provider_context(provider.name)
        return await provider.complete(CompletionRequest(prompt=prompt, max_tokens=max_tokens))
