# src/pipeline/runner.py - v2
"""Pass executor: run passes in dependency order and keep the manifest current.

For each pass:
  1. look the pass up (PassNotFoundError if unknown)
  2. load the manifest
  3. load every required artifact (MissingArtifactError before the body runs)
  4. run the body; failures propagate unchanged
  5. record every produced kind the pass saved, with this pass as producer
  6. save the manifest

Passes run strictly one at a time. A failure stops run_all/run_phase at
that pass; earlier passes' outputs stay on disk.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from procflow.core.errors import MissingArtifactError, NoMatchingPassesError
from procflow.core.manifest import load_manifest, save_manifest
from procflow.logging.context import set_pass_context
from procflow.pipeline.context import PassContext
from procflow.pipeline.plugin_kit.models import PassOutcome

if TYPE_CHECKING:
    from procflow.llm.client_factory import ProviderResolver
    from procflow.pipeline.registry import PassRegistry

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Result of a multi-pass run."""

    outcomes: list[PassOutcome] = field(default_factory=list)
    duration_ms: int = 0

    @property
    def pass_names(self) -> list[str]:
        return [o.pass_name for o in self.outcomes]


class PassExecutor:
    """Execute registered passes against a project.

    Args:
        registry: Registry holding every pass that may run.
        providers: Provider resolver handed to AI-assisted passes.
    """

    def __init__(
        self,
        registry: PassRegistry,
        providers: ProviderResolver | None = None,
    ) -> None:
        self._registry = registry
        self._providers = providers

    async def run_pass(self, name: str, project_root: Path) -> PassOutcome:
        """Run one pass by name."""
        p = self._registry.get_or_raise(name)
        start_ns = time.monotonic_ns()
        set_pass_context(p.name, p.branch)
        try:
            manifest = load_manifest(project_root)
            ctx = PassContext(project_root, branch=p.branch, providers=self._providers)

            for kind in p.requires:
                try:
                    ctx.load_artifact(kind)
                except (OSError, UnicodeDecodeError) as exc:
                    raise MissingArtifactError(p.name, kind) from exc

            logger.info("Running pass %s", p.name)
            await p.run(ctx)

            produced: list[str] = []
            for kind in p.produces:
                content = ctx.get(kind)
                if content is None:
                    continue
                manifest.record_artifact(kind.display_name, p.name, kind.relative_path, content)
                produced.append(kind.display_name)

            save_manifest(project_root, manifest)
        finally:
            set_pass_context(None)

        outcome = PassOutcome(
            pass_name=p.name,
            produced=produced,
            provider=ctx.last_provider,
            duration_ms=(time.monotonic_ns() - start_ns) // 1_000_000,
        )
        logger.info(
            "Pass %s completed: produced %s in %dms",
            p.name,
            produced or "nothing",
            outcome.duration_ms,
        )
        return outcome

    async def run_all(self, project_root: Path) -> RunResult:
        """Run every registered pass in dependency order."""
        return await self._run_sequence(self._registry.resolve_order(), project_root)

    async def run_phase(self, prefix: str, project_root: Path) -> RunResult:
        """Run, in dependency order, the passes whose name starts with prefix.

        Raises:
            NoMatchingPassesError: If no pass name matches.
        """
        order = [name for name in self._registry.resolve_order() if name.startswith(prefix)]
        if not order:
            raise NoMatchingPassesError(prefix)
        return await self._run_sequence(order, project_root)

    async def _run_sequence(self, order: list[str], project_root: Path) -> RunResult:
        start_ns = time.monotonic_ns()
        result = RunResult()
        logger.info("Executing %d passes: %s", len(order), order)
        for name in order:
            result.outcomes.append(await self.run_pass(name, project_root))
        result.duration_ms = (time.monotonic_ns() - start_ns) // 1_000_000
        return result
