# src/pipeline/plugin_kit/base_pass.py - v1
"""Standard pass interface for pipeline plugins.

A pass declares the artifact kinds it requires and produces. The executor
loads the required ones into the PassContext before calling run(), and
records in the manifest every produced kind the pass saved.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from procflow.core.artifacts import ArtifactKind
from procflow.pipeline.plugin_kit.models import PassInfo, PassKind

if TYPE_CHECKING:
    from procflow.core.phase import Phase
    from procflow.pipeline.context import PassContext


class BasePass(ABC):
    """Standard interface for all passes."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique pass identifier (e.g. 'diverge.generate')."""

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of what this pass does."""

    @property
    def kind(self) -> PassKind:
        return PassKind.PURE

    @property
    def requires(self) -> list[ArtifactKind]:
        """Artifact kinds that must be readable before run()."""
        return []

    @property
    def produces(self) -> list[ArtifactKind]:
        """Artifact kinds this pass writes."""
        return []

    @property
    def branch(self) -> str | None:
        """Workflow branch this pass belongs to, if any."""
        return None

    @property
    def required_phase(self) -> Phase | None:
        """Phase the project must have reached before the command layer runs this pass."""
        return None

    @abstractmethod
    async def run(self, ctx: PassContext) -> None:
        """Execute the pass body. Failures propagate unchanged."""

    def info(self) -> PassInfo:
        return PassInfo(name=self.name, description=self.description, kind=self.kind)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
