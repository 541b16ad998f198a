# src/pipeline/passes/branch.py - v1
"""Per-branch review pass.

Each workflow branch gets its own instance, named branch.<b>.review. The
pass carries the branch, so a .process/branches/<b>/config.yaml fragment
selects the provider used for its review.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from procflow.core.artifacts import SKELETON, ArtifactKind
from procflow.core.phase import Phase
from procflow.pipeline.plugin_kit.ai_pass import AIAssistedPass

if TYPE_CHECKING:
    from procflow.pipeline.context import PassContext


class BranchReviewPass(AIAssistedPass):
    """Review a branch hypothesis against the project skeleton."""

    def __init__(self, branch: str) -> None:
        if not branch:
            raise ValueError("branch name is required")
        ArtifactKind.hypothesis(branch)
        self._branch = branch

    @property
    def name(self) -> str:
        return f"branch.{self._branch}.review"

    @property
    def description(self) -> str:
        return f"Review the hypothesis of branch '{self._branch}'"

    @property
    def branch(self) -> str:
        return self._branch

    @property
    def requires(self) -> list[ArtifactKind]:
        return [SKELETON, ArtifactKind.hypothesis(self._branch)]

    @property
    def output_kind(self) -> ArtifactKind:
        return ArtifactKind.review(self._branch)

    @property
    def required_phase(self) -> Phase:
        return Phase.BRANCHING

    @property
    def prompt_file(self) -> str:
        return "branch.review.txt"

    def template_values(self, ctx: PassContext) -> dict[str, str]:
        values = super().template_values(ctx)
        values["branch"] = self._branch
        values["hypothesis"] = ctx.get(ArtifactKind.hypothesis(self._branch)) or ""
        return values

    @property
    def fallback_prompt(self) -> str:
        return """\
You are reviewing work branch '$branch'. Check its hypothesis against the
project skeleton from architecture, security and performance angles.

--- SKELETON ---
$skeleton
--- END SKELETON ---

--- HYPOTHESIS ---
$hypothesis
--- END HYPOTHESIS ---

Output ONLY valid YAML, without code block markers or extra explanation.

findings:
  - role: "architecture | security | performance"
    severity: "low | medium | high"
    issue: "What is wrong"
    suggestion: "How to fix it"
overall_verdict: "pass | needs_changes | fail"
"""
