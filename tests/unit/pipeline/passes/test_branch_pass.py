# tests/unit/pipeline/passes/test_branch_pass.py - v1
"""Tests for pipeline/passes/branch.py - per-branch review."""

from __future__ import annotations

import pytest

from procflow.core.artifacts import SKELETON, ArtifactKind
from procflow.core.manifest import load_manifest
from procflow.core.phase import Phase
from procflow.pipeline.passes.branch import BranchReviewPass
from procflow.pipeline.registry import PassRegistry
from procflow.pipeline.runner import PassExecutor


def _write(project, relative: str, text: str) -> None:
    path = project / ".process" / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


class TestBranchReviewPass:
    def test_requires_branch(self):
        with pytest.raises(ValueError):
            BranchReviewPass("")

    def test_declarations(self):
        p = BranchReviewPass("auth")
        assert p.name == "branch.auth.review"
        assert p.branch == "auth"
        assert p.requires == [SKELETON, ArtifactKind.hypothesis("auth")]
        assert p.produces == [ArtifactKind.review("auth")]
        assert p.required_phase is Phase.BRANCHING
        assert p.prompt_file == "branch.review.txt"

    @pytest.mark.asyncio
    async def test_runs_with_branch_provider(self, project, fake_resolver, fake_provider):
        _write(project, "skeleton.yaml", "modules: [api]\n")
        _write(project, "branches/auth/hypothesis.yaml", "claim: tokens expire\n")

        reg = PassRegistry()
        reg.register(BranchReviewPass("auth"))
        outcome = await PassExecutor(reg, providers=fake_resolver).run_pass("branch.auth.review", project)

        assert fake_resolver.branches == ["auth"]
        prompt = fake_provider.requests[0].prompt
        assert "work branch 'auth'" in prompt
        assert "modules: [api]" in prompt
        assert "claim: tokens expire" in prompt

        assert outcome.produced == ["branch.auth.review"]
        record = load_manifest(project).get("branch.auth.review")
        assert record.path == "branches/auth/review.yaml"
        assert record.produced_by == "branch.auth.review"

    @pytest.mark.asyncio
    async def test_shared_prompt_override(self, project, fake_resolver, fake_provider):
        _write(project, "skeleton.yaml", "modules: []\n")
        _write(project, "branches/perf/hypothesis.yaml", "claim: cache helps\n")
        _write(project, "prompts/branch.review.txt", "Review $branch: $hypothesis")

        reg = PassRegistry()
        reg.register(BranchReviewPass("perf"))
        await PassExecutor(reg, providers=fake_resolver).run_pass("branch.perf.review", project)

        assert fake_provider.requests[0].prompt == "Review perf: claim: cache helps\n"


def test_branch_name_with_path_rejected():
    with pytest.raises(ValueError):
        BranchReviewPass("../outside")
