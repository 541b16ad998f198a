# tests/unit/pipeline/plugin_kit/test_ai_pass.py - v1
"""Tests for pipeline/plugin_kit/ai_pass.py - AIAssistedPass."""

from __future__ import annotations

import pytest

from procflow.core.artifacts import PROPOSALS, SEED, ArtifactKind
from procflow.core.errors import NoProviderAvailableError, PassExecutionError
from procflow.pipeline.context import PassContext
from procflow.pipeline.plugin_kit.ai_pass import AIAssistedPass
from procflow.pipeline.plugin_kit.models import PassKind


class EchoPass(AIAssistedPass):
    @property
    def name(self):
        return "echo.generate"

    @property
    def description(self):
        return "Echo the seed"

    @property
    def requires(self):
        return [SEED]

    @property
    def output_kind(self):
        return PROPOSALS

    @property
    def fallback_prompt(self):
        return "SEED:\n$seed\nkeep $unknown"


def _ctx(project, resolver=None) -> PassContext:
    ctx = PassContext(project, providers=resolver)
    ctx.load_artifact(SEED)
    return ctx


class TestMetadata:
    def test_kind_and_outputs(self):
        p = EchoPass()
        assert p.kind is PassKind.AI_ASSISTED
        assert p.produces == [PROPOSALS]
        assert p.prompt_file == "echo.generate.txt"
        assert p.info().kind is PassKind.AI_ASSISTED


class TestPrompt:
    def test_fallback_with_substitution(self, seeded_project):
        prompt = EchoPass().build_prompt(_ctx(seeded_project))
        assert prompt.startswith("SEED:\nidea: \"Track reading habits\"")
        assert prompt.endswith("keep $unknown")

    def test_project_prompt_file_wins(self, seeded_project):
        prompts = seeded_project / ".process" / "prompts"
        prompts.mkdir()
        (prompts / "echo.generate.txt").write_text("custom: $seed", encoding="utf-8")
        prompt = EchoPass().build_prompt(_ctx(seeded_project))
        assert prompt.startswith("custom: idea:")

    def test_missing_values_become_empty(self, project):
        ctx = PassContext(project)
        assert EchoPass().template_values(ctx) == {"seed": ""}

    def test_branch_placeholder_name(self):
        assert ArtifactKind.hypothesis("auth-v2").placeholder == "branch_auth_v2_hypothesis"


class TestRun:
    @pytest.mark.asyncio
    async def test_strips_fence_and_saves(self, seeded_project, fake_resolver, fake_provider):
        ctx = _ctx(seeded_project, fake_resolver)
        p = EchoPass()
        await p.run(ctx)

        assert ctx.get(PROPOSALS) == "result: generated\n"
        saved = seeded_project / ".process" / "proposals.yaml"
        assert saved.read_text(encoding="utf-8") == "result: generated\n"
        assert fake_provider.requests[0].max_tokens == p.max_tokens
        assert ctx.last_provider == "fake"

    @pytest.mark.asyncio
    async def test_invalid_yaml_rejected(self, seeded_project, make_provider, make_resolver):
        provider = make_provider("bad", reply="key: [unclosed")
        ctx = _ctx(seeded_project, make_resolver(provider))
        with pytest.raises(PassExecutionError, match="not valid YAML"):
            await EchoPass().run(ctx)
        assert not (seeded_project / ".process" / "proposals.yaml").exists()

    @pytest.mark.asyncio
    async def test_no_resolver(self, seeded_project):
        with pytest.raises(NoProviderAvailableError):
            await EchoPass().run(_ctx(seeded_project))
