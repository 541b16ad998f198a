# tests/unit/pipeline/plugin_kit/test_base_pass.py - v1
"""Tests for pipeline/plugin_kit/base_pass.py defaults."""

from __future__ import annotations

from procflow.core.artifacts import SEED
from procflow.pipeline.plugin_kit.models import PassInfo, PassKind


class TestBasePassDefaults:
    def test_defaults(self, make_pass):
        p = make_pass("plain")
        assert p.kind is PassKind.PURE
        assert p.required_phase is None
        assert p.branch is None

    def test_info(self, make_pass):
        p = make_pass("seed.stub", requires=[SEED])
        assert p.info() == PassInfo(name="seed.stub", description="stub seed.stub", kind=PassKind.PURE)

    def test_kind_values(self):
        assert [k.value for k in PassKind] == ["pure", "ai-assisted", "interactive"]
