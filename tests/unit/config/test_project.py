# tests/unit/config/test_project.py - v1
"""Tests for config/project.py - layered project configuration."""

from __future__ import annotations

import pytest

from procflow.config.project import (
    ProcessConfig,
    deep_merge,
    load_branch_config,
    load_config,
    read_yaml_fragment,
)
from procflow.config.settings import ConfigurationError, Settings


def _write(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


class TestDefaults:
    def test_defaults(self):
        config = ProcessConfig()
        assert config.ai.provider == "auto"
        assert config.ai.claude is None
        assert config.settings.auto_save is True
        assert config.settings.timeout_secs == 120


class TestDeepMerge:
    def test_nested(self):
        base = {"ai": {"provider": "auto", "claude": {"model": "a"}}, "settings": {"auto_save": True}}
        override = {"ai": {"claude": {"api_key": "k"}}}
        merged = deep_merge(base, override)
        assert merged == {
            "ai": {"provider": "auto", "claude": {"model": "a", "api_key": "k"}},
            "settings": {"auto_save": True},
        }

    def test_does_not_mutate_inputs(self):
        base = {"ai": {"provider": "auto"}}
        deep_merge(base, {"ai": {"provider": "openai"}})
        assert base == {"ai": {"provider": "auto"}}

    def test_leaf_replaces_mapping(self):
        assert deep_merge({"a": {"b": 1}}, {"a": 2}) == {"a": 2}


class TestReadYamlFragment:
    def test_missing(self, tmp_path):
        assert read_yaml_fragment(tmp_path / "nope.yaml") == {}

    def test_empty(self, tmp_path):
        assert read_yaml_fragment(_write(tmp_path / "c.yaml", "")) == {}

    def test_invalid_yaml(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            read_yaml_fragment(_write(tmp_path / "c.yaml", "ai: [unclosed"))

    def test_not_a_mapping(self, tmp_path):
        with pytest.raises(ConfigurationError, match="mapping"):
            read_yaml_fragment(_write(tmp_path / "c.yaml", "- a\n- b\n"))


class TestLoadConfig:
    def test_project_file(self, project):
        config = load_config(project, global_path=None)
        assert config.ai.provider == "auto"

    def test_layers(self, project, tmp_path_factory):
        global_file = _write(
            tmp_path_factory.mktemp("home") / "config.yaml",
            "ai:\n  provider: openai\n  openai:\n    model: gpt-4o-mini\nsettings:\n  timeout_secs: 30\n",
        )
        _write(project / ".process" / "config.yaml", "ai:\n  provider: claude\n")
        config = load_config(project, global_path=global_file)
        assert config.ai.provider == "claude"
        assert config.ai.openai.model == "gpt-4o-mini"
        assert config.settings.timeout_secs == 30

    def test_env_provider_override(self, project):
        settings = Settings(_env_file=None, procflow_ai_provider="ollama")
        config = load_config(project, settings, global_path=None)
        assert config.ai.provider == "ollama"

    def test_invalid_values(self, project):
        _write(project / ".process" / "config.yaml", "settings:\n  timeout_secs: soon\n")
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            load_config(project, global_path=None)


class TestBranchConfig:
    def test_no_fragment_returns_base(self, project):
        base = load_config(project, global_path=None)
        assert load_branch_config(project, "auth", base) is base

    def test_fragment_merged_over_base(self, project):
        _write(
            project / ".process" / "config.yaml",
            "ai:\n  provider: auto\n  claude:\n    model: claude-x\n    api_key: k1\n",
        )
        _write(
            project / ".process" / "branches" / "auth" / "config.yaml",
            "ai:\n  provider: claude\n  claude:\n    model: claude-y\n",
        )
        base = load_config(project, global_path=None)
        derived = load_branch_config(project, "auth", base)

        assert derived.ai.provider == "claude"
        assert derived.ai.claude.model == "claude-y"
        assert derived.ai.claude.api_key == "k1"
        # The project-wide configuration is untouched.
        assert base.ai.provider == "auto"
        assert base.ai.claude.model == "claude-x"

    def test_provider_config_lookup(self):
        config = ProcessConfig.model_validate({"ai": {"ollama": {"model": "m"}}})
        assert config.provider_config("ollama").model == "m"
        assert config.provider_config("claude") is None
        assert config.provider_config("manual") is None
