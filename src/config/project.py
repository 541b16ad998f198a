# src/config/project.py - v1
"""Project configuration: AI provider selection and per-provider settings.

Layers, lowest to highest:
  1. Built-in defaults
  2. Global file (~/.config/procflow/config.yaml)
  3. Project file (.process/config.yaml)
  4. PROCFLOW_AI_PROVIDER environment override

A workflow branch may add .process/branches/<branch>/config.yaml, which is
deep-merged on top to derive that branch's configuration.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from procflow.config.settings import ConfigurationError, Settings
from procflow.core.layout import GLOBAL_CONFIG_PATH, branch_config_path, config_path

logger = logging.getLogger(__name__)


class ProviderConfig(BaseModel):
    """Per-provider overrides. Unset fields fall through to env and defaults."""

    api_key: str | None = None
    model: str | None = None
    base_url: str | None = None
    max_tokens: int | None = None


class AIConfig(BaseModel):
    provider: str = "auto"
    claude: ProviderConfig | None = None
    openai: ProviderConfig | None = None
    ollama: ProviderConfig | None = None


class RuntimeConfig(BaseModel):
    auto_save: bool = True
    timeout_secs: int = 120


class ProcessConfig(BaseModel):
    """Effective project configuration."""

    ai: AIConfig = Field(default_factory=AIConfig)
    settings: RuntimeConfig = Field(default_factory=RuntimeConfig)

    def merged_with(self, fragment: dict[str, Any]) -> ProcessConfig:
        """Return a new config with fragment deep-merged over this one."""
        if not fragment:
            return self.model_copy(deep=True)
        merged = deep_merge(self.model_dump(exclude_none=True), fragment)
        return _validate(merged, source="merged fragment")

    def provider_config(self, provider: str) -> ProviderConfig | None:
        """Section for a provider name ('claude', 'openai', 'ollama')."""
        return getattr(self.ai, provider, None) if provider in {"claude", "openai", "ollama"} else None


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override into a copy of base. Override wins on leaves."""
    result = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def read_yaml_fragment(path: Path) -> dict[str, Any]:
    """Read a YAML mapping, or {} if the file is missing or empty."""
    path = Path(path).expanduser()
    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path} must contain a mapping at the top level")
    return data


def load_config(
    project_root: Path,
    settings: Settings | None = None,
    global_path: Path | None = GLOBAL_CONFIG_PATH,
) -> ProcessConfig:
    """Load the layered project configuration."""
    data: dict[str, Any] = {}
    if global_path is not None:
        data = deep_merge(data, read_yaml_fragment(global_path))
    data = deep_merge(data, read_yaml_fragment(config_path(project_root)))

    config = _validate(data, source=str(config_path(project_root)))

    if settings is not None and settings.procflow_ai_provider:
        config.ai.provider = settings.procflow_ai_provider
        logger.debug("Provider overridden from environment: %s", config.ai.provider)
    return config


def load_branch_config(project_root: Path, branch: str, base: ProcessConfig) -> ProcessConfig:
    """Derive a branch configuration from base and the branch fragment, if any."""
    fragment = read_yaml_fragment(branch_config_path(project_root, branch))
    if not fragment:
        return base
    logger.info("Applying branch-level configuration for '%s'", branch)
    return base.merged_with(fragment)


def _validate(data: dict[str, Any], source: str) -> ProcessConfig:
    try:
        return ProcessConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration in {source}: {exc}") from exc
