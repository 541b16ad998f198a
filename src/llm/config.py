# src/llm/config.py - v2
"""Per-provider setting resolution with a 4-level cascade.

Resolution order, highest first:
  1. Explicit override (constructor argument or request.model)
  2. Environment variable (ANTHROPIC_MODEL, OPENAI_BASE_URL, ...)
  3. Project configuration (ai.claude / ai.openai / ai.ollama in config.yaml)
  4. Built-in default
"""

from __future__ import annotations

from dataclasses import dataclass

from procflow.config.project import ProcessConfig, ProviderConfig
from procflow.config.settings import Settings

DEFAULT_MAX_TOKENS = 4096

# provider section -> field -> (env attribute on Settings, default)
_CASCADE: dict[str, dict[str, tuple[str | None, str | None]]] = {
    "claude": {
        "api_key": ("anthropic_api_key", None),
        "model": ("anthropic_model", "claude-sonnet-4-5-20250929"),
        "base_url": ("anthropic_base_url", "https://api.anthropic.com"),
    },
    "openai": {
        "api_key": ("openai_api_key", None),
        "model": ("openai_model", "gpt-4o"),
        "base_url": ("openai_base_url", "https://api.openai.com/v1"),
    },
    "ollama": {
        "api_key": (None, None),
        "model": ("ollama_model", "llama3.1"),
        "base_url": ("ollama_base_url", "http://localhost:11434"),
    },
}


@dataclass(frozen=True)
class ResolvedSetting:
    """One resolved value and where it came from."""

    value: str | None
    source: str  # "override", "env", "project", "default", or "unset"


@dataclass(frozen=True)
class ProviderSettings:
    """Fully resolved settings for one provider."""

    provider: str
    api_key: ResolvedSetting
    model: ResolvedSetting
    base_url: ResolvedSetting
    max_tokens: int = DEFAULT_MAX_TOKENS

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key.value)

    @property
    def uses_default_base_url(self) -> bool:
        return self.base_url.source == "default"


def resolve_setting(
    provider: str,
    field: str,
    settings: Settings | None = None,
    project: ProviderConfig | None = None,
    override: str | None = None,
) -> ResolvedSetting:
    """Resolve one field of a provider section through the cascade."""
    if provider not in _CASCADE:
        raise KeyError(f"Unknown provider section: {provider!r}")
    env_attr, default = _CASCADE[provider][field]

    # Level 1: explicit override
    if override:
        return ResolvedSetting(override, "override")

    # Level 2: environment
    if settings is not None and env_attr:
        env_value = getattr(settings, env_attr, "")
        if env_value:
            return ResolvedSetting(env_value, "env")

    # Level 3: project configuration
    if project is not None:
        project_value = getattr(project, field, None)
        if project_value:
            return ResolvedSetting(project_value, "project")

    # Level 4: built-in default
    if default is not None:
        return ResolvedSetting(default, "default")
    return ResolvedSetting(None, "unset")


def resolve_provider_settings(
    provider: str,
    settings: Settings | None = None,
    config: ProcessConfig | None = None,
    **overrides: str | None,
) -> ProviderSettings:
    """Resolve api_key, model and base_url for a provider section."""
    project = config.provider_config(provider) if config is not None else None
    max_tokens = project.max_tokens if project is not None and project.max_tokens else DEFAULT_MAX_TOKENS
    return ProviderSettings(
        provider=provider,
        api_key=resolve_setting(provider, "api_key", settings, project, overrides.get("api_key")),
        model=resolve_setting(provider, "model", settings, project, overrides.get("model")),
        base_url=resolve_setting(provider, "base_url", settings, project, overrides.get("base_url")),
        max_tokens=max_tokens,
    )
