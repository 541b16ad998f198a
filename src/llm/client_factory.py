# src/llm/client_factory.py - v3
"""Factory: build provider registries from configuration.

create_provider_registry() instantiates every known backend for one
effective configuration. ProviderResolver hands passes the provider they
should use, deriving a separate registry for any workflow branch that
carries its own config.yaml fragment.
"""

from __future__ import annotations

import importlib
import logging
from pathlib import Path

from procflow.config.project import ProcessConfig, load_branch_config, load_config
from procflow.config.settings import Settings
from procflow.llm.base_client import BaseProvider
from procflow.llm.registry import ProviderRegistry

logger = logging.getLogger(__name__)

# Registry of provider name -> adapter class path (lazy import), in registration order.
_PROVIDER_REGISTRY: dict[str, str] = {
    "claude-cli": "procflow.llm.adapters.claude_cli_adapter.ClaudeCLIAdapter",
    "claude": "procflow.llm.adapters.anthropic_adapter.AnthropicAdapter",
    "openai": "procflow.llm.adapters.openai_adapter.OpenAIAdapter",
    "ollama": "procflow.llm.adapters.ollama_adapter.OllamaAdapter",
    "manual": "procflow.llm.adapters.manual_adapter.ManualAdapter",
}


class UnsupportedProviderError(ValueError):
    """Raised when a provider name has no adapter class."""


def create_provider(
    name: str,
    config: ProcessConfig,
    settings: Settings,
) -> BaseProvider:
    """Instantiate one adapter by provider name.

    Raises:
        UnsupportedProviderError: If the name is not registered.
    """
    if name not in _PROVIDER_REGISTRY:
        raise UnsupportedProviderError(
            f"Unsupported provider: {name!r}. Available: {', '.join(sorted(_PROVIDER_REGISTRY))}"
        )
    adapter_cls = _import_class(_PROVIDER_REGISTRY[name])
    timeout = float(config.settings.timeout_secs)

    if name in ("claude", "openai"):
        return adapter_cls(settings=settings, config=config, timeout=timeout)
    if name == "ollama":
        return adapter_cls(
            settings=settings,
            config=config,
            timeout=timeout,
            probe_timeout=settings.probe_timeout_seconds,
        )
    if name == "claude-cli":
        return adapter_cls(binary=settings.claude_cli_binary)
    return adapter_cls()


def create_provider_registry(config: ProcessConfig, settings: Settings) -> ProviderRegistry:
    """Build a registry holding every known provider for this configuration."""
    registry = ProviderRegistry()
    for name in _PROVIDER_REGISTRY:
        registry.register(create_provider(name, config, settings))
    return registry


def register_provider(name: str, class_path: str) -> None:
    """Register a custom provider adapter by dotted class path."""
    _PROVIDER_REGISTRY[name] = class_path
    logger.info("Registered provider: %s -> %s", name, class_path)


def _import_class(class_path: str) -> type:
    """Dynamically import a class from its fully qualified path."""
    module_path, class_name = class_path.rsplit(".", 1)
    module = importlib.import_module(module_path)
    return getattr(module, class_name)


class ProviderResolver:
    """Resolve the provider a pass should use, with per-branch registries.

    Registries are cached by branch (None for the project-wide one) so
    probes run against a stable set of instances within one process.
    """

    def __init__(
        self,
        project_root: Path,
        settings: Settings,
        config: ProcessConfig | None = None,
    ) -> None:
        self._project_root = Path(project_root)
        self._settings = settings
        self._config = config if config is not None else load_config(project_root, settings)
        self._registries: dict[str | None, ProviderRegistry] = {}

    @property
    def config(self) -> ProcessConfig:
        return self._config

    def config_for(self, branch: str | None = None) -> ProcessConfig:
        """Effective configuration for a branch (or the project when None)."""
        if branch is None:
            return self._config
        return load_branch_config(self._project_root, branch, self._config)

    def registry_for(self, branch: str | None = None) -> ProviderRegistry:
        if branch not in self._registries:
            self._registries[branch] = create_provider_registry(self.config_for(branch), self._settings)
            logger.debug("Built provider registry for branch=%s", branch or "<project>")
        return self._registries[branch]

    async def resolve(self, branch: str | None = None) -> BaseProvider:
        """Resolve ai.provider from the (branch) configuration."""
        config = self.config_for(branch)
        provider = await self.registry_for(branch).resolve(config.ai.provider)
        logger.info(
            "Using provider %s for %s (configured: %s)",
            provider.name,
            f"branch '{branch}'" if branch else "project",
            config.ai.provider,
        )
        return provider
