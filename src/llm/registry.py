# src/llm/registry.py - v1
"""Provider registry: name-keyed backends with priority-ordered auto-selection.

Resolution:
  - explicit name: direct lookup, ProviderNotFoundError if absent
  - "auto": probe every provider one at a time, keep the available ones,
    pick the highest priority. Equal priorities keep registration order.
"""

from __future__ import annotations

import logging

from procflow.core.errors import NoProviderAvailableError, ProviderNotFoundError
from procflow.llm.base_client import BaseProvider

logger = logging.getLogger(__name__)

AUTO = "auto"


class ProviderRegistry:
    """Registry of completion providers for one configuration."""

    def __init__(self) -> None:
        self._providers: dict[str, BaseProvider] = {}

    @property
    def provider_names(self) -> list[str]:
        """Registered names in registration order."""
        return list(self._providers)

    def __contains__(self, name: object) -> bool:
        return name in self._providers

    def __len__(self) -> int:
        return len(self._providers)

    def register(self, provider: BaseProvider) -> None:
        """Register a provider. A second registration under the same name replaces the first."""
        if provider.name in self._providers:
            # Replacement keeps the original slot in the tie-break order.
            logger.warning("Overwriting existing provider: %s", provider.name)
        self._providers[provider.name] = provider
        logger.debug("Registered provider %s (priority %d)", provider.name, provider.priority)

    def get(self, name: str) -> BaseProvider | None:
        return self._providers.get(name)

    def get_or_raise(self, name: str) -> BaseProvider:
        provider = self._providers.get(name)
        if provider is None:
            raise ProviderNotFoundError(name)
        return provider

    async def available_providers(self) -> list[BaseProvider]:
        """Probe all providers sequentially; return the available ones, best first."""
        available: list[BaseProvider] = []
        for provider in self._providers.values():
            try:
                ok = await provider.is_available()
            except Exception as exc:
                logger.warning("Availability probe for %s failed: %s", provider.name, exc)
                continue
            logger.debug("Provider %s available=%s", provider.name, ok)
            if ok:
                available.append(provider)
        # sorted() is stable, so ties keep registration order.
        return sorted(available, key=lambda p: p.priority, reverse=True)

    async def resolve(self, name: str = AUTO) -> BaseProvider:
        """Return the named provider, or the best available one for "auto"."""
        if name != AUTO:
            return self.get_or_raise(name)

        available = await self.available_providers()
        if not available:
            raise NoProviderAvailableError()
        chosen = available[0]
        logger.info("Auto-selected provider %s (priority %d)", chosen.name, chosen.priority)
        return chosen
