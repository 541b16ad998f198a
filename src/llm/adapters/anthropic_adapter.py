# src/llm/adapters/anthropic_adapter.py - v3
"""Anthropic Claude provider over the Messages API.

Uses the official anthropic SDK. A base URL other than the public
endpoint is treated as a proxy and authenticated with a bearer token
instead of the x-api-key header.
"""

from __future__ import annotations

import logging
from typing import Any

from procflow.config.project import ProcessConfig
from procflow.config.settings import Settings
from procflow.core.errors import BackendError, ResponseFormatError
from procflow.llm.base_client import BaseProvider
from procflow.llm.config import ProviderSettings, resolve_provider_settings
from procflow.llm.models import CompletionRequest, CompletionResponse, TokenUsage

logger = logging.getLogger(__name__)


class AnthropicAdapter(BaseProvider):
    """Provider 'claude'. Available whenever an API key resolves."""

    PRIORITY = 90

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        base_url: str | None = None,
        settings: Settings | None = None,
        config: ProcessConfig | None = None,
        timeout: float = 120.0,
        client: Any = None,
    ) -> None:
        self._resolved: ProviderSettings = resolve_provider_settings(
            "claude", settings, config, api_key=api_key, model=model, base_url=base_url
        )
        self._timeout = timeout
        self._client = client  # Lazy initialization

    @property
    def name(self) -> str:
        return "claude"

    @property
    def priority(self) -> int:
        return self.PRIORITY

    @property
    def resolved(self) -> ProviderSettings:
        return self._resolved

    def _get_client(self) -> Any:
        """Lazy-init the Anthropic client (only on first API call)."""
        if self._client is None:
            import anthropic

            if self._resolved.uses_default_base_url:
                self._client = anthropic.AsyncAnthropic(
                    api_key=self._resolved.api_key.value, timeout=self._timeout
                )
            else:
                self._client = anthropic.AsyncAnthropic(
                    auth_token=self._resolved.api_key.value,
                    base_url=self._resolved.base_url.value,
                    timeout=self._timeout,
                )
        return self._client

    async def is_available(self) -> bool:
        return self._resolved.has_api_key

    async def complete(self, request: CompletionRequest) -> CompletionResponse:
        """Single user-message completion via the Messages API."""
        import anthropic

        model = request.model or self._resolved.model.value
        max_tokens = request.max_tokens or self._resolved.max_tokens
        logger.debug("Anthropic request: model=%s, max_tokens=%d", model, max_tokens)

        try:
            response = await self._get_client().messages.create(
                model=model,
                max_tokens=max_tokens,
                messages=[{"role": "user", "content": request.prompt}],
            )
        except anthropic.APIStatusError as exc:
            raise BackendError(self.name, f"HTTP {exc.status_code}: {exc.body or exc.message}") from exc
        except anthropic.APIError as exc:
            raise BackendError(self.name, str(exc)) from exc

        content = self._extract_text(response)
        if content is None:
            raise ResponseFormatError(self.name, "no text block in response")

        usage = getattr(response, "usage", None)
        return CompletionResponse(
            content=content,
            usage=TokenUsage.from_counts(usage.input_tokens, usage.output_tokens) if usage else None,
            provider=self.name,
            model=getattr(response, "model", None) or model,
        )

    # --- Internal helpers ---

    @staticmethod
    def _extract_text(response: Any) -> str | None:
        for block in getattr(response, "content", None) or []:
            if getattr(block, "type", None) == "text":
                return block.text
        return None
