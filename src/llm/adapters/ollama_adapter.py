# src/llm/adapters/ollama_adapter.py - v2
"""Ollama local inference provider.

Uses the ollama Python SDK. Availability is a bounded call to the tag
listing endpoint; any failure within the probe timeout means unavailable.
Ollama reports no token usage through this provider.
"""

from __future__ import annotations

import logging
from typing import Any

from procflow.config.project import ProcessConfig
from procflow.config.settings import Settings
from procflow.core.errors import BackendError, ResponseFormatError
from procflow.llm.base_client import BaseProvider
from procflow.llm.config import ProviderSettings, resolve_provider_settings
from procflow.llm.models import CompletionRequest, CompletionResponse

logger = logging.getLogger(__name__)


class OllamaAdapter(BaseProvider):
    """Provider 'ollama'."""

    PRIORITY = 30

    def __init__(
        self,
        model: str | None = None,
        base_url: str | None = None,
        settings: Settings | None = None,
        config: ProcessConfig | None = None,
        timeout: float = 120.0,
        probe_timeout: float = 2.0,
        client: Any = None,
        probe_client: Any = None,
    ) -> None:
        self._resolved: ProviderSettings = resolve_provider_settings(
            "ollama", settings, config, model=model, base_url=base_url
        )
        self._timeout = timeout
        self._probe_timeout = probe_timeout
        self._client = client
        self._probe_client = probe_client

    @property
    def name(self) -> str:
        return "ollama"

    @property
    def priority(self) -> int:
        return self.PRIORITY

    @property
    def resolved(self) -> ProviderSettings:
        return self._resolved

    def _get_client(self) -> Any:
        if self._client is None:
            import ollama

            self._client = ollama.AsyncClient(host=self._resolved.base_url.value, timeout=self._timeout)
        return self._client

    def _get_probe_client(self) -> Any:
        if self._probe_client is None:
            import ollama

            self._probe_client = ollama.AsyncClient(
                host=self._resolved.base_url.value, timeout=self._probe_timeout
            )
        return self._probe_client

    async def is_available(self) -> bool:
        try:
            await self._get_probe_client().list()
        except Exception as exc:
            logger.debug("Ollama not reachable at %s: %s", self._resolved.base_url.value, exc)
            return False
        return True

    async def complete(self, request: CompletionRequest) -> CompletionResponse:
        import httpx
        import ollama

        model = request.model or self._resolved.model.value
        options: dict[str, Any] = {}
        if request.max_tokens:
            options["num_predict"] = request.max_tokens

        try:
            resp = await self._get_client().generate(
                model=model, prompt=request.prompt, stream=False, options=options or None
            )
        except ollama.ResponseError as exc:
            raise BackendError(self.name, f"HTTP {exc.status_code}: {exc.error}") from exc
        except (ConnectionError, httpx.HTTPError) as exc:
            raise BackendError(self.name, f"{type(exc).__name__}: {exc}") from exc

        try:
            content = resp["response"]
        except (KeyError, TypeError) as exc:
            raise ResponseFormatError(self.name, "missing 'response' field") from exc
        if content is None:
            raise ResponseFormatError(self.name, "missing 'response' field")

        return CompletionResponse(content=content, usage=None, provider=self.name, model=model)
