# src/llm/adapters/openai_adapter.py - v2
"""OpenAI provider over the Chat Completions API.

Uses the official openai SDK.
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


class OpenAIAdapter(BaseProvider):
    """Provider 'openai'. Available whenever an API key resolves."""

    PRIORITY = 80

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
            "openai", settings, config, api_key=api_key, model=model, base_url=base_url
        )
        self._timeout = timeout
        self._client = client

    @property
    def name(self) -> str:
        return "openai"

    @property
    def priority(self) -> int:
        return self.PRIORITY

    @property
    def resolved(self) -> ProviderSettings:
        return self._resolved

    def _get_client(self) -> Any:
        if self._client is None:
            import openai

            self._client = openai.AsyncOpenAI(
                api_key=self._resolved.api_key.value,
                base_url=self._resolved.base_url.value,
                timeout=self._timeout,
            )
        return self._client

    async def is_available(self) -> bool:
        return self._resolved.has_api_key

    async def complete(self, request: CompletionRequest) -> CompletionResponse:
        import openai

        model = request.model or self._resolved.model.value
        max_tokens = request.max_tokens or self._resolved.max_tokens
        logger.debug("OpenAI request: model=%s, max_tokens=%d", model, max_tokens)

        try:
            resp = await self._get_client().chat.completions.create(
                model=model,
                messages=[{"role": "user", "content": request.prompt}],
                max_tokens=max_tokens,
            )
        except openai.APIStatusError as exc:
            raise BackendError(self.name, f"HTTP {exc.status_code}: {exc.body or exc.message}") from exc
        except openai.APIError as exc:
            raise BackendError(self.name, str(exc)) from exc

        choices = getattr(resp, "choices", None) or []
        content = choices[0].message.content if choices else None
        if content is None:
            raise ResponseFormatError(self.name, "no message content in response")

        usage = getattr(resp, "usage", None)
        return CompletionResponse(
            content=content,
            usage=(
                TokenUsage(
                    prompt_tokens=usage.prompt_tokens,
                    completion_tokens=usage.completion_tokens,
                    total_tokens=usage.total_tokens,
                )
                if usage
                else None
            ),
            provider=self.name,
            model=getattr(resp, "model", None) or model,
        )
