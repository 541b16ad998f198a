# src/llm/base_client.py - v2
"""Abstract completion provider interface.

A provider has a stable name, a priority in [0, 255] used by automatic
selection (higher wins), an availability probe, and a completion call.
Probes must not raise for ordinary "not available" conditions; the
registry still treats a raising probe as unavailable.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from procflow.llm.models import CompletionRequest, CompletionResponse

MAX_PRIORITY = 255


class BaseProvider(ABC):
    """Unified interface for all completion backends."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Registry key (e.g. 'claude', 'ollama')."""

    @property
    @abstractmethod
    def priority(self) -> int:
        """Auto-selection priority, 0-255."""

    @abstractmethod
    async def is_available(self) -> bool:
        """Whether this backend can currently serve requests."""

    @abstractmethod
    async def complete(self, request: CompletionRequest) -> CompletionResponse:
        """Turn a prompt into generated text."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, priority={self.priority})"
