# src/llm/models.py - v2
"""Completion request/response types shared by every provider."""

from __future__ import annotations

from pydantic import BaseModel, Field


class CompletionRequest(BaseModel):
    """Prompt plus optional per-call overrides."""

    prompt: str
    max_tokens: int | None = Field(default=None, gt=0)
    model: str | None = None


class TokenUsage(BaseModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    @classmethod
    def from_counts(cls, prompt_tokens: int, completion_tokens: int) -> TokenUsage:
        return cls(
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            total_tokens=prompt_tokens + completion_tokens,
        )


class CompletionResponse(BaseModel):
    """Normalized response from any provider. usage is None when not reported."""

    content: str
    usage: TokenUsage | None = None
    provider: str = ""
    model: str | None = None
