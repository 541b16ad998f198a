# src/pipeline/plugin_kit/models.py - v2
"""Pass plugin models: PassKind, PassInfo, PassOutcome."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class PassKind(str, Enum):
    """How a pass does its work."""

    PURE = "pure"
    AI_ASSISTED = "ai-assisted"
    INTERACTIVE = "interactive"


class PassInfo(BaseModel):
    """Listing entry for a registered pass."""

    name: str
    description: str
    kind: PassKind


class PassOutcome(BaseModel):
    """Result of one pass execution, returned by the executor."""

    pass_name: str
    produced: list[str] = Field(default_factory=list)
    provider: str | None = None
    duration_ms: int = 0
