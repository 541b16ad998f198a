# src/logging/context.py - v2
"""Contextual logging support: attach project, pass and provider to log records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

# Context variables for structured logging, set per command and per pass.
_project: contextvars.ContextVar[str | None] = contextvars.ContextVar("project", default=None)
_pass_name: contextvars.ContextVar[str | None] = contextvars.ContextVar("pass_name", default=None)
_branch: contextvars.ContextVar[str | None] = contextvars.ContextVar("branch", default=None)
_provider: contextvars.ContextVar[str | None] = contextvars.ContextVar("provider", default=None)


@dataclass
class LogContext:
    """Snapshot of current logging context."""

    project: str | None = None
    pass_name: str | None = None
    branch: str | None = None
    provider: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    return LogContext(
        project=_project.get(),
        pass_name=_pass_name.get(),
        branch=_branch.get(),
        provider=_provider.get(),
    )


def set_run_context(project: str) -> None:
    """Set project-level context (called once per command)."""
    _project.set(project)


def set_pass_context(pass_name: str | None, branch: str | None = None) -> None:
    """Set pass-level context. Clears any provider chosen by the previous pass."""
    _pass_name.set(pass_name)
    _branch.set(branch)
    _provider.set(None)


def set_provider_context(provider: str | None) -> None:
    _provider.set(provider)


def clear_context() -> None:
    """Reset all context variables."""
    _project.set(None)
    _pass_name.set(None)
    _branch.set(None)
    _provider.set(None)
