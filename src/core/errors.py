# src/core/errors.py - v1
"""Error taxonomy shared by the workflow engine.

Every error raised by the engine derives from ProcflowError so the CLI can
report it and exit non-zero. No error here is retried automatically.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from procflow.core.artifacts import ArtifactKind
    from procflow.core.phase import Phase


class ProcflowError(Exception):
    """Base class for all workflow engine errors."""


# === PHASE STATE ===


class NotInitializedError(ProcflowError):
    """Raised when the project has no .process/ directory."""

    def __init__(self, project_root: object) -> None:
        super().__init__(
            f"Project at {project_root} is not initialized. Run 'procflow init' first."
        )
        self.project_root = project_root


class PhaseNotReadyError(ProcflowError):
    """Raised when the current phase is behind the phase an operation needs."""

    def __init__(self, current: Phase, required: Phase) -> None:
        super().__init__(
            f"Current phase is {current.label}, but {required.label} is required."
        )
        self.current = current
        self.required = required


# === PASSES ===


class PassNotFoundError(ProcflowError):
    """Raised when a pass name is not registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Pass '{name}' not found")
        self.name = name


class MissingArtifactError(ProcflowError):
    """Raised before a pass body runs when a required artifact cannot be read."""

    def __init__(self, pass_name: str, kind: ArtifactKind) -> None:
        super().__init__(
            f"Pass '{pass_name}' requires artifact '{kind}' which is not available. "
            "Run prerequisite passes first."
        )
        self.pass_name = pass_name
        self.kind = kind


class CircularDependencyError(ProcflowError):
    """Raised when pass requirements form a cycle."""

    def __init__(self, pass_name: str) -> None:
        super().__init__(f"Circular dependency detected at pass '{pass_name}'")
        self.pass_name = pass_name


class NoMatchingPassesError(ProcflowError):
    """Raised when a phase prefix selects no registered pass."""

    def __init__(self, prefix: str) -> None:
        super().__init__(f"No passes found matching phase '{prefix}'")
        self.prefix = prefix


class PassExecutionError(ProcflowError):
    """Raised by a pass body that rejects its input."""

    def __init__(self, pass_name: str, message: str) -> None:
        super().__init__(f"Pass '{pass_name}' failed: {message}")
        self.pass_name = pass_name


# === PROVIDERS ===


class ProviderNotFoundError(ProcflowError):
    """Raised when an explicitly named provider is not registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Provider '{name}' not found")
        self.name = name


class NoProviderAvailableError(ProcflowError):
    """Raised when auto-selection finds no available provider."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message
            or "No available AI providers found. "
            "Please configure API keys or check connections."
        )


class BackendError(ProcflowError):
    """Raised when a provider call fails (transport, status, or process exit)."""

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(f"{provider} error: {message}")
        self.provider = provider
        self.message = message


class ResponseFormatError(ProcflowError):
    """Raised when a provider answers but the payload has no usable text."""

    def __init__(self, provider: str, detail: str = "") -> None:
        text = f"Invalid response format from {provider}"
        if detail:
            text = f"{text}: {detail}"
        super().__init__(text)
        self.provider = provider
        self.detail = detail
