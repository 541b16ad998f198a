# src/__init__.py - v1
"""procflow: phase-gated, artifact-producing workflow engine."""

from procflow.version import __version__

__all__ = ["__version__"]
