# src/config/passes.py - v1
"""Declarative pass registry configuration.

Lists the built-in passes loaded by PassRegistry.load_all(), in
registration order. Branch review passes take a branch name and are
registered at runtime instead.
"""

from __future__ import annotations

# Fully qualified class paths for dynamic import by pipeline/registry.py.
PASS_REGISTRY: list[str] = [
    "procflow.pipeline.passes.seed.SeedValidatePass",
    "procflow.pipeline.passes.generate.DivergePass",
    "procflow.pipeline.passes.generate.ConvergePass",
    "procflow.pipeline.passes.generate.SkeletonPass",
    "procflow.pipeline.passes.generate.PostmortemPass",
]
