# src/pipeline/registry.py - v2
"""Pass registry: dynamic loading and lookup of pipeline passes.

Built-in passes are loaded from the PASS_REGISTRY config list. Additional
passes (e.g. branch reviews) are registered at runtime.
"""

from __future__ import annotations

import importlib
import logging

from procflow.config.passes import PASS_REGISTRY
from procflow.core.errors import PassNotFoundError
from procflow.pipeline.dag_builder import build_dependency_map, resolve_order
from procflow.pipeline.plugin_kit.base_pass import BasePass
from procflow.pipeline.plugin_kit.models import PassInfo

logger = logging.getLogger(__name__)


class RegistryError(Exception):
    """Raised when a pass class cannot be loaded."""


class PassRegistry:
    """Registry of passes, kept in registration order."""

    def __init__(self) -> None:
        self._passes: dict[str, BasePass] = {}

    @property
    def passes(self) -> list[BasePass]:
        return list(self._passes.values())

    @property
    def pass_names(self) -> list[str]:
        """Registered names in registration order."""
        return list(self._passes)

    def __contains__(self, name: object) -> bool:
        return name in self._passes

    def __len__(self) -> int:
        return len(self._passes)

    def load_all(self, disabled: set[str] | None = None) -> None:
        """Load all passes listed in PASS_REGISTRY.

        Raises:
            RegistryError: If a listed class cannot be imported.
        """
        disabled = disabled or set()
        for class_path in PASS_REGISTRY:
            p = _import_pass(class_path)
            if p.name in disabled:
                logger.info("Skipping disabled pass: %s", p.name)
                continue
            self.register(p)
        logger.debug("Registry loaded %d passes", len(self._passes))

    def register(self, p: BasePass) -> None:
        if p.name in self._passes:
            logger.warning("Overwriting existing pass: %s", p.name)
        self._passes[p.name] = p

    def get(self, name: str) -> BasePass | None:
        return self._passes.get(name)

    def get_or_raise(self, name: str) -> BasePass:
        p = self._passes.get(name)
        if p is None:
            raise PassNotFoundError(name)
        return p

    def list_passes(self) -> list[PassInfo]:
        """Name, description and kind of every pass, sorted by name."""
        return sorted((p.info() for p in self._passes.values()), key=lambda i: i.name)

    def get_dependency_map(self) -> dict[str, list[str]]:
        return build_dependency_map(self._passes.values())

    def resolve_order(self) -> list[str]:
        """Execution order over all registered passes, dependencies first."""
        return resolve_order(self.get_dependency_map())


def _import_pass(class_path: str) -> BasePass:
    """Import and instantiate a pass from a dotted class path."""
    parts = class_path.rsplit(".", 1)
    if len(parts) != 2:
        raise RegistryError(f"Invalid class path: {class_path}")
    module_path, class_name = parts

    try:
        module = importlib.import_module(module_path)
    except ImportError as exc:
        raise RegistryError(f"Cannot import module {module_path}: {exc}") from exc

    cls = getattr(module, class_name, None)
    if cls is None:
        raise RegistryError(f"Class {class_name} not found in {module_path}")
    if not isinstance(cls, type) or not issubclass(cls, BasePass):
        raise RegistryError(f"{class_path} is not a BasePass subclass")
    return cls()
