# src/pipeline/dag_builder.py - v2
"""DAG builder: derive pass ordering from artifact requirements.

Pass A depends on pass B when A requires an artifact kind that B produces
(and A is not B). A requirement nobody produces adds no edge; it is
checked when the pass runs. Ordering is a depth-first post-order over all
passes in registration order, using an explicit stack and tri-state marks.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from enum import Enum
from typing import TYPE_CHECKING

from procflow.core.errors import CircularDependencyError

if TYPE_CHECKING:
    from procflow.core.artifacts import ArtifactKind
    from procflow.pipeline.plugin_kit.base_pass import BasePass

logger = logging.getLogger(__name__)


class _Mark(Enum):
    UNVISITED = 0
    IN_PROGRESS = 1
    DONE = 2


def build_dependency_map(passes: Iterable[BasePass]) -> dict[str, list[str]]:
    """Return pass_name -> names of passes producing something it requires.

    Keys and dependency lists follow registration order.
    """
    passes = list(passes)
    producers: dict[ArtifactKind, list[str]] = {}
    for p in passes:
        for kind in p.produces:
            producers.setdefault(kind, []).append(p.name)

    dependency_map: dict[str, list[str]] = {}
    for p in passes:
        deps: list[str] = []
        for kind in p.requires:
            for producer in producers.get(kind, []):
                if producer != p.name and producer not in deps:
                    deps.append(producer)
        dependency_map[p.name] = deps
    return dependency_map


def resolve_order(dependency_map: dict[str, list[str]]) -> list[str]:
    """Topologically order passes, dependencies first.

    Raises:
        CircularDependencyError: When the walk reaches a pass that is still
            in progress; the error names that pass.
    """
    marks: dict[str, _Mark] = {}
    order: list[str] = []

    for root in dependency_map:
        if marks.get(root, _Mark.UNVISITED) is not _Mark.UNVISITED:
            continue
        marks[root] = _Mark.IN_PROGRESS
        stack: list[tuple[str, Iterator[str]]] = [(root, iter(dependency_map[root]))]

        while stack:
            node, deps = stack[-1]
            for dep in deps:
                mark = marks.get(dep, _Mark.UNVISITED)
                if mark is _Mark.IN_PROGRESS:
                    raise CircularDependencyError(dep)
                if mark is _Mark.UNVISITED:
                    marks[dep] = _Mark.IN_PROGRESS
                    stack.append((dep, iter(dependency_map.get(dep, []))))
                    break
            else:
                stack.pop()
                marks[node] = _Mark.DONE
                order.append(node)

    logger.debug("Resolved pass order: %s", order)
    return order
