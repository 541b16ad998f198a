# src/core/decision_log.py - v1
"""Decision records appended at phase transitions.

Each entry captures what was decided, why, and when to revisit it. The log
is the decision_log artifact and is recorded in the manifest like any other.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field

from procflow.core.artifacts import DECISION_LOG
from procflow.core.layout import artifact_path
from procflow.core.manifest import load_manifest, save_manifest

logger = logging.getLogger(__name__)

DECISION_PRODUCER = "phase.advance"


def _timestamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class DecisionEntry(BaseModel):
    """One recorded decision."""

    phase_transition: str
    decision: str
    reasoning: str
    confidence: Literal["high", "medium", "low"] = "medium"
    revisit_trigger: str = "N/A"
    decided_by: str = "human"
    timestamp: str = Field(default_factory=_timestamp)


class DecisionsLog(BaseModel):
    decisions: list[DecisionEntry] = Field(default_factory=list)


def load_decisions(project_root: Path) -> DecisionsLog:
    path = artifact_path(project_root, DECISION_LOG.relative_path)
    if not path.exists():
        return DecisionsLog()
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return DecisionsLog.model_validate(data)


def append_decision(project_root: Path, entry: DecisionEntry) -> DecisionsLog:
    """Append an entry to the decision log and record it in the manifest."""
    log = load_decisions(project_root)
    log.decisions.append(entry)

    path = artifact_path(project_root, DECISION_LOG.relative_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    content = yaml.safe_dump(log.model_dump(mode="json"), sort_keys=False, allow_unicode=True)
    path.write_text(content, encoding="utf-8")

    manifest = load_manifest(project_root)
    manifest.record_artifact(
        DECISION_LOG.display_name, DECISION_PRODUCER, DECISION_LOG.relative_path, content
    )
    save_manifest(project_root, manifest)

    logger.info(
        "Recorded decision for %s (%d total)", entry.phase_transition, len(log.decisions)
    )
    return log
