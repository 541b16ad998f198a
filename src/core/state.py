# src/core/state.py - v1
"""Persisted phase state for a project.

The record is an explicit resource: callers load it, mutate it through
advance(), and save it. Phase only moves forward; advancing to the current
or an earlier phase changes nothing.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_serializer, field_validator

from procflow.core.errors import NotInitializedError, PhaseNotReadyError
from procflow.core.layout import (
    config_path,
    is_initialized,
    process_dir,
    state_path,
)
from procflow.core.phase import FINAL_PHASE, Phase

logger = logging.getLogger(__name__)

SEED_TEMPLATE = """\
# .process/seed.yaml - structured input, every field is required
idea: "One sentence describing the core idea"
target_user: "Who will use this? In what concrete situation?"
constraints:
  - "Hard constraint 1 (e.g. must run fully offline)"
  - "Hard constraint 2"
non_goals:
  - "Explicitly out of scope 1"
  - "Explicitly out of scope 2"
success_criteria:
  - "Verifiable success criterion 1"
  - "Verifiable success criterion 2"
reversibility_budget: "high"
# high = experiment freely; medium = be careful; low = every step must be reversible
"""

CONFIG_TEMPLATE = """\
ai:
  provider: auto
  # claude:
  #   api_key: "YOUR_API_KEY"  # Or set ANTHROPIC_API_KEY
settings:
  auto_save: true
"""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PhaseStateRecord(BaseModel):
    """Workflow state: current phase, last change time, free-form metadata."""

    current_phase: Phase = Phase.SEED
    last_updated: datetime = Field(default_factory=_utcnow)
    metadata: dict[str, str] = Field(default_factory=dict)

    @field_validator("current_phase", mode="before")
    @classmethod
    def _parse_phase(cls, value: Any) -> Phase:
        return Phase.parse(value)

    @field_serializer("current_phase")
    def _dump_phase(self, phase: Phase) -> str:
        return phase.tag

    def check_phase(self, required: Phase) -> None:
        """Raise PhaseNotReadyError unless current >= required."""
        if self.current_phase < required:
            raise PhaseNotReadyError(self.current_phase, required)

    def advance(self, target: Phase) -> bool:
        """Move to target if it is later than current.

        Returns True when the phase changed. Earlier or equal targets are a
        silent no-op: neither phase nor timestamp is touched.
        """
        if target <= self.current_phase:
            logger.debug(
                "Ignoring advance to %s (current %s)", target.label, self.current_phase.label
            )
            return False
        logger.info("Advancing phase %s -> %s", self.current_phase.label, target.label)
        self.current_phase = target
        self.last_updated = _utcnow()
        return True

    @property
    def is_done(self) -> bool:
        return self.current_phase >= FINAL_PHASE

    @property
    def progress_percent(self) -> int:
        return int(self.current_phase) * 100 // int(FINAL_PHASE)


def load_state(project_root: Path) -> PhaseStateRecord:
    """Load the phase state record.

    Raises:
        NotInitializedError: If the project has no .process/ directory.
    """
    if not is_initialized(project_root):
        raise NotInitializedError(project_root)
    path = state_path(project_root)
    if not path.exists():
        return PhaseStateRecord()
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return PhaseStateRecord.model_validate(data)


def save_state(project_root: Path, record: PhaseStateRecord) -> Path:
    """Write the phase state record. No locking: concurrent writers race."""
    path = state_path(project_root)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        yaml.safe_dump(record.model_dump(mode="json"), sort_keys=False, allow_unicode=True),
        encoding="utf-8",
    )
    return path


def init_project(project_root: Path, force: bool = False) -> bool:
    """Create .process/ with a seed template, default config, and Seed state.

    Returns False (and touches nothing) if the project is already
    initialized and force is not set.
    """
    root = process_dir(project_root)
    if root.exists() and not force:
        logger.warning("Project already initialized at %s", root)
        return False

    root.mkdir(parents=True, exist_ok=True)

    seed_file = root / "seed.yaml"
    if not seed_file.exists() or force:
        seed_file.write_text(SEED_TEMPLATE, encoding="utf-8")
        logger.info("Created %s", seed_file)

    cfg_file = config_path(project_root)
    if not cfg_file.exists() or force:
        cfg_file.write_text(CONFIG_TEMPLATE, encoding="utf-8")
        logger.info("Created %s", cfg_file)

    save_state(project_root, PhaseStateRecord())
    logger.info("Initialized state to %s", Phase.SEED.label)
    return True
