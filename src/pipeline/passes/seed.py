# src/pipeline/passes/seed.py - v1
"""seed.validate: structural check of the project seed."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Literal

import yaml
from pydantic import BaseModel, ValidationError, field_validator

from procflow.core.artifacts import SEED, ArtifactKind
from procflow.core.errors import PassExecutionError
from procflow.core.phase import Phase
from procflow.pipeline.plugin_kit.base_pass import BasePass

if TYPE_CHECKING:
    from procflow.pipeline.context import PassContext

logger = logging.getLogger(__name__)


class SeedDocument(BaseModel):
    """Schema of .process/seed.yaml."""

    idea: str
    target_user: str
    constraints: list[str]
    non_goals: list[str]
    success_criteria: list[str]
    reversibility_budget: Literal["high", "medium", "low"]

    @field_validator("idea", "target_user")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("cannot be empty")
        return v

    @field_validator("constraints", "non_goals", "success_criteria")
    @classmethod
    def _not_empty(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("must have at least one entry")
        return v


def _describe(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        field = ".".join(str(loc) for loc in err["loc"]) or "<root>"
        parts.append(f"{field}: {err['msg']}")
    return "; ".join(parts)


class SeedValidatePass(BasePass):
    """Pure pass: parse the seed and reject missing or empty fields."""

    @property
    def name(self) -> str:
        return "seed.validate"

    @property
    def description(self) -> str:
        return "Validate the structure of seed.yaml"

    @property
    def requires(self) -> list[ArtifactKind]:
        return [SEED]

    @property
    def required_phase(self) -> Phase:
        return Phase.SEED

    async def run(self, ctx: PassContext) -> None:
        try:
            data = yaml.safe_load(ctx.get(SEED) or "")
        except yaml.YAMLError as exc:
            raise PassExecutionError(self.name, f"seed.yaml is not valid YAML: {exc}") from exc
        if not isinstance(data, dict):
            raise PassExecutionError(self.name, "seed.yaml must be a mapping")

        try:
            seed = SeedDocument.model_validate(data)
        except ValidationError as exc:
            raise PassExecutionError(self.name, _describe(exc)) from exc

        logger.info(
            "Seed valid: %d constraints, %d non-goals, %d success criteria, reversibility %s",
            len(seed.constraints),
            len(seed.non_goals),
            len(seed.success_criteria),
            seed.reversibility_budget,
        )
