# src/core/artifacts.py - v1
"""Artifact kinds and their deterministic mapping to files.

Fixed kinds map to '<name>.yaml'. Branch-parameterized kinds nest under
'branches/<branch>/'. Custom kinds map to '<name>.yaml'.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, model_validator


class ArtifactTag(str, Enum):
    """Discriminator for ArtifactKind."""

    SEED = "seed"
    PROPOSALS = "proposals"
    RULES = "rules"
    SKELETON = "skeleton"
    DECISION_LOG = "decision_log"
    LEARNINGS = "learnings"
    FRICTION = "friction"
    POSTMORTEM = "postmortem"
    BRANCH_HYPOTHESIS = "hypothesis"
    BRANCH_REVIEW = "review"
    CUSTOM = "custom"


_BRANCH_TAGS = {ArtifactTag.BRANCH_HYPOTHESIS, ArtifactTag.BRANCH_REVIEW}
_PARAMETERIZED_TAGS = _BRANCH_TAGS | {ArtifactTag.CUSTOM}

# File stems already taken under .process/ by fixed kinds and engine files.
_RESERVED_CUSTOM_NAMES = {
    tag.value for tag in ArtifactTag if tag not in _PARAMETERIZED_TAGS
} | {"config", "manifest"}


class ArtifactKind(BaseModel):
    """Tagged artifact identifier. Hashable, usable as a dict key."""

    model_config = ConfigDict(frozen=True)

    tag: ArtifactTag
    param: str | None = None

    @model_validator(mode="after")
    def _check_param(self) -> ArtifactKind:
        if self.tag in _PARAMETERIZED_TAGS and not self.param:
            raise ValueError(f"Artifact kind '{self.tag.value}' needs a name")
        if self.tag not in _PARAMETERIZED_TAGS and self.param is not None:
            raise ValueError(f"Artifact kind '{self.tag.value}' takes no name")
        if self.param is not None:
            if "/" in self.param or "\\" in self.param or self.param in (".", ".."):
                raise ValueError(f"Artifact name '{self.param}' must not contain a path")
            if self.tag is ArtifactTag.CUSTOM and self.param in _RESERVED_CUSTOM_NAMES:
                raise ValueError(f"Custom artifact name '{self.param}' is reserved")
        return self

    # --- Constructors ---

    @classmethod
    def hypothesis(cls, branch: str) -> ArtifactKind:
        return cls(tag=ArtifactTag.BRANCH_HYPOTHESIS, param=branch)

    @classmethod
    def review(cls, branch: str) -> ArtifactKind:
        return cls(tag=ArtifactTag.BRANCH_REVIEW, param=branch)

    @classmethod
    def custom(cls, name: str) -> ArtifactKind:
        return cls(tag=ArtifactTag.CUSTOM, param=name)

    # --- Mapping ---

    @property
    def is_branch_kind(self) -> bool:
        return self.tag in _BRANCH_TAGS

    @property
    def display_name(self) -> str:
        """Manifest key, e.g. 'seed', 'branch.auth.review', 'custom.notes'."""
        if self.tag in _BRANCH_TAGS:
            return f"branch.{self.param}.{self.tag.value}"
        if self.tag is ArtifactTag.CUSTOM:
            return f"custom.{self.param}"
        return self.tag.value

    @property
    def relative_path(self) -> str:
        """File path relative to .process/."""
        if self.tag in _BRANCH_TAGS:
            return f"branches/{self.param}/{self.tag.value}.yaml"
        if self.tag is ArtifactTag.CUSTOM:
            return f"{self.param}.yaml"
        return f"{self.tag.value}.yaml"

    @property
    def placeholder(self) -> str:
        """Identifier usable as a prompt template placeholder."""
        return self.display_name.replace(".", "_").replace("-", "_")

    def __str__(self) -> str:
        return self.display_name


def _fixed(tag: ArtifactTag) -> ArtifactKind:
    return ArtifactKind(tag=tag)


SEED = _fixed(ArtifactTag.SEED)
PROPOSALS = _fixed(ArtifactTag.PROPOSALS)
RULES = _fixed(ArtifactTag.RULES)
SKELETON = _fixed(ArtifactTag.SKELETON)
DECISION_LOG = _fixed(ArtifactTag.DECISION_LOG)
LEARNINGS = _fixed(ArtifactTag.LEARNINGS)
FRICTION = _fixed(ArtifactTag.FRICTION)
POSTMORTEM = _fixed(ArtifactTag.POSTMORTEM)

FIXED_KINDS: tuple[ArtifactKind, ...] = (
    SEED,
    PROPOSALS,
    RULES,
    SKELETON,
    DECISION_LOG,
    LEARNINGS,
    FRICTION,
    POSTMORTEM,
)
