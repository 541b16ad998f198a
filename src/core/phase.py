# src/core/phase.py - v1
"""Ordered workflow phases.

Seed < Diverge < Converge < Skeleton < Branching < Stabilize < Postmortem < Done.
Ordering is the integer value, so plain comparison operators gate passes.
"""

from __future__ import annotations

from enum import IntEnum


class Phase(IntEnum):
    """One stage of the project workflow."""

    SEED = 0
    DIVERGE = 1
    CONVERGE = 2
    SKELETON = 3
    BRANCHING = 4
    STABILIZE = 5
    POSTMORTEM = 6
    DONE = 7

    @property
    def tag(self) -> str:
        """Persisted form, e.g. 'Seed'."""
        return self.name.capitalize()

    @property
    def label(self) -> str:
        """Display form, e.g. '0. Seed'."""
        return f"{self.value}. {self.tag}"

    def __str__(self) -> str:
        return self.label

    @classmethod
    def parse(cls, value: str | int | Phase) -> Phase:
        """Accept a Phase, its ordinal, its tag, or its label."""
        if isinstance(value, Phase):
            return value
        if isinstance(value, int):
            return cls(value)
        text = str(value).strip()
        if ". " in text:
            text = text.split(". ", 1)[1]
        if text.isdigit():
            return cls(int(text))
        try:
            return cls[text.upper()]
        except KeyError:
            raise ValueError(f"Unknown phase: {value!r}") from None


FINAL_PHASE = Phase.DONE
