# src/pipeline/passes/generate.py - v1
"""AI-assisted generation passes for the main workflow line.

diverge.generate   seed              -> proposals
converge.generate  seed, proposals   -> rules
skeleton.generate  seed, rules       -> skeleton
postmortem.generate learnings, friction -> postmortem
"""

from __future__ import annotations

from procflow.core.artifacts import (
    FRICTION,
    LEARNINGS,
    POSTMORTEM,
    PROPOSALS,
    RULES,
    SEED,
    SKELETON,
    ArtifactKind,
)
from procflow.core.phase import Phase
from procflow.pipeline.plugin_kit.ai_pass import AIAssistedPass

_YAML_ONLY = "Output ONLY valid YAML, without code block markers or extra explanation."


class DivergePass(AIAssistedPass):
    @property
    def name(self) -> str:
        return "diverge.generate"

    @property
    def description(self) -> str:
        return "Generate independent architectural proposals from the seed"

    @property
    def requires(self) -> list[ArtifactKind]:
        return [SEED]

    @property
    def output_kind(self) -> ArtifactKind:
        return PROPOSALS

    @property
    def required_phase(self) -> Phase:
        return Phase.SEED

    @property
    def fallback_prompt(self) -> str:
        return f"""\
You are a software architect. Read the project seed and produce at least two
substantially different technical proposals.

--- SEED ---
$seed
--- END SEED ---

Each proposal needs an architecture sketch, trade-offs, major risks, and its
alignment with every constraint (pass | partial | fail). Finish with a
comparison across the dimensions that matter most.

{_YAML_ONLY}

proposals:
  - name: "Proposal A"
    summary: "One sentence"
    architecture: |
      Multi-line description
    tradeoffs: ["..."]
    risks: ["..."]
    constraint_alignment:
      constraint: "pass | partial | fail"
comparison_dimensions:
  - dimension: "Name"
    ranking: ["A", "B"]
    notes: "Explanation"
"""


class ConvergePass(AIAssistedPass):
    @property
    def name(self) -> str:
        return "converge.generate"

    @property
    def description(self) -> str:
        return "Select a direction and extract invariants and conventions"

    @property
    def requires(self) -> list[ArtifactKind]:
        return [SEED, PROPOSALS]

    @property
    def output_kind(self) -> ArtifactKind:
        return RULES

    @property
    def required_phase(self) -> Phase:
        return Phase.DIVERGE

    @property
    def fallback_prompt(self) -> str:
        return f"""\
You are a software architect. Read the seed and the divergent proposals,
decide which proposal to follow (or how to combine them), and extract the
rules the project must keep.

--- SEED ---
$seed
--- END SEED ---

--- PROPOSALS ---
$proposals
--- END PROPOSALS ---

{_YAML_ONLY}

decision:
  selected: "Proposal name"
  eliminated:
    - name: "Proposal name"
      reason: "Why"
invariants:
  - id: "INV-001"
    rule: "Rule description"
    rationale: "Why this rule"
conventions:
  - id: "CONV-001"
    rule: "Convention description"
    rationale: "Why this convention"
"""


class SkeletonPass(AIAssistedPass):
    @property
    def name(self) -> str:
        return "skeleton.generate"

    @property
    def description(self) -> str:
        return "Lay out the module skeleton that satisfies the rules"

    @property
    def requires(self) -> list[ArtifactKind]:
        return [SEED, RULES]

    @property
    def output_kind(self) -> ArtifactKind:
        return SKELETON

    @property
    def required_phase(self) -> Phase:
        return Phase.CONVERGE

    @property
    def fallback_prompt(self) -> str:
        return f"""\
You are a software architect. Using the seed and the agreed rules, design
the minimal project skeleton: modules, their responsibilities, and the
interfaces between them.

--- SEED ---
$seed
--- END SEED ---

--- RULES ---
$rules
--- END RULES ---

{_YAML_ONLY}

modules:
  - name: "module_name"
    responsibility: "What it owns"
    depends_on: ["other_module"]
    interfaces:
      - "signature or contract"
"""


class PostmortemPass(AIAssistedPass):
    @property
    def name(self) -> str:
        return "postmortem.generate"

    @property
    def description(self) -> str:
        return "Summarize learnings and friction into a postmortem"

    @property
    def requires(self) -> list[ArtifactKind]:
        return [LEARNINGS, FRICTION]

    @property
    def output_kind(self) -> ArtifactKind:
        return POSTMORTEM

    @property
    def required_phase(self) -> Phase:
        return Phase.STABILIZE

    @property
    def fallback_prompt(self) -> str:
        return f"""\
You are facilitating a project postmortem. Read the recorded learnings and
friction points and distil them into actionable takeaways.

--- LEARNINGS ---
$learnings
--- END LEARNINGS ---

--- FRICTION ---
$friction
--- END FRICTION ---

{_YAML_ONLY}

went_well: ["..."]
went_badly: ["..."]
process_changes:
  - change: "What to do differently"
    reason: "Which friction it addresses"
"""
