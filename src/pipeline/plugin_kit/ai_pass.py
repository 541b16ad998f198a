# src/pipeline/plugin_kit/ai_pass.py - v1
"""Base class for passes that delegate generation to a completion provider.

The prompt template is read from .process/prompts/<prompt_file> when that
file exists, otherwise the pass's built-in fallback prompt is used.
Placeholders ($seed, $proposals, ...) are filled with the content of the
required artifacts; unknown placeholders are left as they are. The model
output has any wrapping code fence stripped and must parse as YAML before
it is saved as the pass's output artifact.
"""

from __future__ import annotations

import logging
from abc import abstractmethod
from string import Template
from typing import TYPE_CHECKING

import yaml

from procflow.core.artifacts import ArtifactKind
from procflow.core.errors import PassExecutionError
from procflow.core.layout import prompts_dir
from procflow.llm.text import strip_markdown_code_block
from procflow.pipeline.plugin_kit.base_pass import BasePass
from procflow.pipeline.plugin_kit.models import PassKind

if TYPE_CHECKING:
    from procflow.pipeline.context import PassContext

logger = logging.getLogger(__name__)

DEFAULT_PASS_MAX_TOKENS = 4096


class AIAssistedPass(BasePass):
    """Generate one artifact from the required ones with a single completion."""

    max_tokens: int = DEFAULT_PASS_MAX_TOKENS

    @property
    def kind(self) -> PassKind:
        return PassKind.AI_ASSISTED

    @property
    @abstractmethod
    def output_kind(self) -> ArtifactKind:
        """The artifact this pass writes."""

    @property
    @abstractmethod
    def fallback_prompt(self) -> str:
        """Built-in prompt template used when no project prompt file exists."""

    @property
    def produces(self) -> list[ArtifactKind]:
        return [self.output_kind]

    @property
    def prompt_file(self) -> str:
        """File name looked up under .process/prompts/."""
        return f"{self.name}.txt"

    def load_template(self, ctx: PassContext) -> str:
        path = prompts_dir(ctx.project_root) / self.prompt_file
        if path.is_file():
            logger.debug("Using project prompt %s", path)
            return path.read_text(encoding="utf-8")
        return self.fallback_prompt

    def template_values(self, ctx: PassContext) -> dict[str, str]:
        """Placeholder values: each required artifact under its placeholder name."""
        return {kind.placeholder: ctx.get(kind) or "" for kind in self.requires}

    def build_prompt(self, ctx: PassContext) -> str:
        return Template(self.load_template(ctx)).safe_substitute(self.template_values(ctx))

    async def run(self, ctx: PassContext) -> None:
        prompt = self.build_prompt(ctx)
        response = await ctx.complete(prompt, max_tokens=self.max_tokens)
        content = strip_markdown_code_block(response.content)

        try:
            yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise PassExecutionError(self.name, f"provider output is not valid YAML: {exc}") from exc

        ctx.save_artifact(self.output_kind, content + "\n")
        if response.usage is not None:
            logger.info(
                "%s used %d tokens (%d prompt, %d completion)",
                self.name,
                response.usage.total_tokens,
                response.usage.prompt_tokens,
                response.usage.completion_tokens,
            )
