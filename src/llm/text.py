# src/llm/text.py - v1
"""Text helpers applied to model output."""

from __future__ import annotations

import re

_FENCE_RE = re.compile(r"^```[\w+-]*\s*\n(.*?)\n?```\s*$", re.DOTALL)


def strip_markdown_code_block(text: str) -> str:
    """Remove a single Markdown code fence wrapping the whole text.

    '```yaml\\nkey: v\\n```' -> 'key: v'. Text that is not fully fenced is
    returned stripped but otherwise unchanged.
    """
    stripped = text.strip()
    match = _FENCE_RE.match(stripped)
    if match:
        return match.group(1).strip()
    return stripped
