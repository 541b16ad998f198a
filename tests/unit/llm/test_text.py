# tests/unit/llm/test_text.py - v1
"""Tests for llm/text.py - code fence stripping."""

from __future__ import annotations

from procflow.llm.text import strip_markdown_code_block


class TestStripMarkdownCodeBlock:
    def test_language_fence(self):
        assert strip_markdown_code_block("```yaml\nkey: v\n```") == "key: v"

    def test_bare_fence(self):
        assert strip_markdown_code_block("```\na: 1\nb: 2\n```\n") == "a: 1\nb: 2"

    def test_surrounding_whitespace(self):
        assert strip_markdown_code_block("\n  ```yml\nx: 1\n```  \n") == "x: 1"

    def test_unfenced_text(self):
        assert strip_markdown_code_block("  plain: text \n") == "plain: text"

    def test_partial_fence_untouched(self):
        text = "intro\n```yaml\nx: 1\n```"
        assert strip_markdown_code_block(text) == text
