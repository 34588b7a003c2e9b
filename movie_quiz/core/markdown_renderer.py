"""Markdown rendering helpers for text shown in the web player.

Prompts and round summaries are plain text with line breaks; rendering them
through markdown keeps the browser output escaped and lets summaries use
emphasis without hand-written HTML.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from markdown_it import MarkdownIt


@dataclass(slots=True)
class MarkdownRenderer:
    """Converts markdown text into HTML fragments."""

    enable_html: bool = False
    _markdown: MarkdownIt = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._markdown = MarkdownIt(
            "commonmark", {"html": self.enable_html, "breaks": True}
        ).enable("strikethrough")

    def render_fragment(self, markdown_text: str) -> str:
        """Render a markdown string into an HTML fragment."""

        sanitized = markdown_text.strip()
        if not sanitized:
            return "<p><em>No content provided.</em></p>"
        return self._markdown.render(sanitized)


renderer = MarkdownRenderer()
# Shared instance; MarkdownIt is safe for concurrent read-only renders.
