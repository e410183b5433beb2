"""Markdown rendering for comment descriptions."""

from __future__ import annotations

from markdown_it import MarkdownIt

# Shared renderer; read-only once constructed
_md = MarkdownIt("commonmark")


def render_markdown(text: str) -> str:
    """Render markdown source to HTML."""
    return _md.render(text)


def inline_html(html: str) -> str:
    """Collapse rendered HTML to a single line, dropping a lone paragraph wrapper.

    Used where output must fit in one markdown table cell.
    """
    html = html.strip()
    if html.startswith("<p>") and html.endswith("</p>") and html.count("<p>") == 1:
        html = html[3:-4]
    return " ".join(html.split())
