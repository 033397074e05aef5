"""Shared Markdown parsing helpers."""

from __future__ import annotations

from functools import lru_cache

from markdown_it import MarkdownIt
from markdown_it.token import Token
from mdit_py_plugins.deflist import deflist_plugin
from mdit_py_plugins.footnote import footnote_plugin
from mdit_py_plugins.tasklists import tasklists_plugin


@lru_cache(maxsize=1)
def _parser() -> MarkdownIt:
    """Configure and cache a CommonMark parser close to what generic viewers accept."""
    md = MarkdownIt("commonmark", {"html": True})
    md.enable("table").enable("strikethrough")
    md.use(deflist_plugin)
    md.use(footnote_plugin)
    md.use(tasklists_plugin)
    return md


def parse_markdown(text: str) -> list[Token]:
    """Tokenize Markdown with the shared parser."""
    if not text.strip():
        return []
    return _parser().parse(text)
