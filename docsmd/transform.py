"""Rewrite Docusaurus authoring sources into portable markdown.

The conversion is an ordered sequence of text rewrites. Later steps assume the
earlier ones already removed conflicting markup, so the order of ``STEPS`` matters.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable

import yaml

logger = logging.getLogger(__name__)

_FRONT_MATTER = re.compile(r"\A---[ \t]*\n(?P<block>.*?\n)?---[ \t]*(?:\n+|\Z)", re.DOTALL)
_TITLE_LINE = re.compile(r"^title:[ \t]*(?P<value>.+?)[ \t]*$", re.MULTILINE)
_IMPORT_LINE = re.compile(r"^import[ \t]+.*?;[ \t]*$", re.MULTILINE)
_TABS_OPEN = re.compile(r"<Tabs\b.*?>", re.DOTALL)
_TABS_CLOSE = re.compile(r"</Tabs>")
_TAB_ITEM_OPEN = re.compile(r'<TabItem\b[^>]*?\svalue="(?P<value>[^"]*)"[^>]*>')
_TAB_ITEM_CLOSE = re.compile(r"</TabItem>")
_ADMONITION_OPEN = re.compile(
    r"^:::(?P<kind>note|tip|info|caution|danger|warning)(?P<title>[ \t]+.*)?$",
    re.MULTILINE,
)
_ADMONITION_CLOSE = re.compile(r"^:::[ \t]*$", re.MULTILINE)
_WRAPPER_OPEN = re.compile(r'<div\s+className="[^"]*">')
_WRAPPER_CLOSE = re.compile(r"</div>")
_BLANK_RUN = re.compile(r"\n{3,}")

_QUOTE_CHARS = "'\""


@dataclass(frozen=True, slots=True)
class TransformedDocument:
    """Cleaned markdown for one page plus the title found in its front matter."""

    markdown: str
    title: str | None = None

    @property
    def text(self) -> str:
        """Final file content, with a level-1 title heading when one is missing."""
        if self.title and not self.markdown.startswith(f"# {self.title}"):
            return f"# {self.title}\n\n{self.markdown}"
        return self.markdown


def strip_front_matter(text: str) -> str:
    """Drop a leading ``---`` delimited metadata block and the blank lines after it."""
    return _FRONT_MATTER.sub("", text, count=1)


def strip_imports(text: str) -> str:
    return _IMPORT_LINE.sub("", text)


def flatten_tabs(text: str) -> str:
    """Replace tab containers with a bold label line per tab."""
    text = _TABS_OPEN.sub("", text)
    text = _TABS_CLOSE.sub("", text)
    text = _TAB_ITEM_OPEN.sub(lambda match: f"**{match.group('value')}:**\n", text)
    return _TAB_ITEM_CLOSE.sub("", text)


def convert_admonitions(text: str) -> str:
    """Turn ``:::kind [Title]`` openers into ``> **Label**`` and drop ``:::`` closers."""

    def _label(match: re.Match[str]) -> str:
        title = (match.group("title") or "").strip()
        label = title or match.group("kind").capitalize()
        return f"> **{label}**"

    text = _ADMONITION_OPEN.sub(_label, text)
    return _ADMONITION_CLOSE.sub("", text)


def quote_admonition_bodies(text: str) -> str:
    """Prefix the lines following a converted admonition header with ``> ``.

    A body ends at a blank line that is not followed by another quoted line.
    Nested or multi-paragraph admonitions are not tracked beyond that rule.
    """
    lines = text.split("\n")
    result: list[str] = []
    in_admonition = False

    for idx, line in enumerate(lines):
        if line.startswith("> **") and not line.startswith("> **IMPORTANT"):
            in_admonition = True
            result.append(line)
            continue
        if in_admonition:
            is_last = idx + 1 >= len(lines)
            if not line.strip() and (is_last or not lines[idx + 1].startswith(">")):
                in_admonition = False
                result.append("")
            else:
                result.append(line if line.startswith(">") else f"> {line}")
            continue
        result.append(line)

    return "\n".join(result)


def strip_wrappers(text: str) -> str:
    text = _WRAPPER_OPEN.sub("", text)
    return _WRAPPER_CLOSE.sub("", text)


def collapse_blank_lines(text: str) -> str:
    return _BLANK_RUN.sub("\n\n", text)


def finalize(text: str) -> str:
    return text.strip() + "\n"


STEPS: tuple[Callable[[str], str], ...] = (
    strip_front_matter,
    strip_imports,
    flatten_tabs,
    convert_admonitions,
    quote_admonition_bodies,
    strip_wrappers,
    collapse_blank_lines,
    finalize,
)


def transform(source: str) -> str:
    """Convert one authoring-format document into standalone markdown."""
    for step in STEPS:
        source = step(source)
    return source


def extract_title(source: str) -> str | None:
    """Return the front matter ``title`` with surrounding quotes removed, if any."""
    match = _FRONT_MATTER.match(source)
    if match is None:
        return None
    block = match.group("block") or ""

    try:
        # BaseLoader keeps scalars as written ("No", "1.10").
        data: Any = yaml.load(block, Loader=yaml.BaseLoader)
    except yaml.YAMLError:
        logger.debug("Front matter is not valid YAML; scanning for title line instead")
        data = None

    if isinstance(data, dict):
        value = data.get("title")
        raw = value if isinstance(value, str) else ""
    else:
        line = _TITLE_LINE.search(block)
        raw = line.group("value") if line else ""

    title = raw.strip().strip(_QUOTE_CHARS).strip()
    return title or None


def render_page(source: str) -> TransformedDocument:
    """Transform ``source`` and attach its front matter title."""
    return TransformedDocument(markdown=transform(source), title=extract_title(source))
