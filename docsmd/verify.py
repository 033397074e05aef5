"""Check generated markdown for authoring syntax that survived the export."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

from markdown_it.token import Token

from .markdown import parse_markdown

_COMPONENT = re.compile(r"</?(?:Tabs|TabItem)\b|<div\s+className=")
_ADMONITION = re.compile(r"^:::")
_IMPORT = re.compile(r"^import\s+.*;\s*$")


@dataclass(slots=True)
class VerificationIssue:
    """Represents leftover authoring syntax in a generated file."""

    kind: str
    source: Path
    line: int | None
    message: str


@dataclass(slots=True)
class VerificationReport:
    """Aggregate verification results."""

    scanned_files: int
    issues: list[VerificationIssue] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return len(self.issues)


def verify_markdown(build_dir: Path) -> VerificationReport:
    """Scan every ``*.md`` file under ``build_dir`` for framework-only syntax."""
    build_dir = build_dir.resolve()
    markdown_files = sorted(build_dir.rglob("*.md"))
    issues: list[VerificationIssue] = []

    for path in markdown_files:
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            issues.append(
                VerificationIssue(
                    kind="error",
                    source=path,
                    line=None,
                    message=f"Unable to read markdown file: {exc}",
                )
            )
            continue
        issues.extend(_scan(path, parse_markdown(text)))

    return VerificationReport(scanned_files=len(markdown_files), issues=issues)


def _scan(path: Path, tokens: list[Token]) -> Iterator[VerificationIssue]:
    for token in tokens:
        line = token.map[0] + 1 if token.map else None

        if token.type == "html_block" and _COMPONENT.search(token.content):
            yield _issue("component", path, line, token.content)
            continue

        if token.type != "inline":
            continue

        for child in token.children or []:
            if child.type == "html_inline" and _COMPONENT.search(child.content):
                yield _issue("component", path, line, child.content)

        for offset, text in enumerate(token.content.splitlines()):
            lineno = None if line is None else line + offset
            if _ADMONITION.match(text):
                yield _issue("admonition", path, lineno, text)
            elif _IMPORT.match(text):
                yield _issue("import", path, lineno, text)


def _issue(kind: str, path: Path, line: int | None, snippet: str) -> VerificationIssue:
    excerpt = snippet.strip().splitlines()[0] if snippet.strip() else snippet
    return VerificationIssue(
        kind=kind,
        source=path,
        line=line,
        message=f"Leftover {kind} syntax: '{excerpt}'",
    )
