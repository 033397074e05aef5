"""Build the ``docs.md`` page that lists every exported markdown file."""

from __future__ import annotations

from dataclasses import dataclass, field

INTRO = "These markdown files are available for AI agents, curl, and other non-browser tools."


@dataclass(frozen=True, slots=True)
class IndexEntry:
    title: str
    out: str


@dataclass(slots=True)
class IndexDocument:
    """Pages collected during a run, rendered once all entries are processed."""

    title: str
    base_url: str
    full_text_filename: str = "llms-full.txt"
    entries: list[IndexEntry] = field(default_factory=list)

    def add(self, title: str, out: str) -> None:
        self.entries.append(IndexEntry(title=title, out=out))

    def url_for(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    def render(self) -> str:
        lines = [
            f"# {self.title}",
            "",
            INTRO,
            "",
            "For the full documentation in a single file, see: "
            f"[{self.full_text_filename}]({self.url_for(self.full_text_filename)})",
            "",
            "## Pages",
            "",
        ]
        lines.extend(f"- [{entry.title}]({self.url_for(entry.out)})" for entry in self.entries)
        return "\n".join(lines) + "\n"
