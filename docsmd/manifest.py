"""The fixed list of pages exported as plain markdown."""

from __future__ import annotations

from pathlib import PurePosixPath

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PageManifestEntry(BaseModel):
    """Pairs a source document with the markdown file generated from it."""

    model_config = ConfigDict(frozen=True)

    src: str = Field(description="Source path relative to the docs directory.")
    out: str = Field(description="Output path relative to the build directory.")

    @field_validator("src", "out")
    def _strip_leading_slash(cls, value: str) -> str:
        cleaned = value.strip().lstrip("/")
        if not cleaned:
            raise ValueError("manifest paths cannot be empty")
        return cleaned

    @property
    def fallback_title(self) -> str:
        """Link text used in the index when the source has no title."""
        return str(PurePosixPath(self.out).with_suffix(""))


Manifest = tuple[PageManifestEntry, ...]


def _entry(src: str, out: str) -> PageManifestEntry:
    return PageManifestEntry(src=src, out=out)


# Table-of-contents order; the index lists pages in this order.
DEFAULT_MANIFEST: Manifest = (
    _entry("index.mdx", "index.md"),
    _entry("guides/0-getting-started.mdx", "guides/getting-started.md"),
    _entry("guides/0a-architecture.mdx", "guides/architecture.md"),
    _entry("guides/1-access-tokens.mdx", "guides/access-tokens.md"),
    _entry("guides/2-server-api.mdx", "guides/server-api.md"),
    _entry("guides/3-webhooks.mdx", "guides/webhooks.md"),
    _entry("guides/4-conference-app.mdx", "guides/conference-app.md"),
    _entry("guides/room/connect.mdx", "guides/room/connect.md"),
    _entry("guides/room/publish.mdx", "guides/room/publish.md"),
    _entry("guides/room/receive.mdx", "guides/room/receive.md"),
    _entry("guides/room/data.mdx", "guides/room/data.md"),
    _entry("references/client-sdks.md", "references/client-sdks.md"),
    _entry("references/server-sdks.md", "references/server-sdks.md"),
)
