from __future__ import annotations

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from docsmd.config import Config
from docsmd.generator import generate, run
from docsmd.manifest import DEFAULT_MANIFEST, PageManifestEntry


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def test_end_to_end_single_page(tmp_path: Path) -> None:
    docs = tmp_path / "docs"
    build = tmp_path / "build"
    _write(
        docs / "index.mdx",
        '---\ntitle: "Home"\n---\nimport X from "y";\nHello <div className="x">world</div>.\n',
    )
    manifest = [PageManifestEntry(src="index.mdx", out="index.md")]

    count = run(manifest, docs, build)

    assert count == 1
    assert (build / "index.md").read_text(encoding="utf-8") == "# Home\n\nHello world.\n"
    index = (build / "docs.md").read_text(encoding="utf-8")
    assert "- [Home](https://docs.dtelecom.org/index.md)" in index


def test_index_document_layout(tmp_path: Path) -> None:
    docs = tmp_path / "docs"
    build = tmp_path / "build"
    _write(docs / "a.mdx", '---\ntitle: "Alpha"\n---\nA\n')
    _write(docs / "guides" / "b.mdx", "B\n")
    manifest = [
        PageManifestEntry(src="a.mdx", out="a.md"),
        PageManifestEntry(src="guides/b.mdx", out="guides/b.md"),
    ]
    config = Config(base_url="https://example.org/", index_title="Example Docs")

    result = generate(manifest, docs, build, config=config)

    assert result.index_path == build / "docs.md"
    assert result.index_path.read_text(encoding="utf-8") == (
        "# Example Docs\n\n"
        "These markdown files are available for AI agents, curl, and other non-browser tools.\n\n"
        "For the full documentation in a single file, see: "
        "[llms-full.txt](https://example.org/llms-full.txt)\n\n"
        "## Pages\n\n"
        "- [Alpha](https://example.org/a.md)\n"
        "- [guides/b](https://example.org/guides/b.md)\n"
    )


def test_missing_sources_are_skipped(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    docs = tmp_path / "docs"
    build = tmp_path / "build"
    _write(docs / "present.mdx", '---\ntitle: "Present"\n---\nHere.\n')
    manifest = [
        PageManifestEntry(src="missing.mdx", out="missing.md"),
        PageManifestEntry(src="present.mdx", out="present.md"),
        PageManifestEntry(src="gone/also-missing.md", out="gone/also-missing.md"),
    ]

    with caplog.at_level(logging.WARNING, logger="docsmd.generator"):
        result = generate(manifest, docs, build)

    assert result.generated == len(manifest) - 2
    assert [entry.src for entry in result.skipped] == ["missing.mdx", "gone/also-missing.md"]
    assert not (build / "missing.md").exists()
    assert not (build / "gone").exists()
    index = (build / "docs.md").read_text(encoding="utf-8")
    assert "missing" not in index
    assert "- [Present](https://docs.dtelecom.org/present.md)" in index
    assert "SKIP: missing.mdx (not found)" in caplog.text


def test_untitled_page_links_with_output_name(tmp_path: Path) -> None:
    docs = tmp_path / "docs"
    build = tmp_path / "build"
    _write(docs / "plain.md", "Just text.\n")

    run([PageManifestEntry(src="plain.md", out="plain.md")], docs, build)

    index = (build / "docs.md").read_text(encoding="utf-8")
    assert "- [plain](https://docs.dtelecom.org/plain.md)" in index
    assert (build / "plain.md").read_text(encoding="utf-8") == "Just text.\n"


def test_nested_output_directories_are_created_and_files_overwritten(tmp_path: Path) -> None:
    docs = tmp_path / "docs"
    build = tmp_path / "build"
    _write(docs / "guides" / "room" / "connect.mdx", '---\ntitle: "Connect"\n---\nJoin.\n')
    _write(build / "guides" / "room" / "connect.md", "stale\n")
    manifest = [PageManifestEntry(src="guides/room/connect.mdx", out="guides/room/connect.md")]

    first = run(manifest, docs, build)
    second = run(manifest, docs, build)

    assert first == second == 1
    assert (build / "guides" / "room" / "connect.md").read_text(encoding="utf-8") == (
        "# Connect\n\nJoin.\n"
    )


def test_filesystem_errors_propagate(tmp_path: Path) -> None:
    docs = tmp_path / "docs"
    _write(docs / "index.mdx", "Hello\n")
    blocker = tmp_path / "build"
    blocker.write_text("not a directory", encoding="utf-8")

    with pytest.raises(OSError):
        run([PageManifestEntry(src="index.mdx", out="index.md")], docs, blocker)


def test_empty_run_still_writes_index(tmp_path: Path) -> None:
    build = tmp_path / "build"

    result = generate([], tmp_path / "docs", build)

    assert result.generated == 0
    assert (build / "docs.md").read_text(encoding="utf-8").endswith("## Pages\n\n")


def test_default_manifest_follows_table_of_contents() -> None:
    assert len(DEFAULT_MANIFEST) == 13
    assert DEFAULT_MANIFEST[0] == PageManifestEntry(src="index.mdx", out="index.md")
    assert DEFAULT_MANIFEST[1].out == "guides/getting-started.md"
    assert DEFAULT_MANIFEST[-1].src == "references/server-sdks.md"
    assert all(entry.out.endswith(".md") for entry in DEFAULT_MANIFEST)


def test_manifest_entries_are_immutable() -> None:
    entry = PageManifestEntry(src="/index.mdx", out="index.md")

    assert entry.src == "index.mdx"
    assert entry.fallback_title == "index"
    with pytest.raises(ValidationError):
        entry.src = "other.mdx"  # type: ignore[misc]
