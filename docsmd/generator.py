"""Write markdown renditions of the manifest pages plus the ``docs.md`` index."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from .config import Config
from .index import IndexDocument
from .manifest import DEFAULT_MANIFEST, PageManifestEntry
from .transform import render_page

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Summary of a markdown export run."""

    written: list[Path] = field(default_factory=list)
    skipped: list[PageManifestEntry] = field(default_factory=list)
    index_path: Path | None = None

    @property
    def generated(self) -> int:
        return len(self.written)


def generate(
    manifest: Iterable[PageManifestEntry],
    source_root: Path,
    output_root: Path,
    *,
    config: Config | None = None,
) -> GenerationResult:
    """Export every manifest page found under ``source_root`` into ``output_root``.

    Missing sources are logged and skipped. Read and write failures propagate
    unchanged; files written before the failure are left in place.
    """
    config = config or Config()
    source_root = Path(source_root)
    output_root = Path(output_root)
    result = GenerationResult()
    index = IndexDocument(
        title=config.index_title,
        base_url=config.base_url,
        full_text_filename=config.full_text_filename,
    )

    for entry in manifest:
        source_path = source_root / entry.src
        if not source_path.exists():
            logger.warning("SKIP: %s (not found)", entry.src)
            result.skipped.append(entry)
            continue

        page = render_page(source_path.read_text(encoding="utf-8"))

        destination = output_root / entry.out
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(page.text, encoding="utf-8")
        logger.debug("Wrote %s from %s", destination, source_path)
        result.written.append(destination)

        index.add(page.title or entry.fallback_title, entry.out)

    index_path = output_root / config.index_filename
    index_path.parent.mkdir(parents=True, exist_ok=True)
    index_path.write_text(index.render(), encoding="utf-8")
    result.index_path = index_path
    return result


def run(
    manifest: Iterable[PageManifestEntry] = DEFAULT_MANIFEST,
    source_root: Path = Path("docs"),
    output_root: Path = Path("build"),
    *,
    config: Config | None = None,
) -> int:
    """Run an export and return the number of markdown pages generated."""
    return generate(manifest, source_root, output_root, config=config).generated
