"""docsmd package exposing the markdown export pipeline and CLI."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version as load_pkg_version
from pathlib import Path
import tomllib

from .generator import GenerationResult, generate, run
from .manifest import DEFAULT_MANIFEST, PageManifestEntry
from .transform import extract_title, render_page, transform

__all__ = [
    "DEFAULT_MANIFEST",
    "GenerationResult",
    "PageManifestEntry",
    "__version__",
    "extract_title",
    "generate",
    "render_page",
    "run",
    "transform",
]


def _read_local_project_version() -> str:
    """Read the project version from pyproject.toml when the package is uninstalled."""
    pyproject = Path(__file__).resolve().parent.parent / "pyproject.toml"
    try:
        data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return "0.0.0"
    return data.get("project", {}).get("version", "0.0.0")


try:
    __version__ = load_pkg_version("docsmd")
except PackageNotFoundError:
    __version__ = _read_local_project_version()
