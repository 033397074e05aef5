from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

CONFIG_FILENAME = "docsmd.yml"


class Config(BaseModel):
    """Settings for a markdown export run."""

    docs_dir: Path = Field(default=Path("docs"), description="Directory holding the authoring sources.")
    build_dir: Path = Field(default=Path("build"), description="Site build output receiving the markdown.")
    base_url: str = Field(
        default="https://docs.dtelecom.org",
        description="Canonical site URL used for absolute links in the index.",
    )
    index_filename: str = Field(default="docs.md", description="Index file name under build_dir.")
    index_title: str = Field(default="dTelecom Documentation (Markdown)")
    full_text_filename: str = Field(
        default="llms-full.txt",
        description="Single-file rendition of the documentation linked from the index.",
    )

    @field_validator("docs_dir", "build_dir", mode="before")
    def _ensure_path(cls, value: Any) -> Path:
        return Path(value)

    @field_validator("base_url")
    def _strip_trailing_slash(cls, value: str) -> str:
        cleaned = value.strip().rstrip("/")
        if not cleaned:
            raise ValueError("base_url cannot be empty")
        return cleaned

    @field_validator("index_filename", "full_text_filename")
    def _require_filename(cls, value: str) -> str:
        cleaned = value.strip().lstrip("/")
        if not cleaned:
            raise ValueError("file names cannot be empty")
        return cleaned

    @property
    def index_path(self) -> Path:
        return self.build_dir / self.index_filename


def load_config(path: str | Path) -> Config:
    """Load configuration and resolve relative paths based on the config location.

    ``path`` may point to a file (e.g. ``/site/docsmd.yml``) or a directory that
    may contain that file. Relative directories inside the configuration are
    interpreted relative to the directory holding the config file.
    """
    candidate = Path(path)
    data: dict[str, Any] = {}
    if candidate.is_dir():
        # A project directory without a config file runs on defaults.
        config_file = candidate / CONFIG_FILENAME
        if config_file.exists():
            data = _read_yaml(config_file)
        base_dir = candidate.resolve()
    else:
        if not candidate.exists():
            raise FileNotFoundError(candidate)
        data = _read_yaml(candidate)
        base_dir = candidate.parent.resolve()

    cfg = Config(**data)

    def _abs(value: Path) -> Path:
        return value if value.is_absolute() else (base_dir / value).resolve()

    cfg.docs_dir = _abs(cfg.docs_dir)
    cfg.build_dir = _abs(cfg.build_dir)
    return cfg


def _read_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"{path} should define a mapping, got {type(data).__name__}")
    return data
