"""CLI entrypoints for the markdown export step."""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from .config import Config, load_config
from .generator import GenerationResult, generate
from .manifest import DEFAULT_MANIFEST
from .verify import VerificationReport, verify_markdown

console = Console()
app = typer.Typer(help="Export Docusaurus sources as plain markdown after a site build.")

ConfigPathOption = Annotated[
    str,
    typer.Option("--config", "-c", help="Path to a docsmd.yml file or the directory holding it."),
]
BuildDirOption = Annotated[
    Path | None,
    typer.Option("--build-dir", "-o", help="Override the site build directory."),
]


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log every page written."),
    ] = False,
) -> None:
    """Without a subcommand, export the markdown pages using the defaults."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        force=True,
    )
    if ctx.invoked_subcommand is None:
        generate_command()


@app.command("generate")
def generate_command(
    config_path: ConfigPathOption = ".",
    docs_dir: Annotated[
        Path | None,
        typer.Option("--docs-dir", "-d", help="Override the documentation source directory."),
    ] = None,
    build_dir: BuildDirOption = None,
    base_url: Annotated[
        str | None,
        typer.Option("--base-url", help="Override the site URL used for index links."),
    ] = None,
) -> None:
    """Write a .md file per documentation page plus the docs.md index."""
    config = _load(config_path)
    overrides: dict[str, object] = {}
    if docs_dir is not None:
        overrides["docs_dir"] = docs_dir
    if build_dir is not None:
        overrides["build_dir"] = build_dir
    if base_url is not None:
        overrides["base_url"] = base_url
    if overrides:
        config = _validated(config.model_dump() | overrides)

    result = generate(DEFAULT_MANIFEST, config.docs_dir, config.build_dir, config=config)
    _print_generation_summary(result, config)


@app.command()
def verify(
    config_path: ConfigPathOption = ".",
    build_dir: BuildDirOption = None,
) -> None:
    """Scan generated markdown for authoring syntax that survived the export."""
    config = _load(config_path)
    output_dir = build_dir or config.build_dir

    if not output_dir.exists():
        console.print(f"[bold red]Build directory not found[/]: {_display_path(output_dir)}")
        raise typer.Exit(code=1)

    console.print(f"[bold blue]Verifying[/]: scanning markdown under {_display_path(output_dir)}")
    report = verify_markdown(output_dir)
    _print_verification_report(report)
    raise typer.Exit(code=1 if report.error_count else 0)


def _print_generation_summary(result: GenerationResult, config: Config) -> None:
    if result.skipped:
        missing = ", ".join(entry.src for entry in result.skipped)
        console.print(
            f"[bold yellow]Skipped[/]: {len(result.skipped)} page(s) not found under "
            f"{_display_path(config.docs_dir)} ({missing})"
        )
    console.print(
        f"[bold green]Generated[/]: {result.generated} markdown files + "
        f"{config.index_filename} index in {_display_path(config.build_dir)}"
    )


def _print_verification_report(report: VerificationReport) -> None:
    if not report.issues:
        console.print(
            "[bold green]Verification complete[/]: "
            f"{report.scanned_files} file(s) contain no leftover authoring syntax."
        )
        return

    for issue in report.issues:
        location = _display_path(issue.source)
        if issue.line is not None:
            location = f"{location}:{issue.line}"
        console.print(f"[bold red]{issue.kind}[/] {location} - {issue.message}")

    console.print(
        f"[bold blue]Summary[/]: {report.error_count} issue(s) across "
        f"{report.scanned_files} file(s)."
    )


def _display_path(path: Path) -> str:
    try:
        return path.resolve().relative_to(Path.cwd().resolve()).as_posix()
    except ValueError:
        return path.as_posix()


def _load(path: str) -> Config:
    try:
        return load_config(path)
    except FileNotFoundError as exc:
        raise typer.BadParameter(f"Config file not found: {path}") from exc
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _validated(data: dict[str, object]) -> Config:
    try:
        return Config.model_validate(data)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
