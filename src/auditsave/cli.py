# src/auditsave/cli.py
"""
auditsave Command Line Interface (CLI).

This module implements the terminal interface using `typer` and `rich`.

Commands
--------
- **prefix**: Print the filesystem-safe filename prefix for a URL.
- **save**:   Load a JSON artifacts file (traces per pass), extract the
  screenshot filmstrips from the traces and write trace/filmstrip assets,
  optionally with fake user-timing events from an audit results file.

Usage
-----
    $ auditsave prefix https://example.com --generated-time 2017-01-31T18:47:05
    $ auditsave save run.artifacts.json --audits results.json -o out/ --dump-artifacts
"""

from __future__ import annotations

import asyncio
import json
import traceback
from datetime import datetime
from pathlib import Path
from typing import Annotated, Any

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from auditsave.core.contracts.artifacts import Artifacts
from auditsave.core.errors import AuditSaveError
from auditsave.core.naming import get_filename_prefix
from auditsave.core.settings import get_logger, load_settings
from auditsave.pipelines.asset_saver import save_artifacts, save_assets

load_dotenv()

app = typer.Typer(
    help="auditsave: Persist audit traces, screenshot filmstrips and artifact dumps.",
    rich_markup_mode="markdown",
)
console = Console()


# --------------------------------------------------------------------------- #
# Helpers: Loading & Naming
# --------------------------------------------------------------------------- #


def _read_json(path: Path) -> Any:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def _load_artifacts(path: Path) -> Artifacts:
    """Hydrate an :class:`Artifacts` bundle from a JSON artifacts file."""
    data = _read_json(path)
    if not isinstance(data, dict) or not isinstance(data.get("traces"), dict):
        raise AuditSaveError(f"{path} has no 'traces' object")
    extra = {k: v for k, v in data.items() if k != "traces"}
    return Artifacts.from_traces(data["traces"], **extra)


def _load_results(path: Path | None) -> dict[str, Any] | None:
    """Load an audit results file; accepts a full result or a bare audits map."""
    if path is None:
        return None
    data = _read_json(path)
    if not isinstance(data, dict):
        raise AuditSaveError(f"{path} does not contain a JSON object")
    return data


def _base_name(
    artifacts_file: Path,
    artifacts: Artifacts,
    results: dict[str, Any] | None,
    base_name: str | None,
    url: str | None,
) -> str:
    """Pick the output filename prefix.

    Precedence: explicit ``--base-name``, then the prefix derived from
    ``--url``, the results file's ``url``, the artifacts file's ``url``, and
    finally the artifacts file stem.
    """
    if base_name:
        return base_name
    generated_time = results.get("generatedTime") if results else None
    for candidate in (url, results and results.get("url"), artifacts.extra.get("url")):
        if candidate:
            return get_filename_prefix({"url": candidate, "generatedTime": generated_time})
    return artifacts_file.stem


def _render_written(paths: list[Path]) -> None:
    table = Table(title="Saved files", show_lines=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Path", style="cyan")
    for i, path in enumerate(paths, start=1):
        table.add_row(str(i), str(path))
    console.print(table)


# --------------------------------------------------------------------------- #
# Commands
# --------------------------------------------------------------------------- #


@app.command()  # type: ignore[misc]
def prefix(
    url: Annotated[str, typer.Argument(help="Absolute URL of the audited page.")],
    generated_time: Annotated[
        datetime | None,
        typer.Option(
            "--generated-time",
            "-t",
            help="Result generation time (defaults to now).",
        ),
    ] = None,
) -> None:
    """Print the `hostname_YYYY-MM-DD_HH-MM-SS` prefix for a URL."""
    try:
        console.print(get_filename_prefix({"url": url, "generatedTime": generated_time}))
    except AuditSaveError as e:
        console.print(f"[bold red]❌ Invalid input:[/bold red] {e}")
        raise typer.Exit(code=1) from e


@app.command()  # type: ignore[misc]
def save(
    artifacts_file: Annotated[
        Path,
        typer.Argument(
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            help="JSON file with a 'traces' object mapping pass names to traces.",
        ),
    ],
    audits: Annotated[
        Path | None,
        typer.Option(
            "--audits",
            "-a",
            exists=True,
            dir_okay=False,
            readable=True,
            help="Audit results JSON; enables fake user-timing events.",
        ),
    ] = None,
    output_dir: Annotated[
        Path | None,
        typer.Option("--output-dir", "-o", help="Directory to write into."),
    ] = None,
    base_name: Annotated[
        str | None,
        typer.Option("--base-name", "-n", help="Filename prefix for every output file."),
    ] = None,
    url: Annotated[
        str | None,
        typer.Option("--url", "-u", help="Page URL used to derive the filename prefix."),
    ] = None,
    dump_artifacts: Annotated[
        bool,
        typer.Option(
            "--dump-artifacts/--no-dump-artifacts",
            help="Also write the full artifacts bundle to <base>.artifacts.log.",
        ),
    ] = False,
    manifest: Annotated[
        bool,
        typer.Option(
            "--manifest",
            help="Write <base>.manifest.json mapping indices to pass names.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show full error tracebacks for debugging."),
    ] = False,
) -> None:
    """
    Write `<base>-<i>.trace.json` and `<base>-<i>.screenshots.html` per pass.
    """
    settings = load_settings()
    logger = get_logger("auditsave.assets")
    out_dir = output_dir if output_dir is not None else settings.output_dir
    write_manifest = manifest or settings.write_manifest

    try:
        artifacts = _load_artifacts(artifacts_file)
        results = _load_results(audits)
        audit_map = results.get("audits", results) if results is not None else None
        base_path = out_dir / _base_name(artifacts_file, artifacts, results, base_name, url)

        written = asyncio.run(
            save_assets(
                artifacts,
                audit_map,
                base_path,
                logger=logger,
                concurrency=settings.screenshot_concurrency,
                write_manifest=write_manifest,
            )
        )
        if dump_artifacts:
            written.append(save_artifacts(artifacts, base_path, logger=logger))
    except Exception as e:
        console.print(f"\n[bold red]❌ Save Error:[/bold red] {e}")
        if verbose:
            traceback.print_exc()
        raise typer.Exit(code=1) from e

    console.print(
        Panel.fit(
            f"[bold green]✅ Saved {len(artifacts.traces)} pass(es)[/bold green]\n"
            f"Base path: [u]{base_path}[/u]",
            border_style="green",
        )
    )
    _render_written(written)


if __name__ == "__main__":
    app()
