# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Typer CLI application root."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from cleansarif.core.exceptions import CleanSarifError

app = typer.Typer(
    name="cleansarif",
    help="Suppress rules, filter locations, and rebase paths in SARIF files",
    no_args_is_help=True,
)


def _session(*, make_backup: bool = True):
    from cleansarif.core.config import get_settings
    from cleansarif.core.logging import setup_logging
    from cleansarif.session import CleanerSession

    settings = get_settings()
    if not make_backup:
        settings.make_backup = False
    setup_logging(settings.log_level, settings.log_format)
    return CleanerSession(settings=settings)


def _fail(exc: CleanSarifError) -> typer.Exit:
    typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
    return typer.Exit(1)


@app.command()
def info(
    sarif_file: Annotated[Path, typer.Argument(help="SARIF file to inspect")],
) -> None:
    """Show the base path, result count, and rules of a SARIF file."""
    from cleansarif.cli.formatters.console import format_summary

    session = _session()
    try:
        summary = session.load(sarif_file)
    except CleanSarifError as exc:
        raise _fail(exc) from exc
    format_summary(summary)


@app.command()
def files(
    sarif_file: Annotated[Path, typer.Argument(help="SARIF file to inspect")],
    base: Annotated[
        str | None,
        typer.Option("--base", "-b", help="Strip this prefix from listed paths"),
    ] = None,
    match: Annotated[
        str | None,
        typer.Option("--match", "-m", help="Only list paths matching this regex"),
    ] = None,
) -> None:
    """List the distinct artifact paths reported in a SARIF file."""
    from cleansarif.cli.formatters.console import format_files

    session = _session()
    try:
        session.load(sarif_file)
        if base is not None:
            session.set_base(base)
        if match is not None:
            listing = session.preview_location_filter(match)
        else:
            listing = sorted(session.get_files())
    except CleanSarifError as exc:
        raise _fail(exc) from exc
    format_files(listing)


@app.command()
def clean(
    sarif_file: Annotated[Path, typer.Argument(help="SARIF file to clean")],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output file path (may equal the input; default <stem>_cleaned.sarif)",
        ),
    ] = None,
    suppress_rule: Annotated[
        list[str] | None,
        typer.Option("--suppress-rule", "-r", help="Rule ID to drop (repeatable)"),
    ] = None,
    location_filter: Annotated[
        list[str] | None,
        typer.Option("--filter", "-x", help="Regex of artifact paths to drop (repeatable)"),
    ] = None,
    base: Annotated[
        str | None,
        typer.Option("--base", "-b", help="Replace the common base path with this"),
    ] = None,
    filter_set: Annotated[
        Path | None,
        typer.Option("--filter-set", "-f", help="Load filters from a saved filter set"),
    ] = None,
    save_filter_set: Annotated[
        Path | None,
        typer.Option("--save-filter-set", help="Save the resulting filters to this file"),
    ] = None,
    no_backup: Annotated[
        bool,
        typer.Option("--no-backup", help="Do not back up the input when overwriting it"),
    ] = False,
) -> None:
    """Write a filtered, rebased copy of a SARIF file."""
    from cleansarif.cli.formatters.console import format_matches
    from cleansarif.session import AppliedFilterSet, default_output_path

    session = _session(make_backup=not no_backup)
    try:
        summary = session.load(sarif_file)
        applied = (
            session.load_filter_set(filter_set) if filter_set is not None else AppliedFilterSet()
        )
        for rule_id in suppress_rule or []:
            applied.rule_matches[rule_id] = session.suppress_rule(rule_id)
        for pattern in location_filter or []:
            applied.filter_matches[pattern] = session.add_location_filter(pattern)
        if base is not None:
            session.set_base(base)
        format_matches(applied)
        written = session.export(output or default_output_path(sarif_file))
        if save_filter_set is not None:
            session.save_filter_set(save_filter_set)
            typer.echo(f"Filter set written to {save_filter_set}")
    except CleanSarifError as exc:
        raise _fail(exc) from exc

    typer.echo(
        f"Output written to {written} (base {summary.base!r}"
        + (f" -> {base!r}" if base is not None else "")
        + ")"
    )


@app.command()
def version() -> None:
    """Show version information."""
    from cleansarif import __version__

    typer.echo(f"cleansarif v{__version__}")
