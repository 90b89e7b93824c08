# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Rich console output for document summaries and filter match counts."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from cleansarif import __version__
from cleansarif.models.summary import DocumentSummary
from cleansarif.session import AppliedFilterSet

console = Console()


def format_summary(summary: DocumentSummary, *, show_rules: bool = True) -> None:
    """Print a loaded document's base path, counts, and rule table."""
    console.print()
    console.print(f"[bold]cleansarif v{__version__}[/bold] - SARIF results cleaner")
    console.print()

    info_table = Table(show_header=False, box=None, padding=(0, 2))
    info_table.add_column("key", style="dim")
    info_table.add_column("value")
    info_table.add_row("File:", escape(summary.source) if summary.source else "-")
    info_table.add_row("Base path:", summary.base or "(none)")
    if summary.override_base is not None:
        info_table.add_row("Rebased to:", summary.override_base or "(relative)")
    info_table.add_row("Results:", str(summary.result_count))
    info_table.add_row("Files:", str(len(summary.files)))
    info_table.add_row("Rules:", str(len(summary.rules)))
    console.print(info_table)
    console.print()

    if not show_rules:
        return

    if not summary.rules:
        console.print("[dim]No rules declared or reported.[/dim]")
        return

    suppressed = set(summary.suppressed_rules)
    table = Table(title="Rules")
    table.add_column("Rule ID", style="cyan", no_wrap=True)
    table.add_column("Hits", justify="right")
    table.add_column("Description")
    for rule in summary.rules:
        rule_id = escape(rule.id) if rule.id else "(none)"
        if rule.id in suppressed:
            rule_id = f"[strike]{rule_id}[/strike]"
        table.add_row(rule_id, str(rule.count), escape(rule.help_text))
    console.print(table)


def format_files(files: list[str]) -> None:
    for path in files:
        console.print(path, markup=False, highlight=False, soft_wrap=True)


def format_matches(applied: AppliedFilterSet) -> None:
    """Print the per-rule and per-pattern match counts of the active filters."""
    if not applied.rule_matches and not applied.filter_matches:
        console.print("[dim]No filters applied.[/dim]")
        return

    table = Table(title="Filters")
    table.add_column("Kind", style="bold")
    table.add_column("Value", style="cyan")
    table.add_column("Matches", justify="right")
    for rule_id, count in applied.rule_matches.items():
        table.add_row("rule", rule_id, str(count))
    for pattern, count in applied.filter_matches.items():
        table.add_row("location", escape(pattern), str(count))
    console.print(table)
