# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Cleaner session: the API a front end drives to edit one SARIF file.

Usage::

    from cleansarif import CleanerSession

    session = CleanerSession()
    session.load("results.sarif")
    session.suppress_rule("V008", note="false positives")
    session.add_location_filter(r"3rdParty/")
    session.set_base("src/")
    session.export("results.clean.sarif")

Load and export block; an event-loop caller should use ``load_async`` /
``export_async``, which run them on a worker thread.  ``request_cancel``
may be called from any thread and is observed by the call in flight.
"""

from __future__ import annotations

import asyncio
import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from cleansarif.core.cancellation import CancellationToken
from cleansarif.core.config import Settings, get_settings
from cleansarif.core.exceptions import FileAccessError, NoDocumentError, OperationCancelled
from cleansarif.models.filterset import (
    FileFilter,
    FilterSet,
    RuleFilter,
    load_filter_set,
    save_filter_set,
)
from cleansarif.models.summary import DocumentSummary, RuleSummary
from cleansarif.sarif.document import SarifDocument
from cleansarif.sarif.filters import compile_pattern
from cleansarif.sarif.loader import load_document
from cleansarif.sarif.serializer import render_document, write_bytes

logger = logging.getLogger("cleansarif.session")


def default_output_path(source: str | Path) -> Path:
    """Suggested export target for *source*: ``<dir>/<stem>_cleaned.sarif``."""
    source = Path(source)
    return source.with_name(f"{source.stem}_cleaned.sarif")


@dataclass
class AppliedFilterSet:
    """Match counts reported while restoring a filter set."""

    rule_matches: dict[str, int] = field(default_factory=dict)
    filter_matches: dict[str, int] = field(default_factory=dict)


class CleanerSession:
    """Holds at most one loaded document and the notes attached to its filters."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()
        self._document: SarifDocument | None = None
        self._token = CancellationToken()
        self._rule_notes: dict[str, str] = {}
        self._filter_notes: dict[str, str] = {}

    # ------------------------------------------------------------------
    # Document lifecycle
    # ------------------------------------------------------------------

    @property
    def loaded(self) -> bool:
        return self._document is not None

    @property
    def document(self) -> SarifDocument:
        if self._document is None:
            raise NoDocumentError("No SARIF file has been loaded")
        return self._document

    def request_cancel(self) -> None:
        """Ask the in-flight load or export to stop at its next checkpoint."""
        self._token.cancel()

    def load(self, path: str | Path) -> DocumentSummary:
        """Load *path*, replacing the current document and its filter state.

        On failure the previously loaded document stays in place.
        """
        self._token.reset()
        try:
            document = load_document(path, self._token, encoding=self._settings.encoding)
        except OperationCancelled:
            logger.warning("Load of %s cancelled", path)
            raise
        self._document = document
        self._rule_notes.clear()
        self._filter_notes.clear()
        return self.summary()

    async def load_async(self, path: str | Path) -> DocumentSummary:
        return await asyncio.to_thread(self.load, path)

    def export(self, path: str | Path) -> Path:
        """Write the filtered, rebased document to *path*.

        When *path* is the loaded file itself, a backup copy is made first
        (unless disabled in settings).  The backup is taken only once the
        output has been fully built, and an existing backup is never
        overwritten.
        """
        document = self.document
        self._token.reset()
        destination = Path(path)
        try:
            data = render_document(
                document,
                self._token,
                default_version=self._settings.default_sarif_version,
                indent=self._settings.json_indent,
                encoding=self._settings.encoding,
            )
        except OperationCancelled:
            logger.warning("Export to %s cancelled", destination)
            raise
        if self._settings.make_backup and document.source is not None:
            self._backup_if_in_place(document.source, destination)
        write_bytes(destination, data)
        logger.info("Exported %s (%d bytes)", destination, len(data))
        return destination

    async def export_async(self, path: str | Path) -> Path:
        return await asyncio.to_thread(self.export, path)

    def _backup_if_in_place(self, source: Path, destination: Path) -> None:
        try:
            same = destination.exists() and destination.resolve() == source.resolve()
        except OSError:
            same = False
        if not same:
            return
        backup = source.with_name(source.name + self._settings.backup_suffix)
        try:
            with source.open("rb") as src, backup.open("xb") as dst:
                shutil.copyfileobj(src, dst)
        except FileExistsError as exc:
            raise FileAccessError(
                f"Could not make a backup of {source}: {backup} already exists"
            ) from exc
        except OSError as exc:
            raise FileAccessError(f"Could not make a backup of {source}: {exc}") from exc
        logger.info("Backed up %s to %s", source, backup)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def summary(self) -> DocumentSummary:
        document = self.document
        return DocumentSummary(
            source=str(document.source) if document.source else "",
            base=document.get_base(),
            override_base=document.override_base,
            result_count=document.result_count,
            rules=self.get_rules(),
            files=sorted(document.files()),
            suppressed_rules=document.suppressed_rules,
            location_filters=document.location_filters,
        )

    def get_rules(self) -> list[RuleSummary]:
        """Declared rules with their hit counts.

        Rule IDs reported by results but missing from the driver's rule
        table are listed after the declared ones, with empty help text.
        """
        document = self.document
        counts = document.rule_counts()
        rules = [
            RuleSummary(id=rule_id, help_text=text, count=counts.get(rule_id, 0))
            for rule_id, text in document.rules()
        ]
        declared = {r.id for r in rules}
        for rule_id, count in counts.items():
            if rule_id not in declared:
                rules.append(RuleSummary(id=rule_id, count=count))
        return rules

    def get_rule_counts(self) -> dict[str, int]:
        return self.document.rule_counts()

    def get_files(self) -> set[str]:
        return self.document.files()

    def get_base(self) -> str:
        return self.document.get_base()

    def set_base(self, new_base: str | None) -> None:
        self.document.set_base(new_base)

    # ------------------------------------------------------------------
    # Rule suppression
    # ------------------------------------------------------------------

    def suppress_rule(self, rule_id: str, note: str = "") -> int:
        matches = self.document.suppress_rule(rule_id)
        if note or rule_id not in self._rule_notes:
            self._rule_notes[rule_id] = note
        return matches

    def unsuppress_rule(self, rule_id: str) -> None:
        self.document.unsuppress_rule(rule_id)
        self._rule_notes.pop(rule_id, None)

    def get_suppressed_rules(self) -> list[str]:
        return self.document.suppressed_rules

    # ------------------------------------------------------------------
    # Location filters
    # ------------------------------------------------------------------

    def add_location_filter(self, pattern: str, note: str = "") -> int:
        matches = self.document.add_location_filter(pattern)
        if note or pattern not in self._filter_notes:
            self._filter_notes[pattern] = note
        return matches

    def remove_location_filter(self, pattern: str) -> None:
        self.document.remove_location_filter(pattern)
        self._filter_notes.pop(pattern, None)

    def get_location_filters(self) -> list[str]:
        return self.document.location_filters

    def preview_location_filter(self, pattern: str) -> list[str]:
        """Files from :meth:`get_files` matched by *pattern*, without adding it."""
        regex = compile_pattern(pattern)
        return sorted(f for f in self.get_files() if regex.search(f))

    # ------------------------------------------------------------------
    # Filter sets
    # ------------------------------------------------------------------

    def get_filter_set(self) -> FilterSet:
        document = self.document
        rules: list[RuleFilter] = []
        for rule_id in dict.fromkeys(document.suppressed_rules):
            rules.append(RuleFilter(rule=rule_id, note=self._rule_notes.get(rule_id, "")))
        filters: list[FileFilter] = []
        for pattern in dict.fromkeys(document.location_filters):
            filters.append(FileFilter(regex=pattern, note=self._filter_notes.get(pattern, "")))
        return FilterSet(
            base_path=document.override_base,
            rule_filters=rules,
            file_filters=filters,
        )

    def apply_filter_set(self, filter_set: FilterSet) -> AppliedFilterSet:
        """Replace the current suppressions, filters, and base with *filter_set*.

        Every regex is compiled before anything changes, so an invalid one
        raises :class:`PatternError` and leaves the session untouched.
        """
        document = self.document
        for entry in filter_set.file_filters:
            compile_pattern(entry.regex)

        for rule_id in document.suppressed_rules:
            self.unsuppress_rule(rule_id)
        for pattern in document.location_filters:
            self.remove_location_filter(pattern)
        document.set_base(filter_set.base_path)

        applied = AppliedFilterSet()
        for rule in filter_set.rule_filters:
            if rule.rule in applied.rule_matches:
                continue
            applied.rule_matches[rule.rule] = self.suppress_rule(rule.rule, rule.note)
        for entry in filter_set.file_filters:
            if entry.regex in applied.filter_matches:
                continue
            applied.filter_matches[entry.regex] = self.add_location_filter(
                entry.regex, entry.note
            )
        logger.info(
            "Applied filter set: %d rules, %d location filters",
            len(applied.rule_matches),
            len(applied.filter_matches),
        )
        return applied

    def save_filter_set(self, path: str | Path) -> None:
        save_filter_set(
            path,
            self.get_filter_set(),
            indent=self._settings.json_indent,
            encoding=self._settings.encoding,
        )

    def load_filter_set(self, path: str | Path) -> AppliedFilterSet:
        return self.apply_filter_set(load_filter_set(path, encoding=self._settings.encoding))
