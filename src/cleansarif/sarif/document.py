# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""In-memory SARIF document plus its filter and rebase state.

The parsed JSON tree is owned exclusively by the document and is never
modified after construction.  Suppressions, location filters, and the
override base are kept alongside it and only take effect when an export
builds a fresh output tree (see :mod:`cleansarif.sarif.serializer`).
"""

from __future__ import annotations

import copy
import logging
from collections import Counter
from pathlib import Path
from typing import Any

from cleansarif.core.constants import RESULTS_KEY, RULE_TEXT_FIELDS, RUNS_KEY
from cleansarif.sarif.filters import (
    ResultFilter,
    compile_pattern,
    count_location_matches,
    count_rule_matches,
)
from cleansarif.sarif.paths import artifact_uri, has_prefix, rule_of

logger = logging.getLogger("cleansarif.sarif.document")


def rule_help_text(rule: Any) -> str:
    """Short description, else full description, else help text, else ``""``."""
    if not isinstance(rule, dict):
        return ""
    for key in RULE_TEXT_FIELDS:
        message = rule.get(key)
        if isinstance(message, dict) and isinstance(message.get("text"), str):
            return message["text"]
    return ""


class SarifDocument:
    """A loaded SARIF file and the edits to apply when exporting it.

    Equality compares the underlying tree only; two documents with
    different filters but the same content are equal.
    """

    def __init__(
        self,
        tree: dict[str, Any],
        *,
        original_base: str = "",
        source: Path | None = None,
    ) -> None:
        self._tree = tree
        self._original_base = original_base
        self._override_base: str | None = None
        self._suppressed_rules: list[str] = []
        self._location_filters: list[str] = []
        self.source = source

    # ------------------------------------------------------------------
    # Tree access
    # ------------------------------------------------------------------

    @property
    def tree(self) -> dict[str, Any]:
        """Read-only view of the parsed tree.  Callers must not mutate it."""
        return self._tree

    def snapshot(self) -> dict[str, Any]:
        """Deep copy of the parsed tree, safe to modify."""
        return copy.deepcopy(self._tree)

    @property
    def first_run(self) -> dict[str, Any]:
        return self._tree[RUNS_KEY][0]

    @property
    def results(self) -> list[Any]:
        return self.first_run.get(RESULTS_KEY, [])

    @property
    def result_count(self) -> int:
        return len(self.results)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SarifDocument):
            return NotImplemented
        return self._tree == other._tree

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"SarifDocument(source={str(self.source) if self.source else None!r}, "
            f"results={self.result_count}, base={self._original_base!r})"
        )

    # ------------------------------------------------------------------
    # Base path
    # ------------------------------------------------------------------

    @property
    def original_base(self) -> str:
        return self._original_base

    @property
    def override_base(self) -> str | None:
        return self._override_base

    def get_base(self) -> str:
        """Common prefix of all artifact URIs, as computed at load time."""
        return self._original_base

    def set_base(self, new_base: str | None) -> None:
        """Rebase exported URIs onto *new_base*; ``None`` clears the override.

        An empty string is a valid override and makes exported URIs
        relative to the original base.
        """
        self._override_base = new_base
        logger.debug("Override base set to %r", new_base)

    # ------------------------------------------------------------------
    # Rule suppression
    # ------------------------------------------------------------------

    @property
    def suppressed_rules(self) -> list[str]:
        return list(self._suppressed_rules)

    def suppress_rule(self, rule_id: str) -> int:
        """Suppress *rule_id* and return how many results it matches on its own."""
        self._suppressed_rules.append(rule_id)
        matches = count_rule_matches(self.results, rule_id)
        logger.debug("Suppressed rule %s (%d matches)", rule_id, matches)
        return matches

    def unsuppress_rule(self, rule_id: str) -> None:
        self._suppressed_rules = [r for r in self._suppressed_rules if r != rule_id]

    # ------------------------------------------------------------------
    # Location filters
    # ------------------------------------------------------------------

    @property
    def location_filters(self) -> list[str]:
        return list(self._location_filters)

    def add_location_filter(self, pattern: str) -> int:
        """Add a location regex and return how many results it matches on its own.

        Raises:
            PatternError: *pattern* does not compile; no state is changed.
        """
        regex = compile_pattern(pattern)
        self._location_filters.append(pattern)
        matches = count_location_matches(self.results, regex)
        logger.debug("Added location filter %r (%d matches)", pattern, matches)
        return matches

    def remove_location_filter(self, pattern: str) -> None:
        self._location_filters = [p for p in self._location_filters if p != pattern]

    def result_filter(self) -> ResultFilter:
        return ResultFilter.compile(self._suppressed_rules, self._location_filters)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def rules(self) -> list[tuple[str, str]]:
        """``(id, help text)`` for each entry of ``tool.driver.rules``, in order.

        Missing or malformed optional fields degrade to empty strings.
        """
        tool = self.first_run.get("tool")
        driver = tool.get("driver") if isinstance(tool, dict) else None
        rules = driver.get("rules") if isinstance(driver, dict) else None
        if not isinstance(rules, list):
            return []
        listing: list[tuple[str, str]] = []
        for rule in rules:
            if not isinstance(rule, dict):
                continue
            rule_id = rule.get("id")
            listing.append((rule_id if isinstance(rule_id, str) else "", rule_help_text(rule)))
        return listing

    def rule_counts(self) -> dict[str, int]:
        """Occurrences of each ``ruleId``; results without one count under ``""``."""
        return dict(Counter(rule_of(r) for r in self.results))

    def files(self) -> set[str]:
        """Distinct artifact URIs, with the override base stripped where it prefixes one."""
        uris = (artifact_uri(r) for r in self.results)
        override = self._override_base
        if not override:
            return set(uris)
        return {uri[len(override):] if has_prefix(uri, override) else uri for uri in uris}
