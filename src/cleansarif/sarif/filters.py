# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Result filtering by suppressed rule and artifact-location regex.

A result is excluded from export when its ``ruleId`` is suppressed or
when its artifact URI matches any location filter.  Filters are OR'd and
searched (not anchored), so ``"tests/"`` matches anywhere in the URI.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from cleansarif.core.exceptions import PatternError
from cleansarif.sarif.paths import artifact_uri, rule_of


def compile_pattern(pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise PatternError(f"Invalid regular expression {pattern!r}: {exc}") from exc


@dataclass
class ResultFilter:
    """Filter state compiled once per export pass."""

    suppressed_rules: frozenset[str] = frozenset()
    location_patterns: list[re.Pattern[str]] = field(default_factory=list)

    @classmethod
    def compile(
        cls,
        suppressed_rules: Iterable[str],
        location_filters: Iterable[str],
    ) -> ResultFilter:
        return cls(
            suppressed_rules=frozenset(suppressed_rules),
            location_patterns=[compile_pattern(p) for p in location_filters],
        )

    @property
    def active(self) -> bool:
        return bool(self.suppressed_rules or self.location_patterns)

    def excludes(self, result: Any) -> bool:
        if rule_of(result) in self.suppressed_rules:
            return True
        uri = artifact_uri(result)
        return any(p.search(uri) for p in self.location_patterns)

    def includes(self, result: Any) -> bool:
        return not self.excludes(result)


def count_matches(results: Iterable[Any], predicate: Callable[[Any], bool]) -> int:
    return sum(1 for result in results if predicate(result))


def count_rule_matches(results: Iterable[Any], rule_id: str) -> int:
    """Number of results reported under *rule_id*, ignoring all other filters."""
    return count_matches(results, lambda r: rule_of(r) == rule_id)


def count_location_matches(results: Iterable[Any], pattern: str | re.Pattern[str]) -> int:
    """Number of results whose artifact URI matches *pattern*, ignoring all other filters."""
    regex = compile_pattern(pattern) if isinstance(pattern, str) else pattern
    return count_matches(results, lambda r: regex.search(artifact_uri(r)) is not None)
