# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Artifact URI helpers: common-prefix matching, extraction, and rebasing."""

from __future__ import annotations

from typing import Any

from cleansarif.core.constants import URI_KEY


def max_match(a: str, b: str) -> str:
    """Return the longest common prefix of *a* and *b*.

    The comparison is character-wise from index 0 and knows nothing about
    path separators, so ``"/home/a"`` and ``"/home/ab"`` share ``"/home/a"``.
    """
    limit = min(len(a), len(b))
    i = 0
    while i < limit and a[i] == b[i]:
        i += 1
    return a[:i]


def has_prefix(value: str, prefix: str) -> bool:
    return max_match(value, prefix) == prefix


def artifact_uri(result: Any) -> str:
    """Return ``locations[0].physicalLocation.artifactLocation.uri`` of a result.

    Any missing or wrongly-typed link in the chain yields ``""``.  Locations
    after the first are never consulted.
    """
    if not isinstance(result, dict):
        return ""
    locations = result.get("locations")
    if not isinstance(locations, list) or not locations:
        return ""
    node: Any = locations[0]
    for key in ("physicalLocation", "artifactLocation", URI_KEY):
        if not isinstance(node, dict):
            return ""
        node = node.get(key)
    return node if isinstance(node, str) else ""


def rule_of(result: Any) -> str:
    """Return the result's ``ruleId``, or ``""`` when absent or not a string."""
    if not isinstance(result, dict):
        return ""
    rule_id = result.get("ruleId")
    return rule_id if isinstance(rule_id, str) else ""


def rebase(uri: str, look_for: str, replace_with: str) -> str:
    """Swap the *look_for* prefix of *uri* for *replace_with*, if present."""
    if has_prefix(uri, look_for):
        return replace_with + uri[len(look_for):]
    return uri


def rewrite_uri(tree: Any, look_for: str, replace_with: str) -> Any:
    """Return a copy of *tree* with every ``uri`` string rebased.

    Walks objects and arrays recursively.  Any object key named ``uri``
    whose string value starts with *look_for* has that prefix replaced by
    *replace_with*; everything else is copied unchanged.  The input tree
    is never modified.
    """
    if isinstance(tree, dict):
        rewritten: dict[str, Any] = {}
        for key, value in tree.items():
            if key == URI_KEY and isinstance(value, str):
                rewritten[key] = rebase(value, look_for, replace_with)
            else:
                rewritten[key] = rewrite_uri(value, look_for, replace_with)
        return rewritten
    if isinstance(tree, list):
        return [rewrite_uri(item, look_for, replace_with) for item in tree]
    return tree
