# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Read, parse, and minimally validate SARIF files."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from cleansarif.core.cancellation import ShouldCancel, never_cancel, raise_if_cancelled
from cleansarif.core.constants import RESULTS_KEY, RUNS_KEY, SCHEMA_KEY, SCHEMA_MARKER
from cleansarif.core.exceptions import (
    FileAccessError,
    ParseError,
    SchemaError,
    StructureError,
)
from cleansarif.sarif.document import SarifDocument
from cleansarif.sarif.paths import artifact_uri, max_match

logger = logging.getLogger("cleansarif.sarif.loader")


def read_bytes(path: str | Path) -> bytes:
    try:
        return Path(path).read_bytes()
    except OSError as exc:
        raise FileAccessError(f"Unable to open {path}: {exc.strerror or exc}") from exc


def parse_json(raw: bytes, encoding: str = "utf-8") -> Any:
    try:
        return json.loads(raw.decode(encoding))
    except UnicodeDecodeError as exc:
        raise ParseError(f"File is not valid {encoding} text: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ParseError(f"File does not contain valid JSON data: {exc}") from exc


def check_schema(tree: Any) -> None:
    """Require a string ``$schema`` containing ``"sarif"``."""
    if not isinstance(tree, dict) or not isinstance(tree.get(SCHEMA_KEY), str):
        raise SchemaError("File read, but no $schema found")
    if SCHEMA_MARKER not in tree[SCHEMA_KEY]:
        raise SchemaError(
            f"File read and JSON parsed, but schema is not SARIF: {tree[SCHEMA_KEY]!r}"
        )


def first_run_results(tree: dict[str, Any]) -> list[Any]:
    """Return ``runs[0].results``, validating the containers on the way.

    A first run without a ``results`` key has no results.
    """
    runs = tree.get(RUNS_KEY)
    if not isinstance(runs, list):
        raise StructureError("'runs' is missing or not an array")
    if not runs or not isinstance(runs[0], dict):
        raise StructureError("'runs' has no first run object")
    results = runs[0].get(RESULTS_KEY, [])
    if not isinstance(results, list):
        raise StructureError("'runs[0].results' is not an array")
    return results


def compute_base(results: list[Any], should_cancel: ShouldCancel = never_cancel) -> str:
    """Fold every result's artifact URI into a running common prefix."""
    base: str | None = None
    for result in results:
        raise_if_cancelled(should_cancel, "base path computation")
        uri = artifact_uri(result)
        base = uri if base is None else max_match(base, uri)
    return base or ""


def document_from_tree(
    tree: Any,
    *,
    source: Path | None = None,
    should_cancel: ShouldCancel = never_cancel,
) -> SarifDocument:
    check_schema(tree)
    results = first_run_results(tree)
    base = compute_base(results, should_cancel)
    return SarifDocument(tree, original_base=base, source=source)


def load_document(
    path: str | Path,
    should_cancel: ShouldCancel = never_cancel,
    *,
    encoding: str = "utf-8",
) -> SarifDocument:
    """Load a SARIF file into a :class:`SarifDocument`.

    Raises:
        FileAccessError: the file cannot be read.
        ParseError: the contents are not JSON.
        SchemaError: ``$schema`` is missing or does not mention SARIF.
        StructureError: ``runs`` / ``results`` are not arrays.
        OperationCancelled: *should_cancel* fired during base computation.
    """
    path = Path(path)
    raw = read_bytes(path)
    tree = parse_json(raw, encoding)
    try:
        document = document_from_tree(tree, source=path, should_cancel=should_cancel)
    except SchemaError:
        logger.warning("Rejected %s: not a SARIF file", path)
        raise
    logger.info(
        "Loaded %s: %d results, %d rules, base %r",
        path,
        document.result_count,
        len(document.rules()),
        document.original_base,
    )
    return document
