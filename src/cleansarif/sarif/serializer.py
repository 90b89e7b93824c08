# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Build the filtered, rebased output tree and write it as SARIF.

The output is a fresh tree built from the document's tree plus its filter
state; the document itself is never touched.  ``version`` is placed as
the first key of the output object because SARIF requires it there,
independent of where it appeared in the input.
"""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any

from cleansarif.core.cancellation import ShouldCancel, never_cancel, raise_if_cancelled
from cleansarif.core.constants import (
    ARTIFACTS_KEY,
    DEFAULT_SARIF_VERSION,
    RESULTS_KEY,
    RUNS_KEY,
    VERSION_KEY,
)
from cleansarif.core.exceptions import FileAccessError, StructureError
from cleansarif.sarif.document import SarifDocument
from cleansarif.sarif.filters import ResultFilter
from cleansarif.sarif.paths import rewrite_uri

logger = logging.getLogger("cleansarif.sarif.serializer")


class _Rebase:
    """Prefix swap applied to kept results, or a no-op when no override is set."""

    def __init__(self, look_for: str, replace_with: str | None) -> None:
        self.look_for = look_for
        self.replace_with = replace_with

    @property
    def active(self) -> bool:
        return self.replace_with is not None and self.replace_with != self.look_for

    def apply(self, result: Any) -> Any:
        if not self.active:
            return copy.deepcopy(result)
        return rewrite_uri(result, self.look_for, self.replace_with)


def _filter_results(
    results: Any,
    result_filter: ResultFilter,
    rebase: _Rebase,
    should_cancel: ShouldCancel,
) -> list[Any]:
    if not isinstance(results, list):
        raise StructureError("'runs[0].results' is not an array")
    kept: list[Any] = []
    for result in results:
        raise_if_cancelled(should_cancel, "export")
        # Inclusion is decided on the original URI, before rebasing
        if result_filter.includes(result):
            kept.append(rebase.apply(result))
    logger.info("Export keeps %d of %d results", len(kept), len(results))
    return kept


def _build_first_run(
    run: dict[str, Any],
    result_filter: ResultFilter,
    rebase: _Rebase,
    should_cancel: ShouldCancel,
) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key, value in run.items():
        raise_if_cancelled(should_cancel, "export")
        if key == ARTIFACTS_KEY:
            continue
        if key == RESULTS_KEY:
            out[key] = _filter_results(value, result_filter, rebase, should_cancel)
        else:
            out[key] = copy.deepcopy(value)
    return out


def _build_runs(
    runs: Any,
    result_filter: ResultFilter,
    rebase: _Rebase,
    should_cancel: ShouldCancel,
) -> list[Any]:
    if not isinstance(runs, list) or not runs or not isinstance(runs[0], dict):
        raise StructureError("'runs' is missing or has no first run object")
    out: list[Any] = []
    for index, run in enumerate(runs):
        raise_if_cancelled(should_cancel, "export")
        if index == 0:
            out.append(_build_first_run(run, result_filter, rebase, should_cancel))
        else:
            out.append(copy.deepcopy(run))
    return out


def build_export_tree(
    document: SarifDocument,
    should_cancel: ShouldCancel = never_cancel,
    *,
    default_version: str = DEFAULT_SARIF_VERSION,
) -> dict[str, Any]:
    """Return the output tree for *document* with ``version`` as its first key.

    Drops ``runs[0].artifacts``, filters ``runs[0].results``, and rebases
    ``uri`` fields of kept results when an override base is set.  Every
    other field is copied unchanged and in its original order.
    """
    source = document.tree
    result_filter = document.result_filter()
    rebase = _Rebase(document.original_base, document.override_base)

    out: dict[str, Any] = {VERSION_KEY: source.get(VERSION_KEY, default_version)}
    for key, value in source.items():
        raise_if_cancelled(should_cancel, "export")
        if key == VERSION_KEY:
            continue
        if key == RUNS_KEY:
            out[key] = _build_runs(value, result_filter, rebase, should_cancel)
        else:
            out[key] = copy.deepcopy(value)
    return out


def serialize_tree(tree: dict[str, Any], *, indent: int | None = 2, encoding: str = "utf-8") -> bytes:
    text = json.dumps(tree, indent=indent, ensure_ascii=False)
    try:
        return (text + "\n").encode(encoding)
    except UnicodeEncodeError as exc:
        raise FileAccessError(f"Output cannot be encoded as {encoding}: {exc}") from exc


def write_bytes(path: str | Path, data: bytes) -> None:
    try:
        Path(path).write_bytes(data)
    except OSError as exc:
        raise FileAccessError(f"Unable to write {path}: {exc.strerror or exc}") from exc


def render_document(
    document: SarifDocument,
    should_cancel: ShouldCancel = never_cancel,
    *,
    default_version: str = DEFAULT_SARIF_VERSION,
    indent: int | None = 2,
    encoding: str = "utf-8",
) -> bytes:
    """Build and encode the export of *document* without touching the disk."""
    tree = build_export_tree(document, should_cancel, default_version=default_version)
    data = serialize_tree(tree, indent=indent, encoding=encoding)
    raise_if_cancelled(should_cancel, "export")
    return data


def export_document(
    document: SarifDocument,
    path: str | Path,
    should_cancel: ShouldCancel = never_cancel,
    *,
    default_version: str = DEFAULT_SARIF_VERSION,
    indent: int | None = 2,
    encoding: str = "utf-8",
) -> None:
    """Write the filtered and rebased copy of *document* to *path*.

    The destination is opened only after the whole output has been built
    in memory, so cancellation or a construction error never leaves a
    partial file behind.  A failure during the write itself is reported
    as :class:`FileAccessError` but the destination may be truncated.
    """
    data = render_document(
        document,
        should_cancel,
        default_version=default_version,
        indent=indent,
        encoding=encoding,
    )
    write_bytes(path, data)
    logger.info("Exported %s (%d bytes)", path, len(data))
