# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Shared test fixtures and configuration."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures" / "sarif"

BASE = "/home/jdoe/repo/"
SCHEMA = "https://schemastore.azurewebsites.net/schemas/json/sarif-2.1.0-rtm.5.json"

# (ruleId, path relative to BASE, extra location paths)
REFERENCE_RESULTS: list[tuple[str | None, str, tuple[str, ...]]] = [
    ("V008", "src/App/Document.cpp", ()),
    ("V501", "src/Base/Vector.cpp", ("3rdParty/zlib/zutil.c",)),
    ("V008", "src/App/Document.cpp", ()),
    ("V008", "src/Gui/View3D.cpp", ()),
    ("V1037", "src/Mod/Sketcher/Solver.cpp", ()),
    ("V008", "src/Mod/Part/Geom.cpp", ()),
    ("V501", "3rdParty/zlib/deflate.c", ()),
    ("V008", "3rdParty/zlib/inflate.c", ()),
    (None, "src/App/Property.cpp", ()),
    ("V1037", "tests/TestDocument.cpp", ()),
    ("V501", "src/Gui/View3D.cpp", ()),
    ("V008", "src/Base/Tools.cpp", ()),
]

REFERENCE_RULES: list[dict[str, Any]] = [
    {
        "id": "V008",
        "name": "UnreachableCode",
        "shortDescription": {"text": "Unreachable code detected."},
        "fullDescription": {"text": "The analyzer found code that can never execute."},
    },
    {"id": "V501", "fullDescription": {"text": "Identical sub-expressions around an operator."}},
    {"id": "V1037", "help": {"text": "Two or more case-branches perform the same actions."}},
    {"id": "V2005"},
]


def make_location(uri: str, line: int = 1) -> dict[str, Any]:
    return {
        "physicalLocation": {
            "artifactLocation": {"uri": uri},
            "region": {"startLine": line},
        }
    }


def make_result(rule_id: str | None, uri: str, *extra_uris: str, line: int = 1) -> dict[str, Any]:
    result: dict[str, Any] = {}
    if rule_id is not None:
        result["ruleId"] = rule_id
    result["level"] = "warning"
    result["message"] = {"text": f"Finding in {uri}"}
    result["locations"] = [make_location(uri, line)] + [make_location(u, line) for u in extra_uris]
    return result


def make_sarif(
    results: list[dict[str, Any]],
    rules: list[dict[str, Any]] | None = None,
    *,
    version: str | None = "2.1.0",
    extra_runs: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """Build a SARIF tree with ``version`` deliberately *not* first."""
    run: dict[str, Any] = {
        "tool": {"driver": {"name": "PVS-Studio", "version": "7.11", "rules": rules or []}},
        "artifacts": [{"location": {"uri": BASE + "src/App/Document.cpp"}}],
        "results": results,
        "columnKind": "utf16CodeUnits",
    }
    tree: dict[str, Any] = {"$schema": SCHEMA, "runs": [run, *(extra_runs or [])]}
    if version is not None:
        tree["version"] = version
    return tree


def reference_tree() -> dict[str, Any]:
    results = [
        make_result(rule, BASE + path, *(BASE + p for p in extra), line=i + 1)
        for i, (rule, path, extra) in enumerate(REFERENCE_RESULTS)
    ]
    return make_sarif(results, [dict(r) for r in REFERENCE_RULES])


def write_json(path: Path, data: Any) -> Path:
    path.write_text(json.dumps(data, indent=4), encoding="utf-8")
    return path


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def reference_file(tmp_path: Path) -> Path:
    return write_json(tmp_path / "reference.sarif", reference_tree())


@pytest.fixture
def empty_file(tmp_path: Path) -> Path:
    return write_json(tmp_path / "empty.sarif", make_sarif([], [dict(REFERENCE_RULES[0])]))


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch):
    """Keep CLEANSARIF_* variables from the developer's shell out of tests."""
    import os

    for key in list(os.environ):
        if key.startswith("CLEANSARIF_"):
            monkeypatch.delenv(key, raising=False)
    yield
