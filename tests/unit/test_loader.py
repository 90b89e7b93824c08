# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Tests for loading and validating SARIF files."""

from __future__ import annotations

from pathlib import Path

import pytest
from conftest import BASE, SCHEMA, make_result, make_sarif, write_json

from cleansarif.core.cancellation import CancellationToken
from cleansarif.core.exceptions import (
    FileAccessError,
    OperationCancelled,
    ParseError,
    SchemaError,
    StructureError,
)
from cleansarif.sarif.loader import compute_base, load_document

# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------


class TestLoadFailures:
    def test_nonexistent_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileAccessError):
            load_document(tmp_path / "Nonexistent.sarif")

    def test_not_json(self, fixtures_dir: Path) -> None:
        with pytest.raises(ParseError):
            load_document(fixtures_dir / "not_json.sarif")

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "binary.sarif"
        path.write_bytes(b'{"$schema": "\xff\xfe"}')
        with pytest.raises(ParseError):
            load_document(path)

    def test_no_schema(self, fixtures_dir: Path) -> None:
        with pytest.raises(SchemaError, match="no \\$schema"):
            load_document(fixtures_dir / "no_schema.sarif")

    def test_not_sarif_schema(self, fixtures_dir: Path) -> None:
        with pytest.raises(SchemaError, match="not SARIF"):
            load_document(fixtures_dir / "not_sarif.sarif")

    def test_schema_not_a_string(self, tmp_path: Path) -> None:
        path = write_json(tmp_path / "x.sarif", {"$schema": ["sarif"], "runs": []})
        with pytest.raises(SchemaError):
            load_document(path)

    @pytest.mark.parametrize("top", [[{"$schema": "sarif"}], None, 42, "sarif"])
    def test_top_level_not_an_object(self, tmp_path: Path, top: object) -> None:
        path = write_json(tmp_path / "x.sarif", top)
        with pytest.raises(SchemaError, match="no \\$schema"):
            load_document(path)

    def test_results_not_an_array(self, fixtures_dir: Path) -> None:
        with pytest.raises(StructureError, match="results"):
            load_document(fixtures_dir / "bad_results.sarif")

    @pytest.mark.parametrize("runs", [None, {}, [], ["not an object"]])
    def test_runs_malformed(self, tmp_path: Path, runs: object) -> None:
        tree: dict = {"$schema": SCHEMA}
        if runs is not None:
            tree["runs"] = runs
        path = write_json(tmp_path / "x.sarif", tree)
        with pytest.raises(StructureError):
            load_document(path)


# ---------------------------------------------------------------------------
# Successful loads
# ---------------------------------------------------------------------------


class TestLoad:
    def test_reference_base(self, reference_file: Path) -> None:
        document = load_document(reference_file)
        assert document.get_base() == "/home/jdoe/repo/"
        assert document.result_count == 12
        assert document.source == reference_file

    def test_empty_results_give_empty_base(self, empty_file: Path) -> None:
        assert load_document(empty_file).get_base() == ""

    def test_missing_results_key(self, tmp_path: Path) -> None:
        tree = {"$schema": SCHEMA, "runs": [{"tool": {"driver": {"name": "x"}}}]}
        document = load_document(write_json(tmp_path / "x.sarif", tree))
        assert document.result_count == 0
        assert document.get_base() == ""

    def test_character_wise_base(self, fixtures_dir: Path) -> None:
        document = load_document(fixtures_dir / "minimal.sarif")
        assert document.get_base() == "file:///work/pkg/a"

    def test_result_without_location_collapses_base(self, tmp_path: Path) -> None:
        results = [make_result("R1", BASE + "a.c"), {"ruleId": "R1"}]
        document = load_document(write_json(tmp_path / "x.sarif", make_sarif(results)))
        assert document.get_base() == ""


# ---------------------------------------------------------------------------
# Cancellation
# ---------------------------------------------------------------------------


class TestLoadCancellation:
    def test_cancel_before_fold(self, reference_file: Path) -> None:
        token = CancellationToken()
        token.cancel()
        with pytest.raises(OperationCancelled):
            load_document(reference_file, token)

    def test_cancel_mid_fold(self, reference_file: Path) -> None:
        polls = []

        def should_cancel() -> bool:
            polls.append(1)
            return len(polls) > 5

        with pytest.raises(OperationCancelled):
            load_document(reference_file, should_cancel)
        assert len(polls) == 6

    def test_polled_once_per_result(self) -> None:
        polls = []
        results = [make_result("R", BASE + f"f{i}.c") for i in range(4)]
        compute_base(results, lambda: polls.append(1) or False)
        assert len(polls) == 4
