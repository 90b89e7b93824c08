# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""SARIF field names, defaults, and filter-set format constants."""

DEFAULT_SARIF_VERSION = "2.1.0"
SCHEMA_MARKER = "sarif"

# Top-level and run-level keys the engine treats specially
SCHEMA_KEY = "$schema"
VERSION_KEY = "version"
RUNS_KEY = "runs"
RESULTS_KEY = "results"
ARTIFACTS_KEY = "artifacts"
URI_KEY = "uri"

# Rule text lookup order
RULE_TEXT_FIELDS = ("shortDescription", "fullDescription", "help")

FILTER_SET_MAJOR_VERSION = 1
FILTER_SET_MINOR_VERSION = 0
