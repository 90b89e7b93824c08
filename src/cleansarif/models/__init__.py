# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Data models for cleansarif."""

from cleansarif.models.filterset import FileFilter, FilterSet, RuleFilter
from cleansarif.models.summary import DocumentSummary, RuleSummary

__all__ = [
    "DocumentSummary",
    "FileFilter",
    "FilterSet",
    "RuleFilter",
    "RuleSummary",
]
