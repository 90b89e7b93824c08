# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Read-only summaries of a loaded SARIF document."""

from __future__ import annotations

from pydantic import BaseModel, Field


class RuleSummary(BaseModel):
    """A rule, its help text, and how many results report it."""

    id: str
    help_text: str = ""
    count: int = 0


class DocumentSummary(BaseModel):
    """What a caller needs to populate its view after a load."""

    source: str = ""
    base: str = ""
    override_base: str | None = None
    result_count: int = 0
    rules: list[RuleSummary] = Field(default_factory=list)
    files: list[str] = Field(default_factory=list)
    suppressed_rules: list[str] = Field(default_factory=list)
    location_filters: list[str] = Field(default_factory=list)
