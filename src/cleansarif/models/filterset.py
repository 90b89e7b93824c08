# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Saved filter sets: suppressed rules, location filters, and base path.

Filter sets are stored as JSON with a format-version envelope::

    {
      "fileFormatMajorVersion": 1,
      "fileFormatMinorVersion": 0,
      "basePath": "/src/",
      "ruleFilters": [{"rule": "V008", "note": "noisy"}],
      "fileFilters": [{"regex": "3rdParty/", "note": "vendored"}]
    }

Readers accept any minor version of a known major version.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from cleansarif.core.constants import FILTER_SET_MAJOR_VERSION, FILTER_SET_MINOR_VERSION
from cleansarif.core.exceptions import FileAccessError, ParseError, SchemaError, StructureError


class RuleFilter(BaseModel):
    rule: str
    note: str = ""


class FileFilter(BaseModel):
    regex: str
    note: str = ""


class FilterSet(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    file_format_major_version: int = Field(
        default=FILTER_SET_MAJOR_VERSION, alias="fileFormatMajorVersion"
    )
    file_format_minor_version: int = Field(
        default=FILTER_SET_MINOR_VERSION, alias="fileFormatMinorVersion"
    )
    base_path: str | None = Field(default=None, alias="basePath")
    rule_filters: list[RuleFilter] = Field(default_factory=list, alias="ruleFilters")
    file_filters: list[FileFilter] = Field(default_factory=list, alias="fileFilters")

    def to_json(self, indent: int | None = 2) -> str:
        data = self.model_dump(by_alias=True, exclude_none=True)
        return json.dumps(data, indent=indent, ensure_ascii=False)


def parse_filter_set(text: str) -> FilterSet:
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ParseError(f"Filter set is not valid JSON: {exc}") from exc
    if not isinstance(raw, dict):
        raise StructureError("Filter set must be a JSON object")
    major = raw.get("fileFormatMajorVersion")
    if major != FILTER_SET_MAJOR_VERSION:
        raise SchemaError(
            f"Unsupported filter set format version {major!r} "
            f"(expected {FILTER_SET_MAJOR_VERSION})"
        )
    try:
        return FilterSet.model_validate(raw)
    except ValidationError as exc:
        raise StructureError(f"Malformed filter set: {exc}") from exc


def load_filter_set(path: str | Path, *, encoding: str = "utf-8") -> FilterSet:
    try:
        text = Path(path).read_text(encoding=encoding)
    except OSError as exc:
        raise FileAccessError(f"Unable to open {path}: {exc.strerror or exc}") from exc
    except UnicodeDecodeError as exc:
        raise ParseError(f"Filter set is not valid {encoding} text: {exc}") from exc
    return parse_filter_set(text)


def save_filter_set(
    path: str | Path,
    filter_set: FilterSet,
    *,
    indent: int | None = 2,
    encoding: str = "utf-8",
) -> None:
    try:
        data = (filter_set.to_json(indent=indent) + "\n").encode(encoding)
    except UnicodeEncodeError as exc:
        raise FileAccessError(f"Filter set cannot be encoded as {encoding}: {exc}") from exc
    try:
        Path(path).write_bytes(data)
    except OSError as exc:
        raise FileAccessError(f"Unable to write {path}: {exc.strerror or exc}") from exc
