# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""cleansarif - Filter, rebase, and re-export SARIF static-analysis results."""

__version__ = "0.1.0"

from cleansarif.core.cancellation import CancellationToken
from cleansarif.core.exceptions import (
    CleanSarifError,
    FileAccessError,
    NoDocumentError,
    OperationCancelled,
    ParseError,
    PatternError,
    SchemaError,
    StructureError,
)
from cleansarif.sarif.document import SarifDocument
from cleansarif.sarif.loader import load_document
from cleansarif.sarif.serializer import export_document
from cleansarif.session import CleanerSession

__all__ = [
    "CancellationToken",
    "CleanSarifError",
    "CleanerSession",
    "FileAccessError",
    "NoDocumentError",
    "OperationCancelled",
    "ParseError",
    "PatternError",
    "SarifDocument",
    "SchemaError",
    "StructureError",
    "__version__",
    "export_document",
    "load_document",
]
