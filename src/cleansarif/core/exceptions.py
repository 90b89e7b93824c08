# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Custom exception hierarchy for cleansarif."""


class CleanSarifError(Exception):
    """Base exception for all cleansarif errors."""


class FileAccessError(CleanSarifError):
    """A file could not be read, written, or backed up."""


class ParseError(CleanSarifError):
    """File contents are not valid JSON."""


class SchemaError(CleanSarifError):
    """Missing or non-SARIF ``$schema`` marker."""


class StructureError(CleanSarifError):
    """An expected SARIF array or object is missing or has the wrong type."""


class PatternError(CleanSarifError):
    """Invalid regular expression supplied as a location filter."""


class OperationCancelled(CleanSarifError):
    """Cooperative cancellation was observed mid-operation."""


class NoDocumentError(CleanSarifError):
    """A session operation was issued before any document was loaded."""
