# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""SARIF document loading, filtering and export."""
