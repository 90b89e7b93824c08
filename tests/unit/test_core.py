# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Tests for core utilities: settings, logging, and cancellation tokens."""

from __future__ import annotations

import json
import logging
import threading

import pytest
from pydantic import ValidationError

from cleansarif.core.cancellation import CancellationToken, never_cancel, raise_if_cancelled
from cleansarif.core.config import Settings, get_settings
from cleansarif.core.exceptions import CleanSarifError, OperationCancelled, PatternError
from cleansarif.core.logging import JsonFormatter, TextFormatter, setup_logging

# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


class TestSettings:
    def test_defaults(self) -> None:
        settings = get_settings()
        assert settings.default_sarif_version == "2.1.0"
        assert settings.json_indent == 2
        assert settings.backup_suffix == ".backup"
        assert settings.make_backup is True

    def test_env_overrides(self, monkeypatch) -> None:
        monkeypatch.setenv("CLEANSARIF_JSON_INDENT", "4")
        monkeypatch.setenv("CLEANSARIF_MAKE_BACKUP", "false")
        monkeypatch.setenv("CLEANSARIF_LOG_FORMAT", " JSON ")
        settings = get_settings()
        assert settings.json_indent == 4
        assert settings.make_backup is False
        assert settings.log_format == "json"

    def test_negative_indent_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(json_indent=-1)

    def test_unknown_encoding_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(encoding="no-such-codec")


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


def _record(msg: str, exc: BaseException | None = None) -> logging.LogRecord:
    exc_info = (type(exc), exc, None) if exc else None
    return logging.LogRecord("cleansarif.test", logging.INFO, __file__, 1, msg, (), exc_info)


class TestLogging:
    def test_json_formatter(self) -> None:
        entry = json.loads(JsonFormatter().format(_record("loaded 12 results")))
        assert entry["level"] == "INFO"
        assert entry["logger"] == "cleansarif.test"
        assert entry["message"] == "loaded 12 results"
        assert "exception" not in entry

    def test_json_formatter_exception(self) -> None:
        entry = json.loads(JsonFormatter().format(_record("boom", PatternError("bad regex"))))
        assert entry["exception"] == "bad regex"

    def test_text_formatter(self) -> None:
        line = TextFormatter().format(_record("hello"))
        assert "[INFO] cleansarif.test: hello" in line

    def test_setup_logging(self) -> None:
        setup_logging("debug", "json")
        root = logging.getLogger("cleansarif")
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)

        setup_logging("INFO", "text")
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, TextFormatter)


# ---------------------------------------------------------------------------
# Cancellation
# ---------------------------------------------------------------------------


class TestCancellationToken:
    def test_lifecycle(self) -> None:
        token = CancellationToken()
        assert not token() and not token.cancelled
        token.cancel()
        assert token() and token.cancelled
        token.reset()
        assert not token()

    def test_cancel_from_other_thread(self) -> None:
        token = CancellationToken()
        worker = threading.Thread(target=token.cancel)
        worker.start()
        worker.join()
        assert token.cancelled

    def test_raise_if_cancelled(self) -> None:
        raise_if_cancelled(never_cancel)
        with pytest.raises(OperationCancelled, match="during export"):
            raise_if_cancelled(lambda: True, "export")

    def test_errors_share_base(self) -> None:
        assert issubclass(OperationCancelled, CleanSarifError)
