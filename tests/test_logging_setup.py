"""Tests for structlog configuration."""

from __future__ import annotations

import structlog

from piperun.core import logging_setup


class TestLoggingSetup:
    def test_configure_is_idempotent(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logging_setup, "_configured", False)
        monkeypatch.setattr(structlog, "configure", lambda **kwargs: calls.append(kwargs))
        logging_setup.configure_logging("DEBUG", json_output=True)
        logging_setup.configure_logging("INFO")
        assert len(calls) == 1
        assert isinstance(calls[0]["processors"][-1], structlog.processors.JSONRenderer)

    def test_get_logger_binds(self):
        log = logging_setup.get_logger("piperun.test")
        assert hasattr(log, "info")
