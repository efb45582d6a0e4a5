"""Tests for structlog configuration."""

import structlog

from nft_pnl.utils import logging as pnl_logging


def test_configure_logging_is_idempotent(monkeypatch):
    calls = []
    monkeypatch.setattr(pnl_logging, "_configured", False)
    monkeypatch.setattr(structlog, "configure", lambda **kw: calls.append(kw))

    pnl_logging.configure_logging("debug")
    pnl_logging.configure_logging("error")

    assert len(calls) == 1
    assert calls[0]["logger_factory"] is pnl_logging._stderr_logger


def test_logs_go_to_stderr(capsys):
    pnl_logging._stderr_logger().msg("hello")
    captured = capsys.readouterr()
    assert "hello" in captured.err
    assert captured.out == ""
