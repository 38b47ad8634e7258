import io
import json
import logging

import pytest
import structlog

from scrubby.logging import LEVEL_ENV, configure_logging, resolve_level


@pytest.fixture
def log_stream():
    stream = io.StringIO()
    yield stream
    logging.basicConfig(force=True, handlers=[logging.NullHandler()])
    structlog.reset_defaults()


def test_records_are_json_with_component(log_stream):
    configure_logging("info", stream=log_stream)
    structlog.get_logger("scrubby.demo").info("demo.event", count=2)
    record = json.loads(log_stream.getvalue().strip().splitlines()[-1])
    assert record["msg"] == "demo.event"
    assert record["component"] == "scrubby.demo"
    assert record["level"] == "info"
    assert record["count"] == 2
    assert "ts" in record


def test_string_context_is_sanitized(log_stream):
    configure_logging("info", stream=log_stream)
    structlog.get_logger("scrubby.demo").warning("demo.leak", detail="copied a@b.com from 10.0.0.5")
    record = json.loads(log_stream.getvalue().strip().splitlines()[-1])
    assert record["detail"] == "copied <EMAIL> from <IP>"


def test_default_level_filters_info(log_stream, monkeypatch):
    monkeypatch.delenv(LEVEL_ENV, raising=False)
    configure_logging(stream=log_stream)
    structlog.get_logger("scrubby.quiet").info("hidden")
    assert log_stream.getvalue() == ""


def test_resolve_level(monkeypatch):
    monkeypatch.delenv(LEVEL_ENV, raising=False)
    assert resolve_level() == logging.WARNING
    monkeypatch.setenv(LEVEL_ENV, "DEBUG")
    assert resolve_level() == logging.DEBUG
    assert resolve_level("error") == logging.ERROR
    assert resolve_level("bogus") == logging.WARNING
