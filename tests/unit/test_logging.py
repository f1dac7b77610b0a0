"""
Unit tests for structured log formatting
"""
import json
import logging
import sys

from readnlearn.core.logging import JsonFormatter, configure_logging


def test_json_formatter_includes_extras():
    """Test that the JSON formatter keeps extra fields and drops raw args"""
    logger = logging.getLogger("readnlearn.test")
    record = logger.makeRecord(
        logger.name, logging.INFO, __file__, 1, "Saved phrase %s", ("p1",), None,
        extra={"phrase_id": "p1", "content_hash": "2p"},
    )
    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "Saved phrase p1"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "readnlearn.test"
    assert payload["phrase_id"] == "p1"
    assert payload["content_hash"] == "2p"
    assert "msg" not in payload and "args" not in payload


def test_json_formatter_serializes_exceptions():
    """Test that exceptions are rendered into the JSON record"""
    logger = logging.getLogger("readnlearn.test")
    try:
        raise ValueError("boom")
    except ValueError:
        record = logger.makeRecord(
            logger.name, logging.ERROR, __file__, 1, "failed", (), sys.exc_info()
        )
    payload = json.loads(JsonFormatter().format(record))
    assert "ValueError: boom" in payload["exc_info"]


def test_configure_logging_only_adjusts_level_when_configured():
    """Test that an already configured root logger only gets its level changed"""
    root = logging.getLogger()
    handlers = list(root.handlers)
    previous = root.level
    try:
        root.addHandler(logging.NullHandler())
        before = len(root.handlers)
        configure_logging(level="DEBUG", json_format=True)
        assert len(root.handlers) == before
        assert root.level == logging.DEBUG
    finally:
        root.handlers = handlers
        root.setLevel(previous)
