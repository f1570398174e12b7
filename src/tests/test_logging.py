"""
Tests for structured logging helpers.
"""

import io
import json
import logging

import pytest

from sofia.utils.logging import JsonFormatter, configure_logging


def test_json_formatter_merges_extra():
    record = logging.LogRecord(
        "sofia.test", logging.INFO, __file__, 1, "Read %d rows", (3,), None
    )
    record.method = "effEdepP"
    payload = json.loads(JsonFormatter().format(record))
    assert payload["level"] == "INFO"
    assert payload["logger"] == "sofia.test"
    assert payload["msg"] == "Read 3 rows"
    assert payload["method"] == "effEdepP"
    assert "args" not in payload


def test_configure_logging_json():
    stream = io.StringIO()
    configure_logging("INFO", json_format=True, stream=stream)
    logging.getLogger("sofia.data.reader").info("hello", extra={"rows": 2})

    payload = json.loads(stream.getvalue().strip())
    assert payload["msg"] == "hello"
    assert payload["rows"] == 2


def test_configure_logging_replaces_handler():
    configure_logging("INFO")
    logger = configure_logging("DEBUG")
    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG


def test_configure_logging_level_filter():
    stream = io.StringIO()
    configure_logging("WARNING", stream=stream)
    logging.getLogger("sofia.analysis").info("quiet")
    assert stream.getvalue() == ""


def test_configure_logging_unknown_level():
    with pytest.raises(ValueError):
        configure_logging("LOUD")
