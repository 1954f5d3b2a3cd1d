# src/category_api/tests/test_logging/test_formatters.py
import json
import sys
import logging

from category_api.core.logging.formatters import ColorFormatter, JsonFormatter


def make_record():
    return logging.LogRecord("category_api", logging.INFO, __file__, 10, "hello %s", ("tester",), None)


def test_json_formatter_basic_fields():
    rec = make_record()
    rec.category_id = 7
    rec.request_id = "req-1"

    data = json.loads(JsonFormatter(env="testing", service="svc").format(rec))

    assert data["message"] == "hello tester"
    assert data["level"] == "INFO"
    assert data["service"] == "svc"
    assert data["env"] == "testing"
    assert "timestamp" in data
    assert data["request_id"] == "req-1"
    assert data["category_id"] == 7
    assert "version" in data


def test_json_formatter_non_serializable_extra():
    rec = make_record()

    class X:
        def __repr__(self):
            return "<X>"

    rec.obj = X()
    data = json.loads(JsonFormatter(env="dev", service="svc").format(rec))
    assert isinstance(data["obj"], str)


def test_json_formatter_includes_exception():
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        rec = logging.LogRecord("category_api", logging.ERROR, __file__, 10, "failed", (), sys.exc_info())

    data = json.loads(JsonFormatter(env="dev").format(rec))
    assert "RuntimeError: boom" in data["exc_info"]


def test_color_formatter_appends_extras():
    rec = make_record()
    rec.request_id = "req-2"
    rec.category_id = 3

    line = ColorFormatter().format(rec)

    assert "hello tester" in line
    assert "req-2" in line
    assert "category_id=3" in line
