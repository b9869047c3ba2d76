import json
import logging
import sys

from r2cli.common.logging import JsonFormatter, setup_logging


def _record(message: str, level: int = logging.ERROR) -> logging.LogRecord:
    return logging.LogRecord(
        name="r2cli.storage",
        level=level,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )


def test_json_formatter_emits_level_logger_and_message():
    payload = json.loads(JsonFormatter().format(_record("Error listing files")))
    assert payload == {
        "level": "ERROR",
        "logger": "r2cli.storage",
        "message": "Error listing files",
    }


def test_json_formatter_includes_traceback():
    try:
        raise RuntimeError("connection reset")
    except RuntimeError:
        record = _record("upload failed")
        record.exc_info = sys.exc_info()

    payload = json.loads(JsonFormatter().format(record))
    assert "RuntimeError: connection reset" in payload["exc_info"]


def test_json_formatter_ignores_extra_attributes():
    record = _record("uploaded")
    record.extra = {"key": "documents/a.pdf"}
    payload = json.loads(JsonFormatter().format(record))
    assert set(payload) == {"level", "logger", "message"}


def test_json_formatter_keeps_non_ascii():
    output = JsonFormatter().format(_record("文件 ✓"))
    assert "文件 ✓" in output


def test_setup_logging_plain_by_default():
    setup_logging()
    handler = logging.getLogger().handlers[-1]
    assert not isinstance(handler.formatter, JsonFormatter)
    assert handler.formatter._fmt == "%(levelname)s %(name)s: %(message)s"
    assert logging.getLogger("r2cli").level == logging.WARNING


def test_setup_logging_json_and_level():
    setup_logging("json", "debug")
    handler = logging.getLogger().handlers[-1]
    assert isinstance(handler.formatter, JsonFormatter)
    assert logging.getLogger("r2cli").level == logging.DEBUG
