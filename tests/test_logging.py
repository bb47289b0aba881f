import json
import logging
import sys

from doc_advisor.logging import JsonFormatter, configure_logging, get_logger, get_run_id


def test_json_formatter_includes_extra_fields():
    record = logging.LogRecord("doc_advisor.test", logging.INFO, __file__, 1, "Source selected", None, None)
    record.choice = "web_search"
    entry = json.loads(JsonFormatter().format(record))
    assert entry["level"] == "INFO"
    assert entry["message"] == "Source selected"
    assert entry["choice"] == "web_search"
    assert "msg" not in entry


def test_run_id_is_unique():
    assert get_run_id() != get_run_id()


def test_logs_go_to_stderr_not_stdout(capsys):
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        configure_logging("INFO")
        handler = root.handlers[0]
        assert handler.stream is sys.stderr
        get_logger("doc_advisor.test").info("Research finished", extra={"outcome": "web_search"})
        captured = capsys.readouterr()
        assert captured.out == ""
        assert json.loads(captured.err.strip().splitlines()[-1])["outcome"] == "web_search"
    finally:
        root.handlers = saved_handlers
        root.setLevel(saved_level)
