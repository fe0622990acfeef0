"""Unit coverage for structured logging utilities."""

from __future__ import annotations

import json
import logging

from crux_plugins.base.log_support import JsonFormatter
from crux_plugins.base.logging import _FILE_HANDLER_ATTR, LogContext, configure_logger, get_logger, log_event


def test_get_logger_env_overrides_level(monkeypatch, capsys):
    monkeypatch.setenv("CRUX_PLUGINS_LOG_LEVEL", "ERROR")
    logger = get_logger(name="plugins.test", json_mode=True, level=logging.DEBUG)
    logger.info("hello")
    assert capsys.readouterr().err == ""  # nosec B101
    logger.error("fail")
    data = json.loads(capsys.readouterr().err.strip())
    assert data["level"] == "ERROR"  # nosec B101
    assert data["msg"] == "fail"  # nosec B101


def test_log_event_hoists_payload_and_drops_none(monkeypatch, capsys):
    monkeypatch.delenv("CRUX_PLUGINS_LOG_LEVEL", raising=False)
    logger = get_logger(name="plugins.test2", json_mode=True)
    ctx = LogContext(contract="0x1", caller="0x2", tx_id=7, plugin_id=0, extra={"note": None})
    log_event(logger, "registry.plugin_added", ctx, plugin_address="0x3", skipped=None)
    data = json.loads(capsys.readouterr().err.strip())
    assert data["event"] == "registry.plugin_added"  # nosec B101
    assert data["tx_id"] == 7  # nosec B101
    assert data["plugin_address"] == "0x3"  # nosec B101
    assert "skipped" not in data  # nosec B101
    assert "note" not in data  # nosec B101


def test_log_event_respects_level(monkeypatch, capsys):
    monkeypatch.setenv("CRUX_PLUGINS_LOG_LEVEL", "INFO")
    logger = get_logger(name="plugins.test3")
    log_event(logger, "tx.committed", level=logging.DEBUG)
    assert capsys.readouterr().err == ""  # nosec B101


def test_json_formatter_hoists_json_message() -> None:
    formatter = JsonFormatter()
    record = logging.LogRecord(
        name="plugins.test.json",
        level=logging.INFO,
        pathname=__file__,
        lineno=0,
        msg=json.dumps({"event": "registry.plugin_executed", "result": 10}),
        args=(),
        exc_info=None,
    )
    payload = json.loads(formatter.format(record))
    assert payload["result"] == 10  # nosec B101
    assert "msg" not in payload  # nosec B101


def test_foreign_names_are_nested_under_base_logger():
    logger = get_logger(name="elsewhere")
    assert logger.name == "plugins.elsewhere"  # nosec B101
    assert logger.propagate is True  # nosec B101


def test_child_logger_uses_parent_handler_without_duplicates(monkeypatch, capsys):
    monkeypatch.delenv("CRUX_PLUGINS_LOG_LEVEL", raising=False)
    logger = get_logger(name="plugins.test.child", json_mode=False)
    assert logger.handlers == []  # nosec B101
    logger.warning("once")
    err = capsys.readouterr().err
    assert err.count("once") == 1  # nosec B101


def test_configure_logger_attaches_and_removes_file_handler(tmp_path):
    target = tmp_path / "logs" / "plugins.log"
    logger = configure_logger(level="WARNING", file_path=str(target))
    try:
        assert logger.level == logging.WARNING  # nosec B101
        files = [h for h in logger.handlers if getattr(h, "baseFilename", None) == str(target)]
        assert len(files) == 1  # nosec B101
        logger.warning("to file")
        for h in files:
            h.flush()
        assert "to file" in target.read_text(encoding="utf-8")  # nosec B101
    finally:
        logger = configure_logger(level="INFO", file_path=None)
    # only handlers this package attached count; pytest may add its own
    assert not any(getattr(h, _FILE_HANDLER_ATTR, False) for h in logger.handlers)  # nosec B101
