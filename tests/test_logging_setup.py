# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

from gantt_sync.logging_setup import _ConsoleNoiseFilter, setup_logging


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


def test_console_filter_keeps_app_logs_and_quiets_third_parties() -> None:
    f = _ConsoleNoiseFilter()
    assert f.filter(_record("gantt_sync.tasks.reconciler", logging.DEBUG))
    assert not f.filter(_record("httpx", logging.INFO))
    assert f.filter(_record("httpx", logging.WARNING))
    assert not f.filter(_record("py.warnings", logging.WARNING))
    assert not f.filter(_record("asyncio", logging.WARNING))
    assert f.filter(_record("asyncio", logging.ERROR))


def test_setup_logging_writes_log_file(tmp_path: Path) -> None:
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        log_file = setup_logging(log_dir=tmp_path / "logs")
        logging.getLogger("gantt_sync.test").debug("hello file")
        for h in root.handlers:
            h.flush()
        assert log_file == tmp_path / "logs" / "gantt.log"
        assert "hello file" in log_file.read_text("utf-8")
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)
        logging.captureWarnings(False)


def test_console_filter_matches_whole_logger_name_segments() -> None:
    f = _ConsoleNoiseFilter()
    assert f.filter(_record("gantt_sync", logging.INFO))
    assert not f.filter(_record("gantt_sync_extras", logging.INFO))
    assert not f.filter(_record("httpcore.connection", logging.DEBUG))
    assert f.filter(_record("httpcore.connection", logging.WARNING))
