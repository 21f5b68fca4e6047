"""Tests for logging setup and structured events."""
import json
import logging

import pytest
from pythonjsonlogger import jsonlogger

from remote_signer.logging_config import configure_logging
from remote_signer.services.events import EventType, log_security_event, log_transaction_event


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def _flush():
    for handler in logging.getLogger().handlers:
        handler.flush()


def _read_json_lines(path):
    return [json.loads(line) for line in path.read_text().splitlines()]


def test_event_fields_written_as_top_level_keys(tmp_path, restore_root_logger):
    configure_logging("debug", str(tmp_path))

    log_transaction_event(137, "0xabc", EventType.DENIED, level=logging.ERROR, reasons=["R1: x"])
    _flush()

    record = _read_json_lines(tmp_path / "error.log")[-1]
    assert record["chainId"] == 137
    assert record["safeTxHash"] == "0xabc"
    assert record["event"] == "denied"
    assert record["reasons"] == ["R1: x"]
    assert record["levelname"] == "ERROR"
    assert record["name"] == "remote_signer.events"


def test_error_file_only_receives_errors(tmp_path, restore_root_logger):
    configure_logging("info", str(tmp_path))

    log_security_event("transaction_denied", chainId=1, rules=["SAFE_THRESHOLD_CHANGE"])
    _flush()

    combined = _read_json_lines(tmp_path / "combined.log")
    assert combined[-1]["category"] == "security"
    assert combined[-1]["rules"] == ["SAFE_THRESHOLD_CHANGE"]
    assert (tmp_path / "error.log").read_text() == ""


def test_exception_traceback_logged(tmp_path, restore_root_logger):
    configure_logging("info", str(tmp_path))
    logger = logging.getLogger("remote_signer.test")

    try:
        raise ValueError("bad")
    except ValueError:
        logger.error("failed", exc_info=True)
    _flush()

    record = _read_json_lines(tmp_path / "error.log")[-1]
    assert record["message"] == "failed"
    assert "ValueError: bad" in record["exc_info"]


def test_no_file_handlers_without_log_dir(restore_root_logger):
    configure_logging("warn", "")

    root = logging.getLogger()
    assert root.level == logging.WARNING
    assert not any(isinstance(h.formatter, jsonlogger.JsonFormatter) for h in root.handlers)
