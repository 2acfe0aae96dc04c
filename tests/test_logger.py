#!/usr/bin/env python3
"""Unit tests for VaultLogger."""

import pytest

from vault.utilities.logger import LogLevel, VaultLogger


@pytest.fixture
def console_logger():
    saved = (VaultLogger.LEVEL, VaultLogger.PRINT_TO_CONSOLE,
             VaultLogger.WRITE_TO_FILE, VaultLogger.LOG_FILE_PATH)
    VaultLogger.PRINT_TO_CONSOLE = True
    yield VaultLogger
    (VaultLogger.LEVEL, VaultLogger.PRINT_TO_CONSOLE,
     VaultLogger.WRITE_TO_FILE, VaultLogger.LOG_FILE_PATH) = saved


def test_level_from_name():
    assert LogLevel.from_name("debug") == LogLevel.DEBUG
    assert LogLevel.from_name("WARNING") == LogLevel.WARNING
    with pytest.raises(ValueError):
        LogLevel.from_name("verbose")


def test_messages_below_level_are_filtered(console_logger, capsys):
    console_logger.set_level("warning")
    console_logger.info("TEST", "hidden message")
    console_logger.error("TEST", "visible message")

    out = capsys.readouterr().out
    assert "hidden message" not in out
    assert "visible message" in out
    assert "[!ERR]" in out
    assert "[!ERR][TEST] visible message" in out


def test_short_module_tag_is_padded(console_logger, capsys):
    console_logger.set_level(LogLevel.DEBUG)
    console_logger.debug("EV", "drag")
    assert "[DBUG][EV  ] drag" in capsys.readouterr().out


def test_file_logging(console_logger, tmp_path):
    path = tmp_path / "syslog.txt"
    console_logger.PRINT_TO_CONSOLE = False
    console_logger.set_level(LogLevel.INFO)
    console_logger.enable_file_logging(True, str(path))
    console_logger.note("VALT", "Vault opened")

    assert "Vault opened" in path.read_text(encoding="utf-8")


def test_unwritable_log_file_does_not_raise(console_logger, tmp_path, capsys):
    console_logger.set_level(LogLevel.INFO)
    console_logger.enable_file_logging(True, str(tmp_path / "missing" / "log.txt"))
    console_logger.info("VALT", "still running")
    assert "Logger OS Error" in capsys.readouterr().out
