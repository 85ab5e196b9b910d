"""Tests for logging configuration."""

from __future__ import annotations

import logging

import pytest
import structlog

from rw_common.logging import configure_logging


pytestmark = pytest.mark.unit_common


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_configure_logging_installs_structlog_formatter(restore_root_logger, tmp_path) -> None:
    log_file = tmp_path / "rw.log"
    configure_logging(level="warning", log_file=str(log_file), json=True, force=True)
    root = restore_root_logger
    assert root.level == logging.WARNING
    assert len(root.handlers) == 2
    for handler in root.handlers:
        assert isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter)

    logging.getLogger("rw_model.table").warning("Reconciler exited")
    for handler in root.handlers:
        handler.flush()
    assert '"event": "Reconciler exited"' in log_file.read_text()


def test_env_level_used_when_no_argument(restore_root_logger, monkeypatch) -> None:
    monkeypatch.setenv("RW_LOG_LEVEL", "DEBUG")
    configure_logging(force=True)
    assert restore_root_logger.level == logging.DEBUG
