#!/usr/bin/env python3
import logging
import os

import pytest

from stat_engine.utils.logging_config import configure_logging, configure_logging_from_config, get_logger


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    level, handlers = root.level, root.handlers[:]
    yield root
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


def _own_handlers(root):
    return [h for h in root.handlers if getattr(h, "_stat_engine_handler", False)]


def test_get_logger_is_cached():
    assert get_logger("STATS") is get_logger("STATS")
    assert get_logger("STATS").name == "STATS"


def test_console_only_by_default(restore_root_logger):
    configure_logging(logging.WARNING)
    handlers = _own_handlers(restore_root_logger)
    assert len(handlers) == 1
    assert restore_root_logger.level == logging.WARNING


def test_reconfigure_replaces_handlers(restore_root_logger):
    configure_logging(logging.INFO)
    configure_logging(logging.INFO)
    assert len(_own_handlers(restore_root_logger)) == 1


def test_file_handlers(restore_root_logger, tmp_path):
    configure_logging(logging.DEBUG, log_directory=str(tmp_path), log_to_file=True)
    assert len(_own_handlers(restore_root_logger)) == 3
    assert any(name.startswith("error_") for name in os.listdir(tmp_path))


def test_configure_from_config(restore_root_logger, engine_config):
    engine_config.set("system.log_level", "debug")
    configure_logging_from_config()
    assert restore_root_logger.level == logging.DEBUG

    engine_config.set("system.log_level", "LOUD")
    configure_logging_from_config()
    assert restore_root_logger.level == logging.INFO
