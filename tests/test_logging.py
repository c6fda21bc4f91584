"""Unit tests for sleepcharts logging helpers."""

from __future__ import annotations

import logging
import sys

import pytest

from sleepcharts.utils.logging import LOGGER_NAME, configure_logging, get_logger


@pytest.fixture
def clean_logger():
    logger = logging.getLogger(LOGGER_NAME)
    saved_handlers = logger.handlers[:]
    saved_level = logger.level
    logger.handlers = []
    yield logger
    logger.handlers = saved_handlers
    logger.setLevel(saved_level)


def _stderr_handlers(logger):
    return [
        h for h in logger.handlers
        if isinstance(h, logging.StreamHandler) and h.stream is sys.stderr
    ]


def test_get_logger_default_is_package_logger():
    assert get_logger() is logging.getLogger("sleepcharts")
    assert get_logger("sleepcharts.aggregator").name == "sleepcharts.aggregator"


def test_configure_logging_adds_single_stderr_handler(clean_logger):
    configure_logging("DEBUG")
    configure_logging("DEBUG")
    assert len(_stderr_handlers(clean_logger)) == 1
    assert clean_logger.level == logging.DEBUG


def test_configure_logging_force_replaces_handlers(clean_logger):
    configure_logging("INFO")
    configure_logging("WARNING", force=True)
    assert len(clean_logger.handlers) == 1
    assert clean_logger.handlers[0].level == logging.WARNING


def test_configure_logging_reads_env(clean_logger, monkeypatch):
    monkeypatch.setenv("SLEEPCHARTS_LOG_LEVEL", "error")
    configure_logging()
    assert clean_logger.level == logging.ERROR


def test_configure_logging_does_not_touch_root(clean_logger):
    root_handlers = logging.getLogger().handlers[:]
    configure_logging("INFO")
    assert logging.getLogger().handlers == root_handlers
