"""Tests for logging configuration."""

import logging

import pytest

from app_logging import configure_logging


@pytest.fixture
def app_logger():
    logger = logging.getLogger("calorie_tracker")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    logger.handlers.clear()
    yield logger
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]


def test_configure_logging_adds_single_handler(app_logger) -> None:
    configure_logging(logging.INFO)
    configure_logging(logging.DEBUG)

    assert len(app_logger.handlers) == 1
    assert app_logger.level == logging.DEBUG
    assert app_logger.propagate is False
