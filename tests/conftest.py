"""Shared fixtures for autodefault tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest
import structlog

from autodefault.logging import LIBRARY_LOGGER_NAME, get_logging_settings


@pytest.fixture()
def library_logger() -> Iterator[logging.Logger]:
    """The ``autodefault`` logger, restored to its pristine state afterwards."""
    logger = logging.getLogger(LIBRARY_LOGGER_NAME)
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield logger
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
    logger.setLevel(level)
    logger.propagate = propagate
    structlog.reset_defaults()
    get_logging_settings.cache_clear()
