"""Unit tests for the library logging helpers."""

from __future__ import annotations

import io
import logging

import pytest

from murajaa._logging import (
    configure_logging,
    disable_logging,
    enable_debug_logging,
    log_refinement_fallback,
    log_warning,
)


@pytest.fixture
def murajaa_logger():
    """The library logger, restored after the test."""
    logger = logging.getLogger("murajaa")
    handlers, level = list(logger.handlers), logger.level
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)


def test_configure_logging_writes_to_stream(murajaa_logger) -> None:
    stream = io.StringIO()

    logger = configure_logging(level=logging.WARNING, format_string="%(levelname)s %(message)s", stream=stream)
    log_warning("Ignoring invalid token usage", page=3)

    assert logger is murajaa_logger
    assert len(murajaa_logger.handlers) == 1
    assert stream.getvalue() == "WARNING Ignoring invalid token usage (page=3)\n"


def test_configure_logging_filters_below_level(murajaa_logger) -> None:
    stream = io.StringIO()

    configure_logging(level=logging.ERROR, stream=stream)
    log_warning("not shown")

    assert stream.getvalue() == ""


def test_enable_debug_logging_sets_debug_level(murajaa_logger) -> None:
    enable_debug_logging()

    assert murajaa_logger.level == logging.DEBUG
    assert murajaa_logger.handlers[0].level == logging.DEBUG


def test_disable_logging_leaves_only_a_null_handler(murajaa_logger) -> None:
    configure_logging(stream=io.StringIO())

    disable_logging()

    assert len(murajaa_logger.handlers) == 1
    assert isinstance(murajaa_logger.handlers[0], logging.NullHandler)


def test_refinement_fallback_is_a_warning(murajaa_logger, caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="murajaa"):
        log_refinement_fallback("API key not configured", "unavailable")

    assert caplog.records[0].levelname == "WARNING"
    assert "API key not configured" in caplog.text
