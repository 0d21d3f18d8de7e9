"""
Tests for shared logging helpers.
"""
import sys
from unittest.mock import Mock, patch

from cyclephase.utils.logging import (
    SingleLineLogger,
    create_logger,
    format_exception,
    log_exception
)

def test_format_exception_single_line():
    try:
        raise ValueError("bad cycle")
    except ValueError:
        formatted = format_exception(sys.exc_info())

    assert "\n" not in formatted
    assert "ValueError: bad cycle" in formatted
    assert " | " in formatted

def test_format_exception_without_exception():
    assert format_exception(None) is None

def test_log_exception_adds_trace():
    logger = Mock()
    try:
        raise KeyError("user_id")
    except KeyError:
        log_exception(logger, "Lookup failed", extra={"user_id": "123"})

    message = logger.error.call_args.args[0]
    extra = logger.error.call_args.kwargs["extra"]
    assert message == "Lookup failed"
    assert extra["user_id"] == "123"
    assert "KeyError" in extra["exception"]

def test_format_exception_outside_handler():
    assert format_exception(True) is None

def test_log_exception_keeps_caller_extra():
    logger = Mock()
    extra = {"user_id": "123"}
    try:
        raise KeyError("user_id")
    except KeyError:
        log_exception(logger, "Lookup failed", extra=extra)

    assert extra == {"user_id": "123"}

def test_single_line_logger_exception_folds_trace():
    service_logger = create_logger("cycle_phase_test")
    with patch("aws_lambda_powertools.Logger.exception") as parent:
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            service_logger.exception("Request failed", extra={"user_id": "123"})

    kwargs = parent.call_args.kwargs
    assert isinstance(service_logger, SingleLineLogger)
    assert kwargs["exc_info"] is False
    assert kwargs["extra"]["user_id"] == "123"
    assert "RuntimeError: boom" in kwargs["extra"]["exception"]
    assert "\n" not in kwargs["extra"]["exception"]
