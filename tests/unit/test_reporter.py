"""Tests for the logging reporter."""

import logging

import pytest

from devicefarm.tractor.reporter import DEFAULT_LOGGER_NAME, LoggingReporter


def test_message_logs_info(caplog: pytest.LogCaptureFixture) -> None:
    """message writes an info record to the tractor logger."""
    reporter = LoggingReporter()

    with caplog.at_level(logging.INFO, logger=DEFAULT_LOGGER_NAME):
        reporter.message("Test execution has been completed")

    assert len(caplog.records) == 1
    record = caplog.records[0]
    assert record.name == DEFAULT_LOGGER_NAME
    assert record.levelno == logging.INFO
    assert record.getMessage() == "Test execution has been completed"


def test_error_attaches_cause(caplog: pytest.LogCaptureFixture) -> None:
    """error writes one error record carrying the cause."""
    reporter = LoggingReporter()
    cause = TimeoutError("upload timeout")

    with caplog.at_level(logging.INFO, logger=DEFAULT_LOGGER_NAME):
        reporter.error("There was an error uploading app.apk", cause)

    assert len(caplog.records) == 1
    record = caplog.records[0]
    assert record.levelno == logging.ERROR
    assert record.getMessage() == "There was an error uploading app.apk"
    assert record.exc_info is not None
    assert record.exc_info[1] is cause
    assert record.cause == "upload timeout"  # type: ignore[attr-defined]


def test_error_without_cause(caplog: pytest.LogCaptureFixture) -> None:
    """error without a cause has no exception info."""
    reporter = LoggingReporter("custom")

    with caplog.at_level(logging.INFO, logger="custom"):
        reporter.error("Tests result was not success - actual result = FAILED")

    assert len(caplog.records) == 1
    assert not caplog.records[0].exc_info
    assert not hasattr(caplog.records[0], "cause")
