"""Progress and error sinks used by the orchestrator."""

import logging
from typing import Protocol

DEFAULT_LOGGER_NAME = "Device Farm Tractor"


class Reporter(Protocol):
    """Sink for progress messages and error entries."""

    def message(self, text: str) -> None:
        """Emit an informational message."""

    def error(self, text: str, cause: BaseException | None = None) -> None:
        """Emit a single error entry with an optional cause."""


class LoggingReporter:
    """Reporter backed by a standard library logger."""

    def __init__(self, name: str = DEFAULT_LOGGER_NAME) -> None:
        """Initialize reporter writing to the named logger."""
        self.logger = logging.getLogger(name)

    def message(self, text: str) -> None:
        """Emit an informational message."""
        self.logger.info(text)

    def error(self, text: str, cause: BaseException | None = None) -> None:
        """Emit an error entry, attaching the cause when present."""
        extra = {"cause": str(cause)} if cause is not None else {}
        self.logger.error(text, exc_info=cause, extra=extra)
