"""Models for the terminal report of an invocation."""

from enum import Enum

from pydantic import BaseModel, Field

from devicefarm.tractor.models.outcome import RunOutcome


class TerminalStatus(str, Enum):
    """How an invocation that did not abort ended."""

    PASSED = "passed"
    REPORTED = "reported"
    SKIPPED = "skipped"


class TractorReport(BaseModel):
    """Terminal status of an invocation and the outcome, if one was obtained."""

    status: TerminalStatus = Field(..., description="Terminal status")
    outcome: RunOutcome | None = Field(default=None, description="Run outcome")
    message: str | None = Field(
        default=None, description="Reported error message, if any"
    )
