"""Data models for credentials, run requests, outcomes and reports."""

from devicefarm.tractor.models.credentials import Credentials
from devicefarm.tractor.models.outcome import (
    Counters,
    DeviceJobResult,
    ExecutionResult,
    RunOutcome,
    RunStatus,
)
from devicefarm.tractor.models.report import TerminalStatus, TractorReport
from devicefarm.tractor.models.run_request import RunRequest

__all__ = [
    "Counters",
    "Credentials",
    "DeviceJobResult",
    "ExecutionResult",
    "RunOutcome",
    "RunRequest",
    "RunStatus",
    "TerminalStatus",
    "TractorReport",
]
