"""Tests for the base test session."""

from unittest.mock import AsyncMock, patch

from devicefarm.tractor.models.outcome import (
    DeviceJobResult,
    ExecutionResult,
    RunOutcome,
    RunStatus,
)
from devicefarm.tractor.models.run_request import RunRequest
from devicefarm.tractor.sessions.base import TestSession

RUN_ARN = "arn:aws:devicefarm:us-west-2:123456789012:run:project/run"


class PollingSession(TestSession):
    """Concrete implementation for testing."""

    def __init__(self) -> None:
        """Initialize session with mocks."""
        self.poll_status_mock = AsyncMock()

    async def execute(self, request: RunRequest) -> RunOutcome:  # pragma: no cover
        """Not used."""
        raise NotImplementedError

    async def poll_status(self, run_arn: str) -> tuple[bool, RunOutcome]:
        """Mock implementation."""
        result: tuple[bool, RunOutcome] = await self.poll_status_mock(run_arn)
        return result


async def test_wait_for_completion_immediate() -> None:
    """wait_for_completion returns immediately when the run is complete."""
    session = PollingSession()
    outcome = RunOutcome(arn=RUN_ARN, result=ExecutionResult.PASSED)
    session.poll_status_mock.return_value = (True, outcome)

    final_outcome = await session.wait_for_completion(RUN_ARN)

    assert final_outcome == outcome
    session.poll_status_mock.assert_called_once_with(RUN_ARN)


async def test_wait_for_completion_after_polling() -> None:
    """wait_for_completion sleeps between polls until the run completes."""
    session = PollingSession()
    running = RunOutcome(
        arn=RUN_ARN, status=RunStatus.RUNNING, result=ExecutionResult.PENDING
    )
    completed = RunOutcome(arn=RUN_ARN, result=ExecutionResult.FAILED)
    session.poll_status_mock.side_effect = [
        (False, running),
        (False, running),
        (True, completed),
    ]

    with patch("asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
        final_outcome = await session.wait_for_completion(RUN_ARN, poll_interval=12)

    assert final_outcome == completed
    assert session.poll_status_mock.call_count == 3
    assert mock_sleep.call_count == 2
    mock_sleep.assert_called_with(12)


def test_summarize_renders_device_table() -> None:
    """summarize renders the per-device results."""
    session = PollingSession()
    outcome = RunOutcome(
        arn=RUN_ARN,
        result=ExecutionResult.PASSED,
        jobs=(
            DeviceJobResult(
                device_name="Google Pixel 7", result=ExecutionResult.PASSED
            ),
        ),
    )

    assert "Google Pixel 7" in session.summarize(outcome)


def test_summarize_empty_without_jobs() -> None:
    """summarize returns an empty string when there is nothing to render."""
    session = PollingSession()
    outcome = RunOutcome(arn=RUN_ARN, result=ExecutionResult.ERRORED)

    assert session.summarize(outcome) == ""
