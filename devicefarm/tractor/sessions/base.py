"""Abstract base class for test execution sessions."""

import asyncio
from abc import ABC, abstractmethod

from devicefarm.tractor.models.outcome import RunOutcome
from devicefarm.tractor.models.run_request import RunRequest
from devicefarm.tractor.summary import render_device_table


class TestSession(ABC):
    """Abstract base for remote test execution sessions."""

    __test__ = False

    @abstractmethod
    async def execute(self, request: RunRequest) -> RunOutcome:
        """Upload artifacts, schedule a run and wait for its terminal outcome.

        Args:
            request: Run parameters

        Returns:
            Terminal outcome of the run

        Raises:
            ExecutionError: If an upload, schedule or monitoring call fails

        """

    @abstractmethod
    async def poll_status(self, run_arn: str) -> tuple[bool, RunOutcome]:
        """Check if a run is complete and get its current outcome.

        Args:
            run_arn: Run identifier returned when scheduling

        Returns:
            Tuple of (is_complete, outcome)

        """

    async def wait_for_completion(
        self,
        run_arn: str,
        poll_interval: float = 30,
    ) -> RunOutcome:
        """Wait for a run to reach a terminal state.

        There is no timeout: the run lifecycle is bounded by Device Farm itself.

        Args:
            run_arn: Run identifier returned when scheduling
            poll_interval: Seconds between polls (default: 30)

        Returns:
            Terminal outcome

        """
        while True:
            is_complete, outcome = await self.poll_status(run_arn)

            if is_complete:
                return outcome

            await asyncio.sleep(poll_interval)

    def summarize(self, outcome: RunOutcome) -> str:
        """Render the per-device results of an outcome, empty when there are none."""
        return render_device_table(outcome)
