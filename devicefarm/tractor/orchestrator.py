"""Orchestrator driving a single Device Farm test invocation."""

from collections.abc import Awaitable, Callable

from devicefarm.tractor.banner import render_banner
from devicefarm.tractor.errors import (
    EXECUTION_FAILED_MESSAGE,
    ExecutionError,
    SetupError,
)
from devicefarm.tractor.models.credentials import Credentials
from devicefarm.tractor.models.outcome import RunOutcome
from devicefarm.tractor.models.report import TerminalStatus, TractorReport
from devicefarm.tractor.models.run_request import RunRequest
from devicefarm.tractor.policy import decide, enforce
from devicefarm.tractor.reporter import Reporter
from devicefarm.tractor.result import Err, Result
from devicefarm.tractor.sessions.base import TestSession

SessionFactory = Callable[[Credentials], Awaitable[Result[TestSession, SetupError]]]

EXECUTION_COMPLETED_MESSAGE = "Test execution has been completed"
EXECUTION_SUCCEEDED_MESSAGE = "Test execution has successfully finished"


def unsuccessful_result_message(outcome: RunOutcome) -> str:
    """Message reported when a run completed without passing."""
    return f"Tests result was not success - actual result = {outcome.result.value}"


class TractorOrchestrator:
    """Creates a session, executes one run and applies the failure policy.

    Session creation failures, execution failures and unsuccessful results all
    go through the same policy: strict mode raises EscalatedFailure, lenient
    mode reports a single error entry and returns a terminal report.
    """

    def __init__(
        self,
        session_factory: SessionFactory,
        reporter: Reporter,
        strict: bool = True,
    ) -> None:
        """Initialize orchestrator with its collaborators and failure policy."""
        self.session_factory = session_factory
        self.reporter = reporter
        self.strict = strict

    async def run(self, credentials: Credentials, request: RunRequest) -> TractorReport:
        """Run the tests described by the request.

        Raises:
            EscalatedFailure: In strict mode, on the first failure

        """
        self.reporter.message(render_banner())

        created = await self.session_factory(credentials)
        if isinstance(created, Err):
            error = created.error
            self._apply_policy(error.message, error.cause)
            return TractorReport(status=TerminalStatus.SKIPPED, message=error.message)

        session = created.value
        try:
            outcome = await session.execute(request)
        except ExecutionError as e:
            return self._fail(e.message, e.cause)
        except Exception as e:
            return self._fail(EXECUTION_FAILED_MESSAGE, e)

        self.reporter.message(EXECUTION_COMPLETED_MESSAGE)
        summary = session.summarize(outcome)
        if summary:
            self.reporter.message("\r\n" + summary)

        if not outcome.is_success:
            return self._fail(unsuccessful_result_message(outcome), None, outcome)

        self.reporter.message(EXECUTION_SUCCEEDED_MESSAGE)
        return TractorReport(status=TerminalStatus.PASSED, outcome=outcome)

    def _fail(
        self,
        message: str,
        cause: BaseException | None,
        outcome: RunOutcome | None = None,
    ) -> TractorReport:
        self._apply_policy(message, cause)
        return TractorReport(
            status=TerminalStatus.REPORTED, outcome=outcome, message=message
        )

    def _apply_policy(self, message: str, cause: BaseException | None) -> None:
        enforce(decide(self.strict, message, cause), self.reporter)
