"""Error taxonomy for tractor runs."""

SETUP_FAILED_MESSAGE = "There was an error creating the tractor runner"
EXECUTION_FAILED_MESSAGE = "There was an error in the test execution"


class TractorError(Exception):
    """Base error carrying a message and the underlying cause."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        """Initialize error with message and optional cause."""
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        return self.message


class SetupError(TractorError):
    """The Device Farm session could not be created."""


class ExecutionError(TractorError):
    """Device Farm rejected or failed an upload, schedule or monitoring call."""


class EscalatedFailure(TractorError):
    """Fatal failure raised under the strict failure policy."""
