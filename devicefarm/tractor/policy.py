"""Strict/lenient failure policy shared by every failure point of a run."""

from dataclasses import dataclass

from devicefarm.tractor.errors import EscalatedFailure
from devicefarm.tractor.reporter import Reporter


@dataclass(frozen=True)
class Escalate:
    """Abort the invocation with a fatal error."""

    message: str
    cause: BaseException | None = None


@dataclass(frozen=True)
class Report:
    """Log the failure once and let the invocation finish."""

    message: str
    cause: BaseException | None = None


Decision = Escalate | Report


def decide(strict: bool, message: str, cause: BaseException | None = None) -> Decision:
    """Choose between escalating and reporting a failure.

    Args:
        strict: Whether the strict failure policy is active
        message: Message describing the failure
        cause: Underlying error, if any

    Returns:
        Escalate in strict mode, Report otherwise

    """
    if strict:
        return Escalate(message, cause)
    return Report(message, cause)


def enforce(decision: Decision, reporter: Reporter) -> None:
    """Carry out a decision.

    Raises:
        EscalatedFailure: For an Escalate decision, chained to its cause

    """
    if isinstance(decision, Escalate):
        raise EscalatedFailure(decision.message, decision.cause) from decision.cause
    reporter.error(decision.message, decision.cause)
