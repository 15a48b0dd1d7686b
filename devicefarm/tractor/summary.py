"""Render per-device results of a run as a text table."""

from tabulate import tabulate

from devicefarm.tractor.models.outcome import RunOutcome

HEADERS = [
    "Device",
    "OS",
    "Result",
    "Total",
    "Passed",
    "Failed",
    "Errored",
    "Skipped",
    "Warned",
    "Stopped",
]


def render_device_table(outcome: RunOutcome) -> str:
    """Render the device results table of an outcome.

    Returns an empty string when the outcome carries no device jobs.
    """
    if not outcome.jobs:
        return ""

    rows = []
    for job in outcome.jobs:
        os_name = " ".join(part for part in (job.platform, job.os_version) if part)
        counters = job.counters
        rows.append(
            [
                job.device_name,
                os_name,
                job.result.value,
                counters.total,
                counters.passed,
                counters.failed,
                counters.errored,
                counters.skipped,
                counters.warned,
                counters.stopped,
            ]
        )

    return tabulate(rows, headers=HEADERS, tablefmt="github")
