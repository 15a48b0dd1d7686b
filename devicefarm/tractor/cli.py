"""CLI entry point for the Device Farm tractor action."""

import asyncio
import functools
import logging
import sys

import typer
from pydantic import ValidationError

from devicefarm.tractor.errors import EscalatedFailure
from devicefarm.tractor.models.credentials import Credentials
from devicefarm.tractor.models.run_request import RunRequest
from devicefarm.tractor.orchestrator import TractorOrchestrator
from devicefarm.tractor.reporter import LoggingReporter
from devicefarm.tractor.sessions.factory import create_session

# Configure logging - force reconfiguration
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stderr,
    force=True,  # Force reconfiguration even if already set up
)
logger = logging.getLogger(__name__)

app = typer.Typer()


@app.command()
def main(  # noqa: PLR0913
    access_key_id: str = typer.Option(
        "", "--aws-access-key-id", envvar="AWS_ACCESS_KEY_ID", help="AWS access key"
    ),
    secret_access_key: str = typer.Option(
        "",
        "--aws-secret-access-key",
        envvar="AWS_SECRET_ACCESS_KEY",
        help="AWS secret access key",
        show_default=False,
    ),
    session_token: str = typer.Option(
        "",
        "--aws-session-token",
        envvar="AWS_SESSION_TOKEN",
        help="AWS session token",
        show_default=False,
    ),
    region: str = typer.Option(
        "", "--aws-region", envvar="AWS_REGION", help="AWS region name"
    ),
    profile_name: str = typer.Option(
        "",
        "--aws-profile-name",
        envvar="AWS_PROFILE",
        help="Profile name used to load AWS credentials",
    ),
    project_name: str = typer.Option(
        ..., envvar="TRACTOR_PROJECT_NAME", help="Device Farm project name"
    ),
    device_pool: str = typer.Option(
        "", envvar="TRACTOR_DEVICE_POOL", help="Device Farm device pool name"
    ),
    app_path: str = typer.Option(
        ..., envvar="TRACTOR_APP_PATH", help="App path to upload to Device Farm"
    ),
    tests_path: str = typer.Option(
        ...,
        envvar="TRACTOR_TESTS_PATH",
        help="Test project zip path to upload to Device Farm",
    ),
    test_spec_path: str = typer.Option(
        ..., envvar="TRACTOR_TEST_SPEC_PATH", help="Test spec file path"
    ),
    capture_video: bool = typer.Option(
        True, envvar="TRACTOR_CAPTURE_VIDEO", help="Enable Device Farm video capture"
    ),
    run_name: str = typer.Option(
        "", envvar="TRACTOR_RUN_NAME", help="Test run name to be used"
    ),
    reports_dir: str = typer.Option(
        "",
        envvar="TRACTOR_REPORTS_DIR",
        help="Base directory where test reports are stored",
    ),
    download_reports: bool = typer.Option(
        True, envvar="TRACTOR_DOWNLOAD_REPORTS", help="Download test reports"
    ),
    clean_state: bool = typer.Option(
        True,
        envvar="TRACTOR_CLEAN_STATE",
        help="Delete uploaded artifacts from Device Farm after the run",
    ),
    strict: bool = typer.Option(
        True, envvar="TRACTOR_STRICT", help="Fail on any error or unsuccessful result"
    ),
    metered: bool = typer.Option(
        True, envvar="TRACTOR_METERED", help="Run tests with metered pricing"
    ),
    disable_performance_monitoring: bool = typer.Option(
        False,
        envvar="TRACTOR_DISABLE_PERFORMANCE_MONITORING",
        help="Disable app performance monitoring",
    ),
    poll_interval: float = typer.Option(
        30.0, envvar="TRACTOR_POLL_INTERVAL", help="Seconds between run status polls"
    ),
) -> None:
    """Run Appium tests on AWS Device Farm."""
    credentials = Credentials(
        access_key_id=access_key_id,
        secret_access_key=secret_access_key,
        session_token=session_token,
        region=region,
        profile_name=profile_name,
    )

    try:
        request = RunRequest(
            project_name=project_name,
            device_pool=device_pool,
            app_path=app_path,
            tests_project_path=tests_path,
            test_spec_path=test_spec_path,
            capture_video=capture_video,
            run_name=run_name,
            reports_dir=reports_dir,
            download_reports=download_reports,
            clean_state_after_run=clean_state,
            metered=metered,
            disable_performance_monitoring=disable_performance_monitoring,
        )
    except ValidationError as e:
        logger.error(f"Invalid run parameters: {e}")
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    logger.info(f"Project: {request.project_name}")
    logger.info(f"Device pool: {request.device_pool or '<first pool>'}")
    logger.info(f"Strict run: {strict}")

    orchestrator = TractorOrchestrator(
        functools.partial(create_session, poll_interval=poll_interval),
        LoggingReporter(),
        strict=strict,
    )

    try:
        report = asyncio.run(orchestrator.run(credentials, request))
    except EscalatedFailure as e:
        logger.error(f"Test run failed: {e}")
        typer.echo(f"Error: {e}", err=True)
        if e.cause is not None:
            typer.echo(f"Caused by: {e.cause}", err=True)
        raise typer.Exit(code=1)

    typer.echo(report.model_dump_json(indent=2))


if __name__ == "__main__":  # pragma: no cover
    app()
