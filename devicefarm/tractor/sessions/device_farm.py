"""AWS Device Farm session implementation."""

import asyncio
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import aiohttp
from botocore.exceptions import BotoCoreError, ClientError

from devicefarm.tractor.artifacts import (
    ArtifactTransferError,
    download_file,
    upload_file,
)
from devicefarm.tractor.errors import ExecutionError
from devicefarm.tractor.models.outcome import (
    Counters,
    DeviceJobResult,
    ExecutionResult,
    RunOutcome,
    RunStatus,
)
from devicefarm.tractor.models.run_request import RunRequest
from devicefarm.tractor.sessions.base import TestSession

logger = logging.getLogger(__name__)

APP_UPLOAD_TYPES = {
    ".apk": "ANDROID_APP",
    ".ipa": "IOS_APP",
}
TEST_PACKAGE_UPLOAD_TYPE = "APPIUM_JAVA_JUNIT_TEST_PACKAGE"
TEST_SPEC_UPLOAD_TYPE = "APPIUM_JAVA_JUNIT_TEST_SPEC"
TEST_TYPE = "APPIUM_JAVA_JUNIT"
REPORT_ARTIFACT_TYPES = {"CUSTOMER_ARTIFACT"}
VIDEO_ARTIFACT_TYPE = "VIDEO"

_TRANSFER_ERRORS = (
    BotoCoreError,
    ClientError,
    aiohttp.ClientError,
    ArtifactTransferError,
    OSError,
)


@contextmanager
def _remote_step(message: str) -> Iterator[None]:
    """Convert client and transfer errors raised inside the block to ExecutionError."""
    try:
        yield
    except ExecutionError:
        raise
    except _TRANSFER_ERRORS as e:
        raise ExecutionError(message, e) from e


@dataclass
class _RunState:
    """Uploads created by a run and how far the run got."""

    uploads: list[str] = field(default_factory=list)
    run_arn: str | None = None
    completed: bool = False


class DeviceFarmSession(TestSession):
    """Runs Appium JUnit test packages on AWS Device Farm."""

    def __init__(
        self,
        client: Any,
        poll_interval: float = 30,
        upload_poll_interval: float = 5,
    ) -> None:
        """Initialize session with a boto3 Device Farm client."""
        self.client = client
        self.poll_interval = poll_interval
        self.upload_poll_interval = upload_poll_interval

    async def execute(self, request: RunRequest) -> RunOutcome:
        """Upload artifacts, schedule the run and wait for its outcome."""
        state = _RunState()
        try:
            return await self._run(request, state)
        finally:
            if request.clean_state_after_run and state.uploads:
                await self._clean_state(state)

    async def poll_status(self, run_arn: str) -> tuple[bool, RunOutcome]:
        """Check if the run is complete and get its current outcome."""
        with _remote_step(f"There was an error fetching the status of run {run_arn}"):
            response = await self._call("get_run", arn=run_arn)

        outcome = self._to_outcome(response["run"])
        return (outcome.status.is_terminal, outcome)

    async def _run(self, request: RunRequest, state: _RunState) -> RunOutcome:
        project_arn = await self._find_or_create_project(request.project_name)
        device_pool_arn = await self._find_device_pool(project_arn, request.device_pool)

        app_path = Path(request.app_path)
        app_type = APP_UPLOAD_TYPES.get(app_path.suffix.lower())
        if app_type is None:
            raise ExecutionError(
                f"Unsupported app file {app_path.name}, expected an .apk or .ipa file"
            )

        app_arn = await self._upload(project_arn, app_path, app_type, state.uploads)
        test_package_arn = await self._upload(
            project_arn,
            Path(request.tests_project_path),
            TEST_PACKAGE_UPLOAD_TYPE,
            state.uploads,
        )
        test_spec_arn = await self._upload(
            project_arn,
            Path(request.test_spec_path),
            TEST_SPEC_UPLOAD_TYPE,
            state.uploads,
        )

        run_name = request.run_name or self._default_run_name(request.project_name)
        run_arn = await self._schedule_run(
            request,
            run_name=run_name,
            project_arn=project_arn,
            device_pool_arn=device_pool_arn,
            app_arn=app_arn,
            test_package_arn=test_package_arn,
            test_spec_arn=test_spec_arn,
        )
        state.run_arn = run_arn

        logger.info(f"Waiting for run {run_name} to complete")
        outcome = await self.wait_for_completion(run_arn, self.poll_interval)
        state.completed = True
        logger.info(f"Run {run_name} completed with result {outcome.result.value}")

        jobs = await self._list(
            "list_jobs",
            "jobs",
            f"There was an error fetching the jobs of run {run_name}",
            arn=run_arn,
        )

        reports_path = None
        if request.download_reports:
            reports_path = await self._download_reports(request, run_name, jobs)

        return outcome.model_copy(
            update={
                "jobs": tuple(self._to_job_result(job) for job in jobs),
                "reports_path": str(reports_path) if reports_path else None,
            }
        )

    async def _call(self, operation: str, **kwargs: Any) -> dict[str, Any]:
        """Invoke a blocking client operation without blocking the event loop."""
        method = getattr(self.client, operation)
        result: dict[str, Any] = await asyncio.to_thread(method, **kwargs)
        return result

    async def _list(
        self, operation: str, key: str, message: str, **kwargs: Any
    ) -> list[dict[str, Any]]:
        """Collect every item of a paginated list operation."""
        items: list[dict[str, Any]] = []
        next_token: str | None = None

        with _remote_step(message):
            while True:
                params = dict(kwargs)
                if next_token:
                    params["nextToken"] = next_token
                response = await self._call(operation, **params)
                items.extend(response.get(key, []))
                next_token = response.get("nextToken")
                if not next_token:
                    return items

    async def _find_or_create_project(self, project_name: str) -> str:
        projects = await self._list(
            "list_projects", "projects", "There was an error fetching projects from AWS"
        )
        for project in projects:
            if project.get("name") == project_name:
                logger.info(f"Using project {project_name}")
                return str(project["arn"])

        logger.info(f"Project {project_name} not found, creating it")
        with _remote_step(f"There was an error creating the project {project_name}"):
            response = await self._call("create_project", name=project_name)
        return str(response["project"]["arn"])

    async def _find_device_pool(self, project_arn: str, pool_name: str) -> str:
        pools = await self._list(
            "list_device_pools",
            "devicePools",
            "There was an error fetching device pools from AWS",
            arn=project_arn,
        )
        if not pools:
            raise ExecutionError("There are no device pools in the project")

        if not pool_name:
            pool = pools[0]
            logger.info(f"No device pool configured, using {pool.get('name')}")
            return str(pool["arn"])

        for pool in pools:
            if pool.get("name") == pool_name:
                return str(pool["arn"])

        raise ExecutionError(f"Device pool {pool_name} was not found in the project")

    async def _upload(
        self,
        project_arn: str,
        path: Path,
        upload_type: str,
        uploads: list[str],
    ) -> str:
        """Upload a file and wait until Device Farm has processed it."""
        if not path.is_file():
            raise ExecutionError(f"File {path} does not exist")

        with _remote_step(f"There was an error uploading {path.name}"):
            response = await self._call(
                "create_upload",
                projectArn=project_arn,
                name=path.name,
                type=upload_type,
                contentType="application/octet-stream",
            )
            upload = response["upload"]
            upload_arn = str(upload["arn"])
            uploads.append(upload_arn)

            await upload_file(upload["url"], path)

            while True:
                response = await self._call("get_upload", arn=upload_arn)
                upload = response["upload"]
                status = upload.get("status")
                if status == "SUCCEEDED":
                    logger.info(f"Upload {path.name} processed")
                    return upload_arn
                if status == "FAILED":
                    reason = upload.get("message") or upload.get("metadata") or ""
                    raise ExecutionError(f"Upload {path.name} failed: {reason}")
                await asyncio.sleep(self.upload_poll_interval)

    async def _schedule_run(
        self,
        request: RunRequest,
        *,
        run_name: str,
        project_arn: str,
        device_pool_arn: str,
        app_arn: str,
        test_package_arn: str,
        test_spec_arn: str,
    ) -> str:
        performance_monitoring = (
            "false" if request.disable_performance_monitoring else "true"
        )
        with _remote_step(f"There was an error scheduling the run {run_name}"):
            response = await self._call(
                "schedule_run",
                projectArn=project_arn,
                appArn=app_arn,
                devicePoolArn=device_pool_arn,
                name=run_name,
                test={
                    "type": TEST_TYPE,
                    "testPackageArn": test_package_arn,
                    "testSpecArn": test_spec_arn,
                    "parameters": {"app_performance_monitoring": performance_monitoring},
                },
                configuration={
                    "billingMethod": "METERED" if request.metered else "UNMETERED",
                },
                executionConfiguration={"videoCapture": request.capture_video},
            )
        run_arn = str(response["run"]["arn"])
        logger.info(f"Run {run_name} scheduled: {run_arn}")
        return run_arn

    async def _download_reports(
        self, request: RunRequest, run_name: str, jobs: list[dict[str, Any]]
    ) -> Path:
        base_dir = Path(request.reports_dir) if request.reports_dir else Path.cwd()
        run_dir = base_dir / run_name
        wanted = set(REPORT_ARTIFACT_TYPES)
        if request.capture_video:
            wanted.add(VIDEO_ARTIFACT_TYPE)

        used_dirs: set[str] = set()
        for job in jobs:
            device_dir = self._device_dir_name(job, used_dirs)
            device_name = job.get("device", {}).get("name") or job.get("name", "device")
            artifacts = await self._list(
                "list_artifacts",
                "artifacts",
                f"There was an error fetching the artifacts of {device_name}",
                arn=job["arn"],
                type="FILE",
            )
            for artifact in artifacts:
                if artifact.get("type") not in wanted:
                    continue
                file_name = f"{artifact['name']}.{artifact['extension']}"
                with _remote_step(f"There was an error downloading {file_name}"):
                    await download_file(
                        artifact["url"], run_dir / device_dir / file_name
                    )

        return run_dir

    def _device_dir_name(self, job: dict[str, Any], used: set[str]) -> str:
        """Name of the report folder of a job, unique within the run."""
        device = job.get("device", {})
        name = device.get("name") or job.get("name") or "device"
        if device.get("os"):
            name = f"{name} - {device['os']}"
        if name in used:
            name = f"{name} - {str(job['arn']).rsplit('/', 1)[-1]}"
        used.add(name)
        return name

    async def _clean_state(self, state: _RunState) -> None:
        if state.run_arn and not state.completed:
            # The run may still be using its uploads.
            logger.warning(
                f"Run {state.run_arn} did not reach a terminal state, "
                "keeping its uploads"
            )
            return
        await self._delete_uploads(state.uploads)

    async def _delete_uploads(self, uploads: list[str]) -> None:
        for upload_arn in uploads:
            try:
                await self._call("delete_upload", arn=upload_arn)
            except (BotoCoreError, ClientError) as e:
                logger.warning(f"Could not delete upload {upload_arn}: {e}")

    def _default_run_name(self, project_name: str) -> str:
        return f"{project_name}-{datetime.now(UTC):%Y%m%d%H%M%S}"

    def _to_outcome(self, run: dict[str, Any]) -> RunOutcome:
        return RunOutcome(
            arn=str(run["arn"]),
            name=str(run.get("name", "")),
            status=RunStatus(run.get("status", RunStatus.PENDING.value)),
            result=ExecutionResult(run.get("result", ExecutionResult.PENDING.value)),
            counters=Counters.from_api(run.get("counters")),
        )

    def _to_job_result(self, job: dict[str, Any]) -> DeviceJobResult:
        device = job.get("device", {})
        return DeviceJobResult(
            device_name=device.get("name") or job.get("name", ""),
            platform=device.get("platform", ""),
            os_version=device.get("os", ""),
            result=ExecutionResult(job.get("result", ExecutionResult.PENDING.value)),
            counters=Counters.from_api(job.get("counters")),
        )
