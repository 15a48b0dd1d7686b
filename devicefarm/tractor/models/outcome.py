"""Models for Device Farm run outcomes."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ExecutionResult(str, Enum):
    """Result of a run or job as reported by Device Farm."""

    PENDING = "PENDING"
    PASSED = "PASSED"
    WARNED = "WARNED"
    FAILED = "FAILED"
    SKIPPED = "SKIPPED"
    ERRORED = "ERRORED"
    STOPPED = "STOPPED"


class RunStatus(str, Enum):
    """Lifecycle status of a run."""

    PENDING = "PENDING"
    PENDING_CONCURRENCY = "PENDING_CONCURRENCY"
    PENDING_DEVICE = "PENDING_DEVICE"
    PROCESSING = "PROCESSING"
    SCHEDULING = "SCHEDULING"
    PREPARING = "PREPARING"
    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"
    STOPPING = "STOPPING"

    @property
    def is_terminal(self) -> bool:
        return self is RunStatus.COMPLETED


class Counters(BaseModel):
    """Test counters of a run or a device job."""

    model_config = ConfigDict(frozen=True)

    total: int = 0
    passed: int = 0
    failed: int = 0
    warned: int = 0
    errored: int = 0
    stopped: int = 0
    skipped: int = 0

    @classmethod
    def from_api(cls, data: dict[str, Any] | None) -> "Counters":
        """Build counters from a Device Farm ``counters`` mapping."""
        if not data:
            return cls()
        return cls(**{name: int(data.get(name, 0)) for name in cls.model_fields})


class DeviceJobResult(BaseModel):
    """Result of the run on a single device."""

    model_config = ConfigDict(frozen=True)

    device_name: str = Field(..., description="Device display name")
    platform: str = Field(default="", description="Device platform")
    os_version: str = Field(default="", description="Device OS version")
    result: ExecutionResult = Field(..., description="Job result")
    counters: Counters = Field(default_factory=Counters)


class RunOutcome(BaseModel):
    """Terminal outcome of a Device Farm run."""

    model_config = ConfigDict(frozen=True)

    arn: str = Field(..., description="Run ARN")
    name: str = Field(default="", description="Run name")
    status: RunStatus = Field(default=RunStatus.COMPLETED, description="Run status")
    result: ExecutionResult = Field(..., description="Run result")
    counters: Counters = Field(default_factory=Counters)
    jobs: tuple[DeviceJobResult, ...] = Field(
        default=(), description="Per-device job results"
    )
    reports_path: str | None = Field(
        default=None, description="Directory where reports were downloaded"
    )

    @property
    def is_success(self) -> bool:
        """Whether the run finished with a passing result."""
        return self.result is ExecutionResult.PASSED
