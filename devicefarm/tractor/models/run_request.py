"""Parameters of a single Device Farm test run."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RunRequest(BaseModel):
    """Immutable bundle of run parameters bound from the command line."""

    model_config = ConfigDict(frozen=True)

    project_name: str = Field(..., description="Device Farm project name")
    device_pool: str = Field(
        default="",
        description="Device pool name, first pool of the project when empty",
    )
    app_path: str = Field(..., description="App path to upload to Device Farm")
    tests_project_path: str = Field(
        ..., description="Test project zip path to upload to Device Farm"
    )
    test_spec_path: str = Field(..., description="Test spec file path")
    capture_video: bool = Field(default=True, description="Enable video capture")
    run_name: str = Field(default="", description="Test run name to be used")
    reports_dir: str = Field(
        default="", description="Base directory where test reports are stored"
    )
    download_reports: bool = Field(default=True, description="Download test reports")
    clean_state_after_run: bool = Field(
        default=True, description="Delete uploaded artifacts after the run"
    )
    metered: bool = Field(default=True, description="Use metered pricing")
    disable_performance_monitoring: bool = Field(
        default=False, description="Disable app performance monitoring"
    )

    @field_validator("project_name", "app_path", "tests_project_path", "test_spec_path")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value
