"""Models for Orchestrator Jobs."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class JobState(str, Enum):
    """Job states reported by Orchestrator."""

    PENDING = "Pending"
    RUNNING = "Running"
    STOPPING = "Stopping"
    TERMINATING = "Terminating"
    SUSPENDED = "Suspended"
    RESUMED = "Resumed"
    SUCCESSFUL = "Successful"
    FAULTED = "Faulted"
    STOPPED = "Stopped"
    FAILED = "Failed"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATES

    @property
    def is_failure(self) -> bool:
        return self in FAILURE_STATES


TERMINAL_STATES = frozenset(
    {JobState.SUCCESSFUL, JobState.FAULTED, JobState.STOPPED, JobState.FAILED}
)
FAILURE_STATES = frozenset({JobState.FAULTED, JobState.STOPPED, JobState.FAILED})


class JobErrorInfo(BaseModel):
    """Model representing job error information."""

    model_config = ConfigDict(
        validate_by_name=True,
        validate_by_alias=True,
        use_enum_values=True,
        arbitrary_types_allowed=True,
        extra="allow",
    )
    code: str | None = Field(default=None, alias="Code")
    title: str | None = Field(default=None, alias="Title")
    detail: str | None = Field(default=None, alias="Detail")
    category: str | None = Field(default=None, alias="Category")
    status: int | None = Field(default=None, alias="Status")


class Job(BaseModel):
    """Model representing an orchestrator job."""

    model_config = ConfigDict(
        validate_by_name=True,
        validate_by_alias=True,
        use_enum_values=True,
        arbitrary_types_allowed=True,
        extra="allow",
    )
    id: int = Field(alias="Id")
    key: str | None = Field(default=None, alias="Key")
    state: str | None = Field(default=None, alias="State")
    info: str | None = Field(default=None, alias="Info")
    release_name: str | None = Field(default=None, alias="ReleaseName")
    host_machine_name: str | None = Field(default=None, alias="HostMachineName")
    job_priority: str | None = Field(default=None, alias="JobPriority")
    creation_time: str | None = Field(default=None, alias="CreationTime")
    start_time: str | None = Field(default=None, alias="StartTime")
    end_time: str | None = Field(default=None, alias="EndTime")
    input_arguments: str | None = Field(default=None, alias="InputArguments")
    output_arguments: str | None = Field(default=None, alias="OutputArguments")
    job_error: JobErrorInfo | None = Field(default=None, alias="JobError")

    @property
    def job_state(self) -> JobState | None:
        try:
            return JobState(self.state) if self.state else None
        except ValueError:
            return None

    @property
    def is_terminal(self) -> bool:
        state = self.job_state
        return state is not None and state.is_terminal

    @property
    def is_failure(self) -> bool:
        state = self.job_state
        return state is not None and state.is_failure
