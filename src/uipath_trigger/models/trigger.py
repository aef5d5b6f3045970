from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .._utils.constants import DEFAULT_POLL_INTERVAL, DEFAULT_TIMEOUT
from .job import Job
from .references import EntityReference


class StartStrategy(str, Enum):
    SPECIFIC = "Specific"
    MODERN_JOBS_COUNT = "ModernJobsCount"
    JOBS_COUNT = "JobsCount"


class JobPriority(str, Enum):
    LOW = "Low"
    NORMAL = "Normal"
    HIGH = "High"


class TriggerOptions(BaseModel):
    """Everything a single trigger run needs to know besides credentials."""

    model_config = ConfigDict(use_enum_values=False)

    process_name: str
    folder: Optional[str] = None
    robot_names: List[str] = Field(default_factory=list)
    machine_names: List[str] = Field(default_factory=list)
    jobs_count: int = Field(default=1, ge=1)
    priority: JobPriority = JobPriority.NORMAL
    input_arguments: Optional[Dict[str, Any]] = None
    runtime_type: Optional[str] = None
    wait: bool = True
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    poll_interval: float = Field(default=DEFAULT_POLL_INTERVAL, ge=0)
    fail_on_failure: bool = True
    dry_run: bool = False

    @field_validator("process_name")
    @classmethod
    def _process_name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("process name must not be empty")
        return value.strip()

    @field_validator("robot_names", "machine_names")
    @classmethod
    def _drop_blank_names(cls, value: List[str]) -> List[str]:
        return [name.strip() for name in value if name and name.strip()]


class TriggerOutcome(str, Enum):
    SUBMITTED = "submitted"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    FAILURE_TOLERATED = "failure_tolerated"
    TIMED_OUT = "timed_out"
    DRY_RUN = "dry_run"

    @property
    def exit_code(self) -> int:
        return 1 if self in (TriggerOutcome.FAILED, TriggerOutcome.TIMED_OUT) else 0


class TriggerResult(BaseModel):
    model_config = ConfigDict(use_enum_values=False)

    outcome: TriggerOutcome
    folder: Optional[EntityReference] = None
    process: Optional[EntityReference] = None
    robots: List[EntityReference] = Field(default_factory=list)
    machines: List[EntityReference] = Field(default_factory=list)
    strategy: Optional[StartStrategy] = None
    jobs: List[Job] = Field(default_factory=list)

    @property
    def exit_code(self) -> int:
        return self.outcome.exit_code

    @property
    def failed_jobs(self) -> List[Job]:
        return [job for job in self.jobs if job.is_failure]

    def summary(self) -> Dict[str, Any]:
        return {
            "outcome": self.outcome.value,
            "exitCode": self.exit_code,
            "folder": self.folder.describe() if self.folder else None,
            "process": self.process.describe() if self.process else None,
            "robots": [robot.describe() for robot in self.robots],
            "machines": [machine.describe() for machine in self.machines],
            "strategy": self.strategy.value if self.strategy else None,
            "jobs": [
                {
                    "id": job.id,
                    "key": job.key,
                    "state": job.state,
                    "info": job.info,
                }
                for job in self.jobs
            ],
        }
