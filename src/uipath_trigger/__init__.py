from ._job_trigger import JobTrigger
from ._uipath_trigger import UiPathTrigger
from .models import (
    EntityReference,
    Job,
    JobState,
    TriggerError,
    TriggerOptions,
    TriggerOutcome,
    TriggerResult,
)

__all__ = [
    "EntityReference",
    "Job",
    "JobState",
    "JobTrigger",
    "TriggerError",
    "TriggerOptions",
    "TriggerOutcome",
    "TriggerResult",
    "UiPathTrigger",
]
