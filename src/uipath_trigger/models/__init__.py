from .errors import (
    AuthenticationError,
    BaseUrlMissingError,
    JobSubmissionError,
    JobTimeoutError,
    ResolutionError,
    SecretMissingError,
    TriggerError,
)
from .exceptions import EnrichedException
from .folders import Folder
from .job import Job, JobErrorInfo, JobState
from .processes import Process
from .references import EntityReference, ResolutionMethod
from .robots import Machine, Robot
from .token import AccessTokenData, TokenData
from .trigger import (
    JobPriority,
    StartStrategy,
    TriggerOptions,
    TriggerOutcome,
    TriggerResult,
)

__all__ = [
    "AccessTokenData",
    "AuthenticationError",
    "BaseUrlMissingError",
    "EnrichedException",
    "EntityReference",
    "Folder",
    "Job",
    "JobErrorInfo",
    "JobPriority",
    "JobState",
    "JobSubmissionError",
    "JobTimeoutError",
    "Machine",
    "Process",
    "ResolutionError",
    "ResolutionMethod",
    "Robot",
    "SecretMissingError",
    "StartStrategy",
    "TokenData",
    "TriggerError",
    "TriggerOptions",
    "TriggerOutcome",
    "TriggerResult",
]
