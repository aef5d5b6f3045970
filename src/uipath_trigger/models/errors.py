from typing import TYPE_CHECKING, Optional, Sequence

if TYPE_CHECKING:
    from .job import Job


class TriggerError(Exception):
    """Base class for failures of the job trigger flow."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class BaseUrlMissingError(TriggerError):
    def __init__(
        self,
        message="Orchestrator URL missing. Pass \033[1m--url\033[22m or set the UIPATH_URL environment variable.",
    ):
        super().__init__(message)


class SecretMissingError(TriggerError):
    def __init__(
        self,
        message="Authentication required. Pass \033[1m--client-id\033[22m/\033[1m--client-secret\033[22m or set the UIPATH_ACCESS_TOKEN environment variable to a valid access token.",
    ):
        super().__init__(message)


class AuthenticationError(TriggerError):
    """Raised when the client credentials exchange fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class ResolutionError(TriggerError):
    """Raised when a named entity cannot be mapped to an Orchestrator identifier."""

    def __init__(self, entity: str, name: str, reason: Optional[str] = None):
        self.entity = entity
        self.name = name
        message = f"Could not resolve {entity} '{name}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class JobSubmissionError(TriggerError):
    """Raised when Orchestrator refuses or does not acknowledge a start job request."""


class JobTimeoutError(TriggerError):
    """Raised when submitted jobs do not reach a terminal state in time."""

    def __init__(self, timeout: float, jobs: Sequence["Job"]):
        self.timeout = timeout
        self.jobs = list(jobs)
        pending = ", ".join(
            f"{job.id} ({job.state})" for job in self.jobs if not job.is_terminal
        )
        super().__init__(
            f"Timed out after {timeout:g}s waiting for jobs to finish. Still running: {pending}"
        )
