import json
import time
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from httpx import TimeoutException, TransportError

from .._config import Config
from .._folder_context import FolderContext
from .._utils import Endpoint, RequestSpec
from .._utils._odata import odata_values
from .._utils.constants import DEFAULT_POLL_INTERVAL, DEFAULT_TIMEOUT
from ..models.errors import JobSubmissionError, JobTimeoutError
from ..models.exceptions import EnrichedException
from ..models.job import Job
from ..models.references import EntityReference
from ..models.trigger import JobPriority, StartStrategy
from ..tracing import traced
from ._base_service import BaseService

# Poll failures with these statuses end the wait instead of being retried.
FATAL_POLL_STATUS_CODES = (401, 403)


def select_strategy(
    robots: Sequence[EntityReference], machines: Sequence[EntityReference]
) -> StartStrategy:
    """Pick the start strategy for the resolved targets.

    Resolved robots pin the job to those robots. Anything else lets
    Orchestrator allocate the jobs, optionally restricted to machines.
    """
    if any(robot.id is not None for robot in robots):
        return StartStrategy.SPECIFIC
    return StartStrategy.MODERN_JOBS_COUNT


class JobsService(FolderContext, BaseService):
    """Service for starting and monitoring jobs.

    A job represents a single execution of an automation - it is created when you start
    a process and contains information about that specific run, including its status,
    start time, and any input/output data.
    """

    def __init__(self, config: Config) -> None:
        super().__init__(config=config)

    @traced(name="jobs_start", run_type="uipath")
    def start(
        self,
        process: EntityReference,
        *,
        folder: Optional[EntityReference] = None,
        strategy: StartStrategy = StartStrategy.MODERN_JOBS_COUNT,
        robots: Sequence[EntityReference] = (),
        machines: Sequence[EntityReference] = (),
        jobs_count: int = 1,
        priority: JobPriority = JobPriority.NORMAL,
        input_arguments: Optional[Dict[str, Any]] = None,
        runtime_type: Optional[str] = None,
    ) -> Tuple[List[Job], StartStrategy]:
        """Start one or more jobs for a process.

        When Orchestrator rejects the ``ModernJobsCount`` strategy (classic
        folders answer 400), the request is sent once more with the classic
        ``JobsCount`` strategy.

        Args:
            process: The resolved process. A passthrough reference starts the
                job by release name.
            folder: The folder the process lives in.
            strategy: The start strategy, see :func:`select_strategy`.
            robots: Robots to pin the jobs to (``Specific`` strategy).
            machines: Machines to restrict the jobs to.
            jobs_count: Number of jobs to start when Orchestrator allocates them.
            priority: Job priority.
            input_arguments: Input arguments passed to the process.
            runtime_type: Optional runtime type (e.g. ``Unattended``).

        Returns:
            The created jobs and the strategy that was accepted.

        Raises:
            JobSubmissionError: If the jobs could not be started.
        """

        def submit(current: StartStrategy) -> List[Job]:
            spec = self._start_spec(
                process,
                folder=folder,
                strategy=current,
                robots=robots,
                machines=machines,
                jobs_count=jobs_count,
                priority=priority,
                input_arguments=input_arguments,
                runtime_type=runtime_type,
            )
            return self._submit(spec, process)

        try:
            jobs = submit(strategy)
        except EnrichedException as e:
            if e.status_code != 400 or strategy != StartStrategy.MODERN_JOBS_COUNT:
                raise self._submission_error(process, e) from e
            self._logger.warning(
                f"Strategy {strategy.value} rejected, retrying with "
                f"{StartStrategy.JOBS_COUNT.value}"
            )
            strategy = StartStrategy.JOBS_COUNT
            try:
                jobs = submit(strategy)
            except EnrichedException as fallback_error:
                raise self._submission_error(
                    process, fallback_error
                ) from fallback_error

        for job in jobs:
            self._logger.info(f"Started job {job.id} ({job.key}) state={job.state}")
        return jobs, strategy

    @traced(name="jobs_retrieve", run_type="uipath")
    def retrieve(
        self,
        job_id: int,
        *,
        folder: Optional[EntityReference] = None,
    ) -> Job:
        """Retrieve a job identified by its id.

        Args:
            job_id (int): The job id returned when the job was started.
            folder (Optional[EntityReference]): The folder the job runs in.

        Returns:
            Job: The retrieved job.
        """
        spec = self._retrieve_spec(job_id, folder=folder)
        response = self.request(
            spec.method,
            url=spec.endpoint,
            headers=spec.headers,
        )

        return Job.model_validate(response.json())

    @traced(name="jobs_wait_for_completion", run_type="uipath")
    def wait_for_completion(
        self,
        jobs: Sequence[Job],
        *,
        folder: Optional[EntityReference] = None,
        timeout: float = DEFAULT_TIMEOUT,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        on_update: Optional[Callable[[Job], None]] = None,
    ) -> List[Job]:
        """Poll jobs until every one of them reaches a terminal state.

        A job seen in a terminal state is not polled again. A poll that fails
        for a transient reason is logged and retried in the next round.

        Args:
            jobs: The jobs returned by :meth:`start`.
            folder: The folder the jobs run in.
            timeout: Seconds to wait overall.
            poll_interval: Seconds between two polling rounds.
            on_update: Called with a job whenever its state changes.

        Returns:
            The jobs in their terminal state, in the order given.

        Raises:
            JobTimeoutError: If some job is still running when the timeout elapses.
        """
        latest: Dict[int, Job] = {job.id: job for job in jobs}
        order = [job.id for job in jobs]
        deadline = time.monotonic() + timeout

        while True:
            for job_id in order:
                current = latest[job_id]
                if current.is_terminal:
                    continue

                polled = self._poll(job_id, folder=folder)
                if polled is None:
                    continue

                latest[job_id] = polled
                if polled.state != current.state:
                    self._logger.info(f"Job {job_id}: {current.state} -> {polled.state}")
                    if on_update is not None:
                        on_update(polled)

            if all(job.is_terminal for job in latest.values()):
                return [latest[job_id] for job_id in order]

            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise JobTimeoutError(timeout, [latest[job_id] for job_id in order])

            time.sleep(min(poll_interval, remaining))

    def _submit(self, spec: RequestSpec, process: EntityReference) -> List[Job]:
        # StartJobs is not idempotent
        try:
            response = self.request(
                spec.method,
                url=spec.endpoint,
                json=spec.json,
                headers=spec.headers,
                idempotent=False,
            )
        except TransportError as e:
            raise JobSubmissionError(
                f"Could not reach Orchestrator to start "
                f"'{process.resolved_name or process.name}': {e}. "
                "The jobs may have been created, check Orchestrator before retrying"
            ) from e

        jobs = [Job.model_validate(item) for item in odata_values(response.json())]
        if not jobs:
            raise JobSubmissionError(
                f"Orchestrator did not create any job for '{process.name}'"
            )
        return jobs

    def _submission_error(
        self, process: EntityReference, error: EnrichedException
    ) -> JobSubmissionError:
        return JobSubmissionError(
            f"Failed to start '{process.resolved_name or process.name}': {error}"
        )

    def _poll(
        self, job_id: int, *, folder: Optional[EntityReference]
    ) -> Optional[Job]:
        try:
            return self.retrieve(job_id, folder=folder)
        except EnrichedException as e:
            if e.status_code in FATAL_POLL_STATUS_CODES:
                raise
            self._logger.warning(
                f"Polling job {job_id} failed with status {e.status_code}, retrying"
            )
        except (TimeoutException, TransportError) as e:
            self._logger.warning(f"Polling job {job_id} failed: {e}, retrying")
        return None

    def _start_spec(
        self,
        process: EntityReference,
        *,
        folder: Optional[EntityReference],
        strategy: StartStrategy,
        robots: Sequence[EntityReference],
        machines: Sequence[EntityReference],
        jobs_count: int,
        priority: JobPriority,
        input_arguments: Optional[Dict[str, Any]],
        runtime_type: Optional[str],
    ) -> RequestSpec:
        start_info: Dict[str, Any] = {
            "Strategy": strategy.value,
            "JobPriority": priority.value,
            "Source": "Manual",
        }
        if process.key is not None:
            start_info["ReleaseKey"] = process.key
        else:
            start_info["ReleaseName"] = process.name

        if strategy == StartStrategy.SPECIFIC:
            start_info["RobotIds"] = [r.id for r in robots if r.id is not None]
        else:
            start_info["JobsCount"] = jobs_count
            machine_ids = [m.id for m in machines if m.id is not None]
            if machine_ids and strategy == StartStrategy.MODERN_JOBS_COUNT:
                start_info["MachineRobots"] = [
                    {"MachineId": machine_id} for machine_id in machine_ids
                ]

        if input_arguments is not None:
            start_info["InputArguments"] = json.dumps(input_arguments)
        if runtime_type:
            start_info["RuntimeType"] = runtime_type

        return RequestSpec(
            method="POST",
            endpoint=Endpoint(
                "/orchestrator_/odata/Jobs/UiPath.Server.Configuration.OData.StartJobs"
            ),
            json={"startInfo": start_info},
            headers=self.headers_for_folder(folder),
        )

    def _retrieve_spec(
        self,
        job_id: int,
        *,
        folder: Optional[EntityReference],
    ) -> RequestSpec:
        return RequestSpec(
            method="GET",
            endpoint=Endpoint(Endpoint("/orchestrator_/odata/Jobs({id})").format(id=job_id)),
            headers=self.headers_for_folder(folder),
        )
