from logging import getLogger
from typing import Callable, List, Optional

from httpx import TransportError

from ._services import select_strategy
from ._uipath_trigger import UiPathTrigger
from .models.errors import JobTimeoutError, ResolutionError
from .models.exceptions import EnrichedException
from .models.job import Job
from .models.references import EntityReference
from .models.trigger import TriggerOptions, TriggerOutcome, TriggerResult
from .tracing import traced


class JobTrigger:
    """Runs one trigger: resolve names, start the jobs, wait for them.

    Job level outcomes (success, failure, timeout) are reported through the
    returned :class:`TriggerResult`. Failures that prevent the jobs from being
    started at all (authentication, resolution, submission) are raised as
    :class:`TriggerError` subclasses.
    """

    def __init__(self, client: UiPathTrigger) -> None:
        self._client = client
        self._logger = getLogger("uipath_trigger")

    @traced(name="trigger_run", run_type="uipath")
    def run(
        self,
        options: TriggerOptions,
        *,
        on_update: Optional[Callable[[Job], None]] = None,
    ) -> TriggerResult:
        folder = self._resolve_folder(options.folder)
        process = self._resolve("process", options.process_name, folder)
        robots = self._resolve_many("robot", options.robot_names, folder)
        machines = self._resolve_many("machine", options.machine_names, folder)

        if options.robot_names and not any(r.is_resolved for r in robots):
            self._logger.warning(
                "None of the requested robots could be resolved, "
                "letting Orchestrator allocate the jobs"
            )

        strategy = select_strategy(robots, machines)
        result = TriggerResult(
            outcome=TriggerOutcome.DRY_RUN,
            folder=folder,
            process=process,
            robots=robots,
            machines=machines,
            strategy=strategy,
        )

        if options.dry_run:
            self._logger.info("Dry run, no job started")
            return result

        jobs_service = self._client.jobs
        jobs, result.strategy = jobs_service.start(
            process,
            folder=folder,
            strategy=strategy,
            robots=robots,
            machines=machines,
            jobs_count=options.jobs_count,
            priority=options.priority,
            input_arguments=options.input_arguments,
            runtime_type=options.runtime_type,
        )
        result.jobs = jobs

        if not options.wait:
            result.outcome = TriggerOutcome.SUBMITTED
            return result

        try:
            result.jobs = jobs_service.wait_for_completion(
                jobs,
                folder=folder,
                timeout=options.timeout,
                poll_interval=options.poll_interval,
                on_update=on_update,
            )
        except JobTimeoutError as e:
            self._logger.error(e.message)
            result.jobs = e.jobs
            result.outcome = TriggerOutcome.TIMED_OUT
            return result

        result.outcome = self._outcome(result.jobs, options.fail_on_failure)
        return result

    def _outcome(self, jobs: List[Job], fail_on_failure: bool) -> TriggerOutcome:
        failed = [job for job in jobs if job.is_failure]
        if not failed:
            return TriggerOutcome.SUCCEEDED

        for job in failed:
            self._logger.error(f"Job {job.id} finished as {job.state}: {job.info or ''}")
        if fail_on_failure:
            return TriggerOutcome.FAILED

        self._logger.warning(
            f"{len(failed)} job(s) did not succeed, failures are tolerated"
        )
        return TriggerOutcome.FAILURE_TOLERATED

    def _resolve_folder(self, name: Optional[str]) -> Optional[EntityReference]:
        if not name:
            return None
        try:
            return self._client.folders.resolve(name)
        except (EnrichedException, TransportError) as e:
            raise ResolutionError("folder", name, str(e)) from e

    def _resolve(
        self, entity: str, name: str, folder: Optional[EntityReference]
    ) -> EntityReference:
        try:
            return self._client.processes.resolve(name, folder=folder)
        except (EnrichedException, TransportError) as e:
            raise ResolutionError(entity, name, str(e)) from e

    def _resolve_many(
        self, entity: str, names: List[str], folder: Optional[EntityReference]
    ) -> List[EntityReference]:
        if not names:
            return []
        service = self._client.robots if entity == "robot" else self._client.machines
        try:
            return service.resolve_many(names, folder=folder)
        except (EnrichedException, TransportError) as e:
            raise ResolutionError(entity, ", ".join(names), str(e)) from e
