import logging
from typing import Optional, Tuple

import click
from httpx import TransportError
from pydantic import ValidationError

from .._job_trigger import JobTrigger
from .._utils.constants import DEFAULT_POLL_INTERVAL, DEFAULT_TIMEOUT
from ..models.errors import TriggerError
from ..models.exceptions import EnrichedException
from ..models.job import Job
from ..models.trigger import JobPriority, TriggerOptions, TriggerOutcome, TriggerResult
from ._utils._common import (
    connection_options,
    create_client,
    job_url,
    parse_input_arguments,
    write_json,
)
from ._utils._console import ConsoleLogger

logger = logging.getLogger("uipath_trigger")
console = ConsoleLogger()


def _report(result: TriggerResult) -> None:
    if result.outcome == TriggerOutcome.DRY_RUN:
        console.info("Dry run, resolved targets:")
        for reference in [result.folder, result.process, *result.robots, *result.machines]:
            if reference is not None:
                console.info(f"  {reference.describe()}")
        if result.strategy is not None:
            console.info(f"  strategy: {result.strategy.value}")
        return

    for job in result.jobs:
        console.info(f"Job {job.id}: {job.state}")

    match result.outcome:
        case TriggerOutcome.SUBMITTED:
            console.success(f"Started {len(result.jobs)} job(s)")
        case TriggerOutcome.SUCCEEDED:
            console.success("All jobs finished successfully")
        case TriggerOutcome.FAILURE_TOLERATED:
            console.warning(
                f"{len(result.failed_jobs)} job(s) failed, ignored (--no-fail-on-failure)"
            )
        case TriggerOutcome.FAILED:
            console.log(f"{len(result.failed_jobs)} job(s) failed", fg="red")
        case TriggerOutcome.TIMED_OUT:
            console.log("Timed out waiting for the jobs to finish", fg="red")


@click.command()
@click.argument("process_name")
@connection_options
@click.option(
    "--folder",
    "-f",
    help="Folder path, display name or id [env: UIPATH_FOLDER_PATH]",
)
@click.option(
    "--robot",
    "robots",
    multiple=True,
    help="Robot name or id to run the job on (repeatable)",
)
@click.option(
    "--machine",
    "machines",
    multiple=True,
    help="Machine name or id to run the job on (repeatable)",
)
@click.option(
    "--jobs-count",
    type=click.IntRange(min=1),
    default=1,
    show_default=True,
    help="Number of jobs to start when Orchestrator allocates them",
)
@click.option(
    "--priority",
    type=click.Choice([p.value for p in JobPriority], case_sensitive=False),
    default=JobPriority.NORMAL.value,
    show_default=True,
)
@click.option("--input", "input", help="Input arguments as a JSON object")
@click.option(
    "--input-file",
    type=click.Path(exists=True, dir_okay=False),
    help="File path for the .json input arguments",
)
@click.option(
    "--wait/--no-wait",
    default=True,
    show_default=True,
    help="Wait for the jobs to reach a terminal state",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=DEFAULT_TIMEOUT,
    show_default=True,
    help="Seconds to wait for the jobs to finish",
)
@click.option(
    "--poll-interval",
    type=click.FloatRange(min=0),
    default=DEFAULT_POLL_INTERVAL,
    show_default=True,
    help="Seconds between two job status checks",
)
@click.option(
    "--fail-on-failure/--no-fail-on-failure",
    default=True,
    show_default=True,
    help="Exit with status 1 when a job faults or is stopped",
)
@click.option("--runtime-type", help="Runtime type, e.g. Unattended")
@click.option(
    "--dry-run",
    is_flag=True,
    help="Resolve folder, process and targets without starting a job",
)
@click.option(
    "--output-file",
    type=click.Path(dir_okay=False, writable=True),
    help="Write a JSON summary of the run to this file",
)
def start(
    process_name: str,
    url: Optional[str],
    account: Optional[str],
    tenant: Optional[str],
    client_id: Optional[str],
    client_secret: Optional[str],
    scope: Optional[str],
    token: Optional[str],
    verbose: bool,
    folder: Optional[str],
    robots: Tuple[str, ...],
    machines: Tuple[str, ...],
    jobs_count: int,
    priority: str,
    input: Optional[str],
    input_file: Optional[str],
    wait: bool,
    timeout: float,
    poll_interval: float,
    fail_on_failure: bool,
    runtime_type: Optional[str],
    dry_run: bool,
    output_file: Optional[str],
) -> None:
    """Start a process in Orchestrator and wait for its jobs to finish.

    PROCESS_NAME is the release name or package id of the process.
    """
    input_arguments = parse_input_arguments(input, input_file)

    try:
        options = TriggerOptions(
            process_name=process_name,
            folder=folder,
            robot_names=list(robots),
            machine_names=list(machines),
            jobs_count=jobs_count,
            priority=JobPriority(priority.capitalize()),
            input_arguments=input_arguments,
            runtime_type=runtime_type,
            wait=wait,
            timeout=timeout,
            poll_interval=poll_interval,
            fail_on_failure=fail_on_failure,
            dry_run=dry_run,
        )
    except ValidationError as e:
        raise click.BadParameter(str(e)) from e

    def on_update(job: Job) -> None:
        console.update_spinner(f"Job {job.id} is {job.state} ...")

    try:
        client = create_client(
            url=url,
            account=account,
            tenant=tenant,
            client_id=client_id,
            client_secret=client_secret,
            scope=scope,
            token=token,
            verbose=verbose,
        )
        result = JobTrigger(client).run(options, on_update=on_update)
    except TriggerError as e:
        console.error(e.message)
    except EnrichedException as e:
        console.error(f"Orchestrator request failed: {e}")
    except TransportError as e:
        console.error(f"Could not reach Orchestrator: {e}")

    for job in result.jobs:
        if job.key:
            console.link(
                f"Job {job.id}:", job_url(client.config.base_url, job.key, result.folder)
            )

    _report(result)

    if output_file:
        write_json(output_file, result.summary())
        logger.debug(f"Summary written to {output_file}")

    click.get_current_context().exit(result.exit_code)
