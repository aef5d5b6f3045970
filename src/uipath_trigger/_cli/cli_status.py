from typing import Optional

import click
from httpx import TransportError

from .._utils.constants import DEFAULT_POLL_INTERVAL, DEFAULT_TIMEOUT
from ..models.errors import TriggerError
from ..models.exceptions import EnrichedException
from ._utils._common import connection_options, create_client
from ._utils._console import ConsoleLogger

console = ConsoleLogger()


@click.command()
@click.argument("job_id", type=int)
@connection_options
@click.option("--folder", "-f", help="Folder path, display name or id of the job")
@click.option("--wait", is_flag=True, help="Wait until the job reaches a terminal state")
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=DEFAULT_TIMEOUT,
    show_default=True,
)
@click.option(
    "--poll-interval",
    type=click.FloatRange(min=0),
    default=DEFAULT_POLL_INTERVAL,
    show_default=True,
)
def status(
    job_id: int,
    url: Optional[str],
    account: Optional[str],
    tenant: Optional[str],
    client_id: Optional[str],
    client_secret: Optional[str],
    scope: Optional[str],
    token: Optional[str],
    verbose: bool,
    folder: Optional[str],
    wait: bool,
    timeout: float,
    poll_interval: float,
) -> None:
    """Show the state of a job. Exits with 1 when the job did not succeed."""
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
        folder_reference = client.folders.resolve(folder) if folder else None
        jobs_service = client.jobs
        job = jobs_service.retrieve(job_id, folder=folder_reference)
        if wait and not job.is_terminal:
            job = jobs_service.wait_for_completion(
                [job],
                folder=folder_reference,
                timeout=timeout,
                poll_interval=poll_interval,
            )[0]
    except TriggerError as e:
        console.error(e.message)
    except EnrichedException as e:
        console.error(f"Orchestrator request failed: {e}")
    except TransportError as e:
        console.error(f"Could not reach Orchestrator: {e}")

    console.info(f"Job {job.id} ({job.key}): {job.state}")
    if job.info:
        console.info(job.info)

    click.get_current_context().exit(1 if job.is_failure else 0)
