import json
import os
from typing import Any, Dict, Optional

import click

from ..._uipath_trigger import UiPathTrigger
from ...models.references import EntityReference


def connection_options(function):
    """Options shared by every command that talks to Orchestrator.

    Unset options fall back to the ``UIPATH_*`` environment variables (a
    ``.env`` file in the working directory is loaded first).
    """
    function = click.option(
        "--verbose",
        "-v",
        is_flag=True,
        help="Enable verbose logging",
    )(function)
    function = click.option(
        "--token",
        help="Bearer token to use instead of client credentials [env: UIPATH_ACCESS_TOKEN]",
    )(function)
    function = click.option(
        "--scope",
        help="Scopes requested for the application token [env: UIPATH_CLIENT_SCOPE]",
    )(function)
    function = click.option(
        "--client-secret",
        help="External application secret [env: UIPATH_CLIENT_SECRET]",
    )(function)
    function = click.option(
        "--client-id",
        help="External application id [env: UIPATH_CLIENT_ID]",
    )(function)
    function = click.option(
        "--tenant",
        help="Tenant logical name [env: UIPATH_TENANT_NAME]",
    )(function)
    function = click.option(
        "--account",
        help="Organization logical name [env: UIPATH_ACCOUNT_NAME]",
    )(function)
    function = click.option(
        "--url",
        help="Automation Cloud or tenant URL [env: UIPATH_URL]",
    )(function)
    return function


def create_client(
    *,
    url: Optional[str],
    account: Optional[str],
    tenant: Optional[str],
    client_id: Optional[str],
    client_secret: Optional[str],
    scope: Optional[str],
    token: Optional[str],
    verbose: bool,
) -> UiPathTrigger:
    return UiPathTrigger(
        base_url=url,
        account=account,
        tenant=tenant,
        secret=token,
        client_id=client_id,
        client_secret=client_secret,
        scope=scope,
        debug=verbose,
    )


def parse_input_arguments(
    input: Optional[str], input_file: Optional[str]
) -> Optional[Dict[str, Any]]:
    """Read process input arguments from a JSON string or a .json file."""
    if input and input_file:
        raise click.UsageError("Use either --input or --input-file, not both.")

    if input_file:
        _, file_extension = os.path.splitext(input_file)
        if file_extension != ".json":
            raise click.BadParameter(
                "Input file extension must be '.json'.", param_hint="--input-file"
            )
        with open(input_file) as f:
            input = f.read()

    if not input:
        return None

    try:
        value = json.loads(input)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"Invalid JSON: {e}", param_hint="--input") from e

    if not isinstance(value, dict):
        raise click.BadParameter(
            "Input arguments must be a JSON object.", param_hint="--input"
        )
    return value


def job_url(base_url: str, job_key: str, folder: Optional[EntityReference]) -> str:
    url = f"{base_url}/orchestrator_/jobs(sidepanel:sidepanel/jobs/{job_key}/details)"
    if folder is not None and folder.id is not None:
        url = f"{url}?fid={folder.id}"
    return url


def write_json(path: str, content: Dict[str, Any]) -> None:
    with open(path, "w") as f:
        json.dump(content, f, indent=2, default=str)
