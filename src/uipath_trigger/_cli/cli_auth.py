import logging
from datetime import datetime, timezone
from typing import Optional

import click

from .._uipath_trigger import UiPathTrigger
from .._utils import UiPathUrl, setup_logging
from .._utils._auth import parse_access_token, update_env_file
from ..models.errors import TriggerError
from ._utils._console import ConsoleLogger

logger = logging.getLogger("uipath_trigger")
console = ConsoleLogger()


@click.command()
@click.option("--url", envvar="UIPATH_URL", help="Automation Cloud or tenant URL")
@click.option("--account", envvar="UIPATH_ACCOUNT_NAME", help="Organization logical name")
@click.option("--tenant", envvar="UIPATH_TENANT_NAME", help="Tenant logical name")
@click.option("--client-id", envvar="UIPATH_CLIENT_ID", help="External application id")
@click.option(
    "--client-secret", envvar="UIPATH_CLIENT_SECRET", help="External application secret"
)
@click.option("--scope", envvar="UIPATH_CLIENT_SCOPE", help="Requested scopes")
@click.option(
    "--write-env",
    is_flag=True,
    help="Store UIPATH_URL and UIPATH_ACCESS_TOKEN in the .env file",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose logging",
)
def auth(
    url: Optional[str],
    account: Optional[str],
    tenant: Optional[str],
    client_id: Optional[str],
    client_secret: Optional[str],
    scope: Optional[str],
    write_env: bool,
    verbose: bool,
) -> None:
    """Exchange external application credentials for an access token."""
    setup_logging(should_debug=verbose)

    if not url:
        console.error("Orchestrator URL missing. Pass --url or set UIPATH_URL.")
    if not client_id or not client_secret:
        console.error(
            "Client credentials missing. Pass --client-id and --client-secret."
        )

    tenant_url = UiPathUrl.compose(url, account, tenant)  # type: ignore[arg-type]
    try:
        with console.spinner("Authenticating ..."):
            token_data = UiPathTrigger.identity_for(str(tenant_url)).get_access_token(
                client_id,  # type: ignore[arg-type]
                client_secret,  # type: ignore[arg-type]
                scope,
            )
    except TriggerError as e:
        console.error(f"Authentication failed: {e.message}")

    console.success("Authentication successful")

    try:
        claims = parse_access_token(token_data["access_token"])
    except ValueError:
        logger.debug("Access token is not a JWT, skipping claims")
    else:
        if "exp" in claims:
            expires = datetime.fromtimestamp(claims["exp"], tz=timezone.utc)
            console.info(f"Token expires at {expires.isoformat()}")
    console.info(f"Scopes: {token_data['scope']}")

    if write_env:
        update_env_file(
            {
                "UIPATH_URL": str(tenant_url),
                "UIPATH_ACCESS_TOKEN": token_data["access_token"],
            }
        )
        console.success("Updated .env with UIPATH_URL and UIPATH_ACCESS_TOKEN")
