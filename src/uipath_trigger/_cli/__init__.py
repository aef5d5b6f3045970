import importlib.metadata

import click

from .cli_auth import auth as auth
from .cli_start import start as start
from .cli_status import status as status


def _get_safe_version() -> str:
    """Get the version of the uipath-trigger package."""
    try:
        version = importlib.metadata.version("uipath-trigger")
        return version
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


@click.group()
@click.version_option(
    _get_safe_version(),
    prog_name="uipath-trigger",
    message="%(prog)s version %(version)s",
)
def cli() -> None:
    """Start UiPath Orchestrator processes and wait for their jobs."""


cli.add_command(auth)
cli.add_command(start)
cli.add_command(status)
