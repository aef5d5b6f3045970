from logging import getLogger
from os import environ as env
from typing import Optional

from dotenv import load_dotenv

from ._config import Config
from ._services import (
    FolderService,
    IdentityService,
    JobsService,
    MachinesService,
    ProcessesService,
    RobotsService,
)
from ._utils import UiPathUrl, setup_logging
from ._utils.constants import (
    ENV_ACCOUNT_NAME,
    ENV_BASE_URL,
    ENV_CLIENT_ID,
    ENV_CLIENT_SCOPE,
    ENV_CLIENT_SECRET,
    ENV_TENANT_NAME,
    ENV_UIPATH_ACCESS_TOKEN,
    ENV_UNATTENDED_USER_ACCESS_TOKEN,
)
from .models.errors import BaseUrlMissingError, SecretMissingError

load_dotenv()


class UiPathTrigger:
    """Entry point to the Orchestrator services used to trigger jobs.

    Credentials are taken from the arguments first, then from the environment
    (``UIPATH_URL``, ``UIPATH_ACCOUNT_NAME``, ``UIPATH_TENANT_NAME``,
    ``UIPATH_CLIENT_ID``/``UIPATH_CLIENT_SECRET`` or ``UIPATH_ACCESS_TOKEN``).
    When application credentials are available they are exchanged for a
    bearer token right away; an explicit token is used as is.
    """

    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        account: Optional[str] = None,
        tenant: Optional[str] = None,
        secret: Optional[str] = None,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        scope: Optional[str] = None,
        debug: bool = False,
    ) -> None:
        """Initialize the trigger client.

        Args:
            base_url (Optional[str]): The Automation Cloud URL, either the host
                (``https://cloud.uipath.com``) or the tenant URL
                (``https://cloud.uipath.com/{account}/{tenant}``).
            account (Optional[str]): Organization (account) logical name.
            tenant (Optional[str]): Tenant logical name.
            secret (Optional[str]): A bearer token to use as is.
            client_id (Optional[str]): External application id.
            client_secret (Optional[str]): External application secret.
            scope (Optional[str]): Scopes requested for the application token.
            debug (bool): Enable debug logging if set to True. Defaults to False.

        Raises:
            BaseUrlMissingError: If no URL is configured.
            SecretMissingError: If neither a token nor application credentials
                are configured.
            AuthenticationError: If the application credentials are rejected.
        """
        setup_logging(debug)
        self._logger = getLogger("uipath_trigger")

        base_url_value = base_url or env.get(ENV_BASE_URL)
        if not base_url_value:
            raise BaseUrlMissingError()

        url = UiPathUrl.compose(
            base_url_value,
            account or env.get(ENV_ACCOUNT_NAME),
            tenant or env.get(ENV_TENANT_NAME),
        )

        client_id_value = client_id or env.get(ENV_CLIENT_ID)
        client_secret_value = client_secret or env.get(ENV_CLIENT_SECRET)

        secret_value = secret
        if not secret_value and client_id_value and client_secret_value:
            self._logger.info("Authenticating with client credentials")
            token_data = self.identity_for(str(url)).get_access_token(
                client_id_value,
                client_secret_value,
                scope or env.get(ENV_CLIENT_SCOPE),
            )
            secret_value = token_data["access_token"]

        secret_value = (
            secret_value
            or env.get(ENV_UNATTENDED_USER_ACCESS_TOKEN)
            or env.get(ENV_UIPATH_ACCESS_TOKEN)
        )
        if not secret_value:
            raise SecretMissingError()

        self._config = Config(base_url=str(url), secret=secret_value)
        self._logger.debug(f"Orchestrator URL: {self._config.base_url}")

    @staticmethod
    def identity_for(base_url: str) -> IdentityService:
        return IdentityService(base_url)

    @property
    def config(self) -> Config:
        return self._config

    @property
    def folders(self) -> FolderService:
        """Folders group the releases, robots and jobs of an automation."""
        return FolderService(self._config)

    @property
    def processes(self) -> ProcessesService:
        """Processes (releases) are the automations jobs are started from."""
        return ProcessesService(self._config)

    @property
    def robots(self) -> RobotsService:
        return RobotsService(self._config)

    @property
    def machines(self) -> MachinesService:
        return MachinesService(self._config)

    @property
    def jobs(self) -> JobsService:
        """Jobs are single executions of a process."""
        return JobsService(self._config)
