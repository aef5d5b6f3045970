from logging import getLogger
from typing import Optional

import httpx

from .._utils import Endpoint, UiPathUrl, get_httpx_client_kwargs, header_user_agent
from .._utils._service_url_overrides import resolve_endpoint_override
from .._utils.constants import DEFAULT_CLIENT_SCOPE
from ..models.errors import AuthenticationError
from ..models.token import TokenData
from ..tracing import traced


class IdentityService:
    """Service for the OAuth2 client credentials flow.

    External applications registered in the UiPath Automation Cloud exchange
    their application id and secret for a short lived bearer token. The token
    is never refreshed: every run authenticates again.
    """

    TOKEN_ENDPOINT = Endpoint("/identity_/connect/token")

    def __init__(self, base_url: str) -> None:
        self._logger = getLogger("uipath_trigger")
        self._url = UiPathUrl(base_url)

    @property
    def token_url(self) -> str:
        override_url, _ = resolve_endpoint_override(self.TOKEN_ENDPOINT)
        if override_url is not None:
            return override_url
        return f"{self._url.base_url}{self.TOKEN_ENDPOINT}"

    @traced(name="identity_get_access_token", run_type="uipath")
    def get_access_token(
        self,
        client_id: str,
        client_secret: str,
        scope: Optional[str] = None,
    ) -> TokenData:
        """Exchange application credentials for an access token.

        Args:
            client_id: The external application id.
            client_secret: The external application secret.
            scope: Space separated scopes. Defaults to the execution, jobs,
                folders, robots and machines scopes the trigger flow needs.

        Returns:
            TokenData: The access token and its metadata.

        Raises:
            AuthenticationError: If the identity server rejects the credentials
                or cannot be reached.
        """
        scope = scope or DEFAULT_CLIENT_SCOPE
        data = {
            "grant_type": "client_credentials",
            "client_id": client_id,
            "client_secret": client_secret,
            "scope": scope,
        }

        self._logger.debug(f"Requesting access token from {self.token_url}")

        try:
            with httpx.Client(**get_httpx_client_kwargs()) as client:
                response = client.post(
                    self.token_url,
                    data=data,
                    headers=header_user_agent("IdentityService.get_access_token"),
                )
        except httpx.RequestError as e:
            raise AuthenticationError(
                f"Network error during authentication: {e}"
            ) from e

        match response.status_code:
            case 200:
                token_data = response.json()
                if not token_data.get("access_token"):
                    raise AuthenticationError(
                        "Identity server response did not contain an access token.",
                        status_code=response.status_code,
                    )
                self._logger.debug("Access token received")
                return {
                    "access_token": token_data["access_token"],
                    "token_type": token_data.get("token_type", "Bearer"),
                    "expires_in": token_data.get("expires_in", 3600),
                    "scope": token_data.get("scope", scope),
                }
            case 400:
                raise AuthenticationError(
                    "Invalid client credentials or request parameters.",
                    status_code=400,
                )
            case 401:
                raise AuthenticationError(
                    "Unauthorized: Invalid client credentials.", status_code=401
                )
            case _:
                raise AuthenticationError(
                    f"Authentication failed: {response.status_code} - {response.text}",
                    status_code=response.status_code,
                )
