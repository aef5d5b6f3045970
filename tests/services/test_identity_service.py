from urllib.parse import parse_qs

import httpx
import pytest
from pytest_httpx import HTTPXMock

from uipath_trigger._services import IdentityService
from uipath_trigger._utils.constants import DEFAULT_CLIENT_SCOPE
from uipath_trigger.models.errors import AuthenticationError


@pytest.fixture
def service(tenant_url: str) -> IdentityService:
    return IdentityService(tenant_url)


class TestIdentityService:
    def test_token_url_is_host_scoped(self, service: IdentityService, base_url: str):
        assert service.token_url == f"{base_url}/identity_/connect/token"

    def test_token_url_override(
        self, service: IdentityService, monkeypatch: pytest.MonkeyPatch
    ):
        monkeypatch.setenv("UIPATH_IDENTITY_URL", "https://orchestrator.local/identity")

        assert service.token_url == "https://orchestrator.local/identity/connect/token"

    def test_get_access_token(
        self, httpx_mock: HTTPXMock, service: IdentityService, base_url: str
    ):
        httpx_mock.add_response(
            url=f"{base_url}/identity_/connect/token",
            method="POST",
            json={
                "access_token": "token-value",
                "token_type": "Bearer",
                "expires_in": 3600,
                "scope": "OR.Jobs",
            },
        )

        token_data = service.get_access_token("client-id", "client-secret")

        assert token_data == {
            "access_token": "token-value",
            "token_type": "Bearer",
            "expires_in": 3600,
            "scope": "OR.Jobs",
        }
        sent_request = httpx_mock.get_request()
        assert sent_request is not None
        form = parse_qs(sent_request.content.decode("utf-8"))
        assert form == {
            "grant_type": ["client_credentials"],
            "client_id": ["client-id"],
            "client_secret": ["client-secret"],
            "scope": [DEFAULT_CLIENT_SCOPE],
        }
        assert sent_request.headers["x-uipath-user-agent"].startswith(
            "UiPath.Python.Trigger/UiPath.Python.Trigger.IdentityService.get_access_token/"
        )

    def test_custom_scope(self, httpx_mock: HTTPXMock, service: IdentityService):
        httpx_mock.add_response(json={"access_token": "token-value"})

        token_data = service.get_access_token("id", "secret", "OR.Jobs OR.Folders")

        assert token_data["scope"] == "OR.Jobs OR.Folders"
        assert token_data["expires_in"] == 3600
        sent_request = httpx_mock.get_request()
        assert sent_request is not None
        assert parse_qs(sent_request.content.decode("utf-8"))["scope"] == [
            "OR.Jobs OR.Folders"
        ]

    @pytest.mark.parametrize(
        "status_code,message",
        [
            (400, "Invalid client credentials or request parameters."),
            (401, "Unauthorized: Invalid client credentials."),
            (500, "Authentication failed: 500 - boom"),
        ],
    )
    def test_rejected_credentials(
        self,
        httpx_mock: HTTPXMock,
        service: IdentityService,
        status_code: int,
        message: str,
    ):
        httpx_mock.add_response(status_code=status_code, text="boom")

        with pytest.raises(AuthenticationError) as exc_info:
            service.get_access_token("id", "secret")

        assert exc_info.value.message == message
        assert exc_info.value.status_code == status_code

    def test_missing_access_token(self, httpx_mock: HTTPXMock, service: IdentityService):
        httpx_mock.add_response(json={"token_type": "Bearer"})

        with pytest.raises(AuthenticationError):
            service.get_access_token("id", "secret")

    def test_network_error(self, httpx_mock: HTTPXMock, service: IdentityService):
        httpx_mock.add_exception(httpx.ConnectError("connection refused"))

        with pytest.raises(AuthenticationError) as exc_info:
            service.get_access_token("id", "secret")

        assert "Network error during authentication" in exc_info.value.message
