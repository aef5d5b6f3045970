import base64
import json

from click.testing import CliRunner
from pytest_httpx import HTTPXMock

from uipath_trigger._cli import cli


def _jwt(claims: dict) -> str:
    def encode(value: dict) -> str:
        raw = json.dumps(value).encode("utf-8")
        return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")

    return f"{encode({'alg': 'RS256'})}.{encode(claims)}.signature"


class TestAuth:
    def test_writes_env_file(
        self, runner: CliRunner, httpx_mock: HTTPXMock, base_url: str
    ):
        token = _jwt({"exp": 1700000000, "prt_id": "org-id"})
        httpx_mock.add_response(
            url=f"{base_url}/identity_/connect/token",
            json={"access_token": token, "scope": "OR.Jobs"},
        )

        with runner.isolated_filesystem():
            with open(".env", "w") as f:
                f.write("OTHER=value\n")

            result = runner.invoke(
                cli,
                [
                    "auth",
                    "--url",
                    base_url,
                    "--account",
                    "org",
                    "--tenant",
                    "tenant",
                    "--client-id",
                    "id",
                    "--client-secret",
                    "secret",
                    "--write-env",
                ],
            )

            assert result.exit_code == 0, result.output
            with open(".env") as f:
                env_lines = f.read().splitlines()

        assert "Authentication successful" in result.output
        assert "2023-11-14T22:13:20+00:00" in result.output
        assert f"UIPATH_URL={base_url}/org/tenant" in env_lines
        assert f"UIPATH_ACCESS_TOKEN={token}" in env_lines
        assert "OTHER=value" in env_lines

    def test_rejected_credentials(
        self, runner: CliRunner, httpx_mock: HTTPXMock, base_url: str
    ):
        httpx_mock.add_response(status_code=400)

        result = runner.invoke(
            cli,
            ["auth", "--url", base_url, "--client-id", "id", "--client-secret", "bad"],
        )

        assert result.exit_code == 1
        assert "Invalid client credentials" in result.output

    def test_missing_client_credentials(self, runner: CliRunner, base_url: str):
        result = runner.invoke(cli, ["auth", "--url", base_url])

        assert result.exit_code == 1
        assert "Client credentials missing" in result.output
