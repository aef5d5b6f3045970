import importlib.metadata

import pytest
from click.testing import CliRunner

from uipath_trigger._config import Config
from uipath_trigger._utils._service_url_overrides import clear_overrides_cache

_UIPATH_ENV_VARS = (
    "UIPATH_URL",
    "UIPATH_ACCESS_TOKEN",
    "UNATTENDED_USER_ACCESS_TOKEN",
    "UIPATH_ACCOUNT_NAME",
    "UIPATH_TENANT_NAME",
    "UIPATH_CLIENT_ID",
    "UIPATH_CLIENT_SECRET",
    "UIPATH_CLIENT_SCOPE",
    "UIPATH_FOLDER_KEY",
    "UIPATH_FOLDER_PATH",
    "UIPATH_ORGANIZATION_ID",
    "UIPATH_TENANT_ID",
    "UIPATH_ORCHESTRATOR_URL",
    "UIPATH_IDENTITY_URL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch):
    """Clean environment variables before each test."""
    for name in _UIPATH_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    clear_overrides_cache()
    yield
    clear_overrides_cache()


@pytest.fixture
def runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def base_url() -> str:
    return "https://test.uipath.com"


@pytest.fixture
def org() -> str:
    return "/org"


@pytest.fixture
def tenant() -> str:
    return "/tenant"


@pytest.fixture
def secret() -> str:
    return "secret"


@pytest.fixture
def tenant_url(base_url: str, org: str, tenant: str) -> str:
    return f"{base_url}{org}{tenant}"


@pytest.fixture
def config(tenant_url: str, secret: str) -> Config:
    return Config(base_url=tenant_url, secret=secret)


@pytest.fixture
def version() -> str:
    try:
        return importlib.metadata.version("uipath-trigger")
    except importlib.metadata.PackageNotFoundError:
        return "unknown"
