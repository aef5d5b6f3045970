import pytest
from pytest_httpx import HTTPXMock

from uipath_trigger._config import Config
from uipath_trigger._services import MachinesService, RobotsService
from uipath_trigger.models import EntityReference, ResolutionMethod
from uipath_trigger.models.exceptions import EnrichedException


@pytest.fixture
def robots(config: Config) -> RobotsService:
    return RobotsService(config=config)


@pytest.fixture
def machines(config: Config) -> MachinesService:
    return MachinesService(config=config)


class TestRobotsService:
    def test_numeric_name_is_used_as_id(
        self, httpx_mock: HTTPXMock, robots: RobotsService
    ):
        reference = robots.resolve("17")

        assert reference.id == 17
        assert reference.method == ResolutionMethod.PASSTHROUGH
        assert httpx_mock.get_requests() == []

    def test_exact_match(self, httpx_mock: HTTPXMock, robots: RobotsService):
        httpx_mock.add_response(json={"value": [{"Id": 5, "Name": "Bot01"}]})
        folder = EntityReference(
            entity="folder", name="Shared", id=3, method=ResolutionMethod.EXACT
        )

        reference = robots.resolve("Bot01", folder=folder)

        assert reference.id == 5
        assert reference.method == ResolutionMethod.EXACT
        sent_request = httpx_mock.get_request()
        assert sent_request is not None
        assert sent_request.url.path == "/org/tenant/orchestrator_/odata/Robots"
        assert sent_request.url.params["$filter"] == "Name eq 'Bot01'"
        assert sent_request.headers["x-uipath-organizationunitid"] == "3"

    def test_refused_catalog_uses_find_all_across_folders(
        self, httpx_mock: HTTPXMock, robots: RobotsService
    ):
        httpx_mock.add_response(status_code=403)
        httpx_mock.add_response(json={"value": [{"Id": 6, "Name": "Bot02"}]})

        reference = robots.resolve("Bot02")

        assert reference.id == 6
        fallback_request = httpx_mock.get_requests()[1]
        assert fallback_request.url.path.endswith(
            "/odata/Robots/UiPath.Server.Configuration.OData.FindAllAcrossFolders"
        )

    def test_partial_match(self, httpx_mock: HTTPXMock, robots: RobotsService):
        httpx_mock.add_response(json={"value": []})
        httpx_mock.add_response(
            json={"value": [{"Id": 8, "Name": "prod-bot-2"}, {"Id": 7, "Name": "prod-bot-1"}]}
        )

        reference = robots.resolve("PROD-BOT")

        assert reference.id == 7
        assert reference.resolved_name == "prod-bot-1"
        assert reference.method == ResolutionMethod.PARTIAL

    def test_unresolved_robot_has_no_id(
        self, httpx_mock: HTTPXMock, robots: RobotsService
    ):
        httpx_mock.add_response(json={"value": []})
        httpx_mock.add_response(json={"value": []})

        reference = robots.resolve("Ghost")

        assert reference.id is None
        assert not reference.is_resolved

    def test_resolve_many_keeps_order(
        self, httpx_mock: HTTPXMock, robots: RobotsService
    ):
        httpx_mock.add_response(json={"value": [{"Id": 5, "Name": "Bot01"}]})

        references = robots.resolve_many(["12", "Bot01"])

        assert [r.id for r in references] == [12, 5]


class TestMachinesService:
    def test_exact_match(self, httpx_mock: HTTPXMock, machines: MachinesService):
        httpx_mock.add_response(json={"value": [{"Id": 2, "Name": "VM-01"}]})

        reference = machines.resolve("VM-01")

        assert reference.id == 2
        sent_request = httpx_mock.get_request()
        assert sent_request is not None
        assert sent_request.url.path == "/org/tenant/orchestrator_/odata/Machines"

    def test_refused_catalog_propagates(
        self, httpx_mock: HTTPXMock, machines: MachinesService
    ):
        httpx_mock.add_response(status_code=403)

        with pytest.raises(EnrichedException):
            machines.resolve("VM-01")
