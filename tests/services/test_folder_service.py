import pytest
from pytest_httpx import HTTPXMock

from uipath_trigger._config import Config
from uipath_trigger._services import FolderService
from uipath_trigger.models import ResolutionMethod
from uipath_trigger.models.exceptions import EnrichedException


@pytest.fixture
def service(config: Config) -> FolderService:
    return FolderService(config=config)


def _folder(id: int, display_name: str, fqn: str) -> dict:
    return {
        "Id": id,
        "Key": f"key-{id}",
        "DisplayName": display_name,
        "FullyQualifiedName": fqn,
    }


class TestFolderService:
    def test_list_paginates(self, httpx_mock: HTTPXMock, service: FolderService):
        httpx_mock.add_response(
            json={"value": [_folder(i, f"F{i}", f"Shared/F{i}") for i in range(2)]}
        )
        httpx_mock.add_response(json={"value": [_folder(2, "F2", "Shared/F2")]})

        folders = list(service.list(top=2))

        assert [f.id for f in folders] == [0, 1, 2]
        requests = httpx_mock.get_requests()
        assert [r.url.params["$skip"] for r in requests] == ["0", "2"]

    def test_retrieve_filters_on_name_and_path(
        self, httpx_mock: HTTPXMock, service: FolderService, tenant_url: str
    ):
        httpx_mock.add_response(json={"value": [_folder(7, "Finance", "Shared/Finance")]})

        folders = service.retrieve("Shared/Finance")

        assert folders[0].id == 7
        sent_request = httpx_mock.get_request()
        assert sent_request is not None
        assert sent_request.url.path == "/org/tenant/orchestrator_/odata/Folders"
        assert (
            sent_request.url.params["$filter"]
            == "FullyQualifiedName eq 'Shared/Finance' or DisplayName eq 'Shared/Finance'"
        )

    def test_retrieve_escapes_quotes(self, httpx_mock: HTTPXMock, service: FolderService):
        httpx_mock.add_response(json={"value": []})

        service.retrieve("Bob's")

        sent_request = httpx_mock.get_request()
        assert sent_request is not None
        assert "'Bob''s'" in sent_request.url.params["$filter"]

    def test_search_reads_page_items(self, httpx_mock: HTTPXMock, service: FolderService):
        httpx_mock.add_response(
            json={"PageItems": [_folder(3, "Finance", "Shared/Finance")], "Count": 1}
        )

        folders = service.search("Finance")

        assert [f.display_name for f in folders] == ["Finance"]
        sent_request = httpx_mock.get_request()
        assert sent_request is not None
        assert (
            sent_request.url.path
            == "/org/tenant/orchestrator_/api/FoldersNavigation/GetFoldersForCurrentUser"
        )
        assert sent_request.url.params["searchText"] == "Finance"

    class TestResolve:
        def test_numeric_name_is_used_as_id(
            self, httpx_mock: HTTPXMock, service: FolderService
        ):
            reference = service.resolve("123")

            assert reference.id == 123
            assert reference.method == ResolutionMethod.PASSTHROUGH
            assert httpx_mock.get_requests() == []

        def test_exact_match_on_path(self, httpx_mock: HTTPXMock, service: FolderService):
            httpx_mock.add_response(
                json={
                    "value": [
                        _folder(8, "Finance", "Archive/Finance"),
                        _folder(7, "Finance", "Shared/Finance"),
                    ]
                }
            )

            reference = service.resolve("Shared/Finance")

            assert reference.id == 7
            assert reference.resolved_name == "Shared/Finance"
            assert reference.method == ResolutionMethod.EXACT

        def test_exact_match_on_display_name(
            self, httpx_mock: HTTPXMock, service: FolderService
        ):
            httpx_mock.add_response(json={"value": [_folder(4, "Sanity", "QA/Sanity")]})

            reference = service.resolve("Sanity")

            assert reference.id == 4
            assert reference.method == ResolutionMethod.EXACT

        def test_refused_catalog_falls_back_to_navigation(
            self, httpx_mock: HTTPXMock, service: FolderService
        ):
            httpx_mock.add_response(status_code=403)
            httpx_mock.add_response(
                json={"PageItems": [_folder(9, "Sanity", "QA/Sanity")]}
            )

            reference = service.resolve("QA/Sanity")

            assert reference.id == 9
            assert reference.method == ResolutionMethod.EXACT
            search_request = httpx_mock.get_requests()[1]
            assert search_request.url.params["searchText"] == "Sanity"

        def test_partial_match_prefers_shortest_path(
            self, httpx_mock: HTTPXMock, service: FolderService
        ):
            httpx_mock.add_response(json={"value": []})
            httpx_mock.add_response(
                json={
                    "PageItems": [
                        _folder(11, "Sanity Tests", "A/Sanity Tests"),
                        _folder(10, "Sanity", "QA/Sanity"),
                    ]
                }
            )

            reference = service.resolve("sanity")

            assert reference.id == 10
            assert reference.method == ResolutionMethod.PARTIAL

        def test_unknown_folder_is_passed_through(
            self, httpx_mock: HTTPXMock, service: FolderService
        ):
            httpx_mock.add_response(json={"value": []})
            httpx_mock.add_response(json={"PageItems": []})

            reference = service.resolve("/Shared/Missing/")

            assert reference.name == "Shared/Missing"
            assert reference.id is None
            assert not reference.is_resolved
            assert reference.method == ResolutionMethod.PASSTHROUGH

        def test_server_error_propagates(
            self, httpx_mock: HTTPXMock, service: FolderService
        ):
            httpx_mock.add_response(status_code=401)

            with pytest.raises(EnrichedException) as exc_info:
                service.resolve("Shared")

            assert exc_info.value.status_code == 401
