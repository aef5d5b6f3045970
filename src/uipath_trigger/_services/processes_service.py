from typing import Any, Dict, List, Optional

from .._config import Config
from .._folder_context import FolderContext
from .._utils import Endpoint, RequestSpec
from .._utils._odata import (
    escape_odata_string,
    is_refused,
    odata_values,
    partial_matches,
    pick_candidate,
)
from ..models.exceptions import EnrichedException
from ..models.processes import Process
from ..models.references import EntityReference, ResolutionMethod
from ..tracing import traced
from ._base_service import BaseService


class ProcessesService(FolderContext, BaseService):
    """Service for looking up UiPath processes (releases).

    Processes (also known as automations or workflows) are published packages
    bound to a folder. Starting a job needs the release key of the process in
    the target folder.
    """

    def __init__(self, config: Config) -> None:
        super().__init__(config=config)

    @traced(name="processes_list", run_type="uipath")
    def list(
        self,
        *,
        filter: Optional[str] = None,
        top: int = 100,
        folder: Optional[EntityReference] = None,
    ) -> List[Process]:
        """List releases in a folder.

        Falls back to the ``ListReleases`` function when the Releases
        collection itself is refused.

        Args:
            filter: OData $filter expression
            top: Maximum number of releases to return
            folder: The folder to search in. Defaults to the folder set in the
                environment.
        """
        headers = self.headers_for_folder(folder)
        try:
            spec = self._list_spec(filter=filter, top=top, headers=headers)
            response = self.request(
                spec.method,
                url=spec.endpoint,
                params=spec.params,
                headers=spec.headers,
            )
        except EnrichedException as e:
            if not is_refused(e):
                raise
            self._logger.warning(
                f"Releases catalog unavailable (status {e.status_code}), "
                "retrying with the ListReleases function"
            )
            spec = self._list_releases_spec(filter=filter, top=top, headers=headers)
            response = self.request(
                spec.method,
                url=spec.endpoint,
                params=spec.params,
                headers=spec.headers,
            )

        return [Process.model_validate(item) for item in odata_values(response.json())]

    @traced(name="processes_get_by_name", run_type="uipath")
    def get_by_name(
        self,
        name: str,
        *,
        folder: Optional[EntityReference] = None,
    ) -> Process:
        """Get a release (process) by its exact name.

        Args:
            name (str): The exact name of the release to retrieve.
            folder (Optional[EntityReference]): The folder to search in.

        Returns:
            Process: The process (release) matching the name.

        Raises:
            LookupError: If the release is not found or multiple releases match.

        Examples:
            ```python
            from uipath_trigger import UiPathTrigger

            client = UiPathTrigger()

            release = client.processes.get_by_name("SanityTests")
            print(release.key)
            ```
        """
        releases = self.list(
            filter=f"Name eq '{escape_odata_string(name)}'", top=2, folder=folder
        )

        if len(releases) == 0:
            raise LookupError(f"Release '{name}' not found")
        elif len(releases) > 1:
            raise LookupError(f"Multiple releases found with name '{name}'")

        return releases[0]

    @traced(name="processes_resolve", run_type="uipath")
    def resolve(
        self,
        name: str,
        *,
        folder: Optional[EntityReference] = None,
    ) -> EntityReference:
        """Map a process name to the release key in the target folder.

        Tries an exact match on the release name, then on the package
        (process key), then a case-insensitive partial match on the release
        name. When nothing matches the name is passed through and the job is
        started by release name.

        Args:
            name: Release name or package id.
            folder: The folder to search in.

        Returns:
            EntityReference: The resolved reference (``key`` holds the release key).
        """
        name = name.strip()
        escaped = escape_odata_string(name)

        for filter in (f"Name eq '{escaped}'", f"ProcessKey eq '{escaped}'"):
            releases = self.list(filter=filter, top=2, folder=folder)
            if releases:
                release = pick_candidate(
                    releases,
                    key=lambda r: r.name,
                    logger=self._logger,
                    description=f"process '{name}'",
                )
                return self._reference(name, release, ResolutionMethod.EXACT)  # type: ignore[arg-type]

        lowered = escape_odata_string(name.lower())
        candidates = self.list(
            filter=f"contains(tolower(Name), '{lowered}')", top=20, folder=folder
        )
        release = pick_candidate(
            partial_matches(candidates, name, "name", "process_key"),
            key=lambda r: r.name,
            logger=self._logger,
            description=f"process '{name}'",
        )
        if release is not None:
            return self._reference(name, release, ResolutionMethod.PARTIAL)

        self._logger.warning(
            f"Process '{name}' not found, starting the job by release name"
        )
        return EntityReference(
            entity="process", name=name, method=ResolutionMethod.PASSTHROUGH
        )

    def _reference(
        self, name: str, release: Process, method: ResolutionMethod
    ) -> EntityReference:
        reference = EntityReference(
            entity="process",
            name=name,
            key=release.key,
            id=release.id,
            resolved_name=release.name,
            method=method,
        )
        self._logger.info(f"Resolved {reference.describe()}")
        return reference

    def _list_spec(
        self, *, filter: Optional[str], top: int, headers: Dict[str, str]
    ) -> RequestSpec:
        params: Dict[str, Any] = {"$top": top}
        if filter:
            params["$filter"] = filter
        return RequestSpec(
            method="GET",
            endpoint=Endpoint("/orchestrator_/odata/Releases"),
            params=params,
            headers=headers,
        )

    def _list_releases_spec(
        self, *, filter: Optional[str], top: int, headers: Dict[str, str]
    ) -> RequestSpec:
        params: Dict[str, Any] = {"$top": top}
        if filter:
            params["$filter"] = filter
        return RequestSpec(
            method="GET",
            endpoint=Endpoint(
                "/orchestrator_/odata/Releases/UiPath.Server.Configuration.OData.ListReleases"
            ),
            params=params,
            headers=headers,
        )
