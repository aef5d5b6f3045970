from typing import Any, Dict, Iterator, List, Optional

from .._config import Config
from .._utils import Endpoint, RequestSpec
from .._utils._odata import (
    escape_odata_string,
    is_refused,
    odata_values,
    partial_matches,
    pick_candidate,
)
from ..models.exceptions import EnrichedException
from ..models.folders import Folder
from ..models.references import EntityReference, ResolutionMethod
from ..tracing import traced
from ._base_service import BaseService


def _path(folder: Folder) -> str:
    return folder.fully_qualified_name or folder.display_name


class FolderService(BaseService):
    """Service for looking up Orchestrator folders.

    A folder groups the releases, robots and jobs the trigger flow works on.
    Every folder-scoped request needs the folder's numeric id (or, failing
    that, its path) in a header, so the first step of a run is mapping the
    folder name given on the command line to one of those.
    """

    MAX_PAGES = 10

    def __init__(self, config: Config) -> None:
        super().__init__(config=config)

    @traced(name="folders_list", run_type="uipath")
    def list(
        self,
        *,
        filter: Optional[str] = None,
        top: int = 100,
        skip: int = 0,
    ) -> Iterator[Folder]:
        """List folders with auto-pagination.

        Args:
            filter: OData $filter expression
            top: Maximum items per page (default 100)
            skip: Number of items to skip

        Yields:
            Folder: Folder instances
        """
        current_skip = skip
        pages_fetched = 0

        while pages_fetched < self.MAX_PAGES:
            spec = self._list_spec(filter=filter, skip=current_skip, top=top)
            response = self.request(
                spec.method,
                url=spec.endpoint,
                params=spec.params,
            ).json()

            items = odata_values(response)
            if not items:
                break

            for item in items:
                yield Folder.model_validate(item)

            pages_fetched += 1

            if len(items) < top:
                break

            current_skip += top

    @traced(name="folders_retrieve", run_type="uipath")
    def retrieve(self, name: str) -> List[Folder]:
        """Folders whose fully qualified name or display name equals ``name``.

        Raises:
            EnrichedException: If the folders catalog cannot be queried.
        """
        escaped = escape_odata_string(name)
        return list(
            self.list(
                filter=(
                    f"FullyQualifiedName eq '{escaped}' or DisplayName eq '{escaped}'"
                ),
                top=20,
            )
        )

    @traced(name="folders_search", run_type="uipath")
    def search(self, search_text: str, *, take: int = 20) -> List[Folder]:
        """Search the folders visible to the current user.

        Uses the folders navigation API, which is available to robot and
        external application identities that cannot read the OData catalog.
        """
        folders: List[Folder] = []
        skip = 0
        pages_fetched = 0

        while pages_fetched < self.MAX_PAGES:
            spec = self._search_spec(search_text, skip=skip, take=take)
            response = self.request(
                spec.method,
                url=spec.endpoint,
                params=spec.params,
            ).json()

            page_items = response.get("PageItems", []) if isinstance(response, dict) else []
            folders.extend(Folder.model_validate(item) for item in page_items)
            pages_fetched += 1

            if len(page_items) < take:
                break

            skip += take

        return folders

    @traced(name="folders_resolve", run_type="uipath")
    def resolve(self, name: str) -> EntityReference:
        """Map a folder name or path to its numeric id.

        Lookup order: a numeric value is taken as the id; then an exact match
        on the fully qualified or display name; then a partial match among the
        folders the navigation search returns. A name nobody recognises is
        passed through and later sent as the folder path header.

        Args:
            name: Folder id, display name or fully qualified path
                (e.g. ``Shared/Finance``).

        Returns:
            EntityReference: The resolved reference.
        """
        name = name.strip().strip("/")
        if name.isdigit():
            self._logger.debug(f"Folder '{name}' is numeric, using it as the id")
            return EntityReference(
                entity="folder",
                name=name,
                id=int(name),
                method=ResolutionMethod.PASSTHROUGH,
            )

        exact: List[Folder] = []
        try:
            exact = self.retrieve(name)
        except EnrichedException as e:
            if not is_refused(e):
                raise
            self._logger.warning(
                f"Folders catalog unavailable (status {e.status_code}), "
                "falling back to the folders navigation search"
            )

        folder = self._pick_exact(exact, name)
        if folder is not None:
            return self._reference(name, folder, ResolutionMethod.EXACT)

        found: List[Folder] = []
        try:
            found = self.search(name.split("/")[-1])
        except EnrichedException as e:
            if not is_refused(e):
                raise
            self._logger.warning(
                f"Folders navigation search unavailable (status {e.status_code})"
            )

        folder = self._pick_exact(found, name)
        if folder is not None:
            return self._reference(name, folder, ResolutionMethod.EXACT)

        folder = pick_candidate(
            partial_matches(found, name, "fully_qualified_name", "display_name"),
            key=lambda f: (len(_path(f)), _path(f)),
            logger=self._logger,
            description=f"folder '{name}'",
            label=_path,
        )
        if folder is not None:
            return self._reference(name, folder, ResolutionMethod.PARTIAL)

        self._logger.warning(
            f"Folder '{name}' not found, sending it as a folder path as is"
        )
        return EntityReference(
            entity="folder", name=name, method=ResolutionMethod.PASSTHROUGH
        )

    def _pick_exact(self, folders: List[Folder], name: str) -> Optional[Folder]:
        by_path = [f for f in folders if f.fully_qualified_name == name]
        if by_path:
            return by_path[0]
        return pick_candidate(
            [f for f in folders if f.display_name == name],
            key=_path,
            logger=self._logger,
            description=f"folder display name '{name}'",
        )

    def _reference(
        self, name: str, folder: Folder, method: ResolutionMethod
    ) -> EntityReference:
        reference = EntityReference(
            entity="folder",
            name=name,
            id=folder.id,
            key=folder.key if folder.id is None else None,
            resolved_name=folder.fully_qualified_name or folder.display_name,
            method=method,
        )
        self._logger.info(f"Resolved {reference.describe()}")
        return reference

    def _list_spec(
        self,
        filter: Optional[str],
        skip: int,
        top: int,
    ) -> RequestSpec:
        params: Dict[str, Any] = {"$skip": skip, "$top": top}
        if filter:
            params["$filter"] = filter

        return RequestSpec(
            method="GET",
            endpoint=Endpoint("/orchestrator_/odata/Folders"),
            params=params,
        )

    def _search_spec(self, search_text: str, *, skip: int, take: int) -> RequestSpec:
        return RequestSpec(
            method="GET",
            endpoint=Endpoint(
                "/orchestrator_/api/FoldersNavigation/GetFoldersForCurrentUser"
            ),
            params={
                "searchText": search_text,
                "skip": skip,
                "take": take,
            },
        )
