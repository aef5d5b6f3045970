from typing import Generic, List, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel

from .._folder_context import FolderContext
from .._utils import Endpoint
from .._utils._odata import (
    escape_odata_string,
    is_refused,
    odata_values,
    partial_matches,
    pick_candidate,
)
from ..models.exceptions import EnrichedException
from ..models.references import EntityReference, ResolutionMethod
from ..tracing import traced
from ._base_service import BaseService

ModelT = TypeVar("ModelT", bound=BaseModel)


class CatalogService(FolderContext, BaseService, Generic[ModelT]):
    """Name to id resolution over an OData collection of named entities.

    Subclasses set the collection endpoint, an optional alternate endpoint
    used when the collection is refused, and the model items are parsed into.
    Items are expected to expose ``id`` and ``name``.
    """

    entity: str
    model: Type[ModelT]
    endpoint: Endpoint
    alternate_endpoint: Optional[Endpoint] = None

    def query(
        self,
        filter: str,
        *,
        top: int = 20,
        folder: Optional[EntityReference] = None,
    ) -> List[ModelT]:
        params = {"$filter": filter, "$top": top}
        headers = self.headers_for_folder(folder)
        try:
            response = self.request(
                "GET", url=self.endpoint, params=params, headers=headers
            )
        except EnrichedException as e:
            if self.alternate_endpoint is None or not is_refused(e):
                raise
            self._logger.warning(
                f"{self.entity.capitalize()} catalog unavailable (status {e.status_code}), "
                f"retrying with {self.alternate_endpoint}"
            )
            response = self.request(
                "GET", url=self.alternate_endpoint, params=params, headers=headers
            )

        return [self.model.model_validate(item) for item in odata_values(response.json())]

    def resolve_many(
        self,
        names: Sequence[str],
        *,
        folder: Optional[EntityReference] = None,
    ) -> List[EntityReference]:
        return [self.resolve(name, folder=folder) for name in names]

    @traced(name="catalog_resolve", run_type="uipath")
    def resolve(
        self,
        name: str,
        *,
        folder: Optional[EntityReference] = None,
    ) -> EntityReference:
        """Map an entity name to its numeric id.

        A numeric name is taken as the id. Otherwise an exact name match is
        tried, then a case-insensitive partial match. A name that matches
        nothing is returned unresolved (without ``id``).
        """
        name = name.strip()
        if name.isdigit():
            return EntityReference(
                entity=self.entity,
                name=name,
                id=int(name),
                method=ResolutionMethod.PASSTHROUGH,
            )

        escaped = escape_odata_string(name)
        item = pick_candidate(
            self.query(f"Name eq '{escaped}'", folder=folder),
            key=lambda i: i.name,  # type: ignore[attr-defined]
            logger=self._logger,
            description=f"{self.entity} '{name}'",
        )
        if item is not None:
            return self._reference(name, item, ResolutionMethod.EXACT)

        lowered = escape_odata_string(name.lower())
        candidates = self.query(f"contains(tolower(Name), '{lowered}')", folder=folder)
        item = pick_candidate(
            partial_matches(candidates, name, "name"),
            key=lambda i: i.name,  # type: ignore[attr-defined]
            logger=self._logger,
            description=f"{self.entity} '{name}'",
        )
        if item is not None:
            return self._reference(name, item, ResolutionMethod.PARTIAL)

        self._logger.warning(f"{self.entity.capitalize()} '{name}' not found")
        return EntityReference(
            entity=self.entity, name=name, method=ResolutionMethod.PASSTHROUGH
        )

    def _reference(
        self, name: str, item: ModelT, method: ResolutionMethod
    ) -> EntityReference:
        reference = EntityReference(
            entity=self.entity,
            name=name,
            id=item.id,  # type: ignore[attr-defined]
            resolved_name=item.name,  # type: ignore[attr-defined]
            method=method,
        )
        self._logger.info(f"Resolved {reference.describe()}")
        return reference
