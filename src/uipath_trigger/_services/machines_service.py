from .._config import Config
from .._utils import Endpoint
from ..models.robots import Machine
from ._catalog_service import CatalogService


class MachinesService(CatalogService[Machine]):
    """Service for looking up machines (templates) jobs can be targeted at."""

    entity = "machine"
    model = Machine
    endpoint = Endpoint("/orchestrator_/odata/Machines")

    def __init__(self, config: Config) -> None:
        super().__init__(config=config)
