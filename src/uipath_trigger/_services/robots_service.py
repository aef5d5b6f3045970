from .._config import Config
from .._utils import Endpoint
from ..models.robots import Robot
from ._catalog_service import CatalogService


class RobotsService(CatalogService[Robot]):
    """Service for looking up robots.

    Robots are the execution agents a job can be pinned to. When specific
    robots are requested the job is started with the ``Specific`` strategy
    and the robot ids resolved here.
    """

    entity = "robot"
    model = Robot
    endpoint = Endpoint("/orchestrator_/odata/Robots")
    alternate_endpoint = Endpoint(
        "/orchestrator_/odata/Robots/UiPath.Server.Configuration.OData.FindAllAcrossFolders"
    )

    def __init__(self, config: Config) -> None:
        super().__init__(config=config)
