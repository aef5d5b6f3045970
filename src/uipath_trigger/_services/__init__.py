from .folder_service import FolderService
from .identity_service import IdentityService
from .jobs_service import JobsService, select_strategy
from .machines_service import MachinesService
from .processes_service import ProcessesService
from .robots_service import RobotsService

__all__ = [
    "FolderService",
    "IdentityService",
    "JobsService",
    "MachinesService",
    "ProcessesService",
    "RobotsService",
    "select_strategy",
]
