from os import environ as env
from typing import Any, Optional

from ._utils import header_folder
from ._utils.constants import ENV_FOLDER_KEY, ENV_FOLDER_PATH
from .models.references import EntityReference


class FolderContext:
    """Manages the folder context for Orchestrator requests.

    Folder-scoped endpoints (releases, robots, jobs) need to know which folder
    they operate on. The folder comes either from a resolved
    :class:`EntityReference` passed to the service method, or, when none is
    given, from the ``UIPATH_FOLDER_KEY`` / ``UIPATH_FOLDER_PATH`` environment
    variables.
    """

    def __init__(self, **kwargs: Any) -> None:
        self._folder_key: Optional[str] = env.get(ENV_FOLDER_KEY) or None
        self._folder_path: Optional[str] = env.get(ENV_FOLDER_PATH) or None

        super().__init__(**kwargs)

    @property
    def folder_headers(self) -> dict[str, str]:
        """Get the HTTP headers for the folder configured in the environment.

        Returns:
            dict[str, str]: A dictionary containing either the folder key or
                folder path header. Empty when neither is configured.
        """
        if self._folder_key is not None:
            return header_folder(folder_key=self._folder_key)
        elif self._folder_path is not None:
            return header_folder(folder_path=self._folder_path)
        else:
            return {}

    def headers_for_folder(self, folder: Optional[EntityReference]) -> dict[str, str]:
        """Folder headers for a resolved (or passthrough) folder reference."""
        if folder is None:
            return self.folder_headers
        if folder.id is not None:
            return header_folder(folder_id=folder.id)
        if folder.key is not None:
            return header_folder(folder_key=folder.key)
        return header_folder(folder_path=folder.name)
