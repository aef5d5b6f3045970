from typing import Optional, Union

from .constants import HEADER_FOLDER_ID, HEADER_FOLDER_KEY, HEADER_FOLDER_PATH


def header_folder(
    folder_id: Optional[Union[int, str]] = None,
    folder_path: Optional[str] = None,
    folder_key: Optional[str] = None,
) -> dict[str, str]:
    provided = [
        value for value in (folder_id, folder_path, folder_key) if value not in (None, "")
    ]
    if len(provided) > 1:
        raise ValueError(
            "Only one of folder_id, folder_path or folder_key can be provided"
        )

    headers = {}
    if folder_id is not None and folder_id != "":
        headers[HEADER_FOLDER_ID] = str(folder_id)
    if folder_path is not None and folder_path != "":
        headers[HEADER_FOLDER_PATH] = folder_path
    if folder_key is not None and folder_key != "":
        headers[HEADER_FOLDER_KEY] = folder_key

    return headers
