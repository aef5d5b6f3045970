from ._endpoint import Endpoint
from ._logs import setup_logging
from ._request_override import header_folder
from ._request_spec import RequestSpec
from ._ssl_context import get_httpx_client_kwargs
from ._url import UiPathUrl
from ._user_agent import header_user_agent, user_agent_value

__all__ = [
    "Endpoint",
    "setup_logging",
    "RequestSpec",
    "header_folder",
    "get_httpx_client_kwargs",
    "UiPathUrl",
    "header_user_agent",
    "user_agent_value",
]
