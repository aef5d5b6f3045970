from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ._endpoint import Endpoint


@dataclass
class RequestSpec:
    """Method, endpoint and request parts of one Orchestrator call.

    Services build a spec first and send it through ``BaseService.request``,
    which keeps the payload shape testable apart from the transport.
    """

    method: str
    endpoint: Endpoint
    params: Dict[str, Any] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)
    json: Optional[Any] = None
