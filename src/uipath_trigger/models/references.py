from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ResolutionMethod(str, Enum):
    """How a human readable name was mapped to an Orchestrator identifier."""

    EXACT = "exact"
    PARTIAL = "partial"
    PASSTHROUGH = "passthrough"


class EntityReference(BaseModel):
    """A requested name together with the identifier it resolved to.

    ``id`` holds numeric identifiers (folders, robots, machines) and ``key``
    holds GUID keys (releases). A passthrough reference may carry neither, in
    which case the raw ``name`` is sent to Orchestrator instead.
    """

    model_config = ConfigDict(use_enum_values=False)

    entity: str
    name: str
    method: ResolutionMethod
    id: Optional[int] = None
    key: Optional[str] = None
    resolved_name: Optional[str] = None

    @property
    def is_resolved(self) -> bool:
        return self.id is not None or self.key is not None

    def describe(self) -> str:
        target = self.key if self.key is not None else self.id
        if target is None:
            return f"{self.entity} '{self.name}' (passthrough)"
        label = self.resolved_name or self.name
        return f"{self.entity} '{label}' -> {target} ({self.method.value})"
