from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Process(BaseModel):
    """A release: a published package bound to a folder."""

    model_config = ConfigDict(
        validate_by_name=True,
        validate_by_alias=True,
        use_enum_values=True,
        arbitrary_types_allowed=True,
        extra="allow",
    )
    key: str = Field(alias="Key")
    name: str = Field(alias="Name")
    process_key: Optional[str] = Field(default=None, alias="ProcessKey")
    process_version: Optional[str] = Field(default=None, alias="ProcessVersion")
    is_latest_version: Optional[bool] = Field(default=None, alias="IsLatestVersion")
    description: Optional[str] = Field(default=None, alias="Description")
    process_type: Optional[str] = Field(default=None, alias="ProcessType")
    job_priority: Optional[str] = Field(default=None, alias="JobPriority")
    organization_unit_id: Optional[int] = Field(
        default=None, alias="OrganizationUnitId"
    )
    id: Optional[int] = Field(default=None, alias="Id")
