from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Robot(BaseModel):
    model_config = ConfigDict(
        validate_by_name=True,
        validate_by_alias=True,
        use_enum_values=True,
        arbitrary_types_allowed=True,
        extra="allow",
    )
    id: int = Field(alias="Id")
    name: str = Field(alias="Name")
    machine_name: Optional[str] = Field(default=None, alias="MachineName")
    machine_id: Optional[int] = Field(default=None, alias="MachineId")
    user_name: Optional[str] = Field(default=None, alias="Username")
    type: Optional[str] = Field(default=None, alias="Type")


class Machine(BaseModel):
    model_config = ConfigDict(
        validate_by_name=True,
        validate_by_alias=True,
        use_enum_values=True,
        arbitrary_types_allowed=True,
        extra="allow",
    )
    id: int = Field(alias="Id")
    name: str = Field(alias="Name")
    key: Optional[str] = Field(default=None, alias="Key")
    type: Optional[str] = Field(default=None, alias="Type")
