from pydantic import BaseModel, field_validator


class Config(BaseModel):
    base_url: str
    secret: str

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")
