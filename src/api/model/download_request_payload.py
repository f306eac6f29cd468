from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class DownloadRequestPayload(BaseModel):
    model_config = ConfigDict(alias_generator = to_camel, populate_by_name = True)

    media_url: str | None = None
    filename: str | None = None

    @field_validator("media_url", "filename", mode = "before")
    @classmethod
    def strip_value(cls, v: str | None) -> str | None:
        if isinstance(v, str):
            return v.strip() or None
        return v
