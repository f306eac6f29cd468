from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class MediaRequestPayload(BaseModel):
    """Identifiers are kept exactly as received, they are echoed back and sent upstream untouched"""
    model_config = ConfigDict(alias_generator = to_camel, populate_by_name = True)

    workspace_id: str | None = None
    message_id: str | None = None
    file_id: str | None = None

    def missing_fields(self) -> list[str]:
        received = self.model_dump(by_alias = True)
        return [field for field, value in received.items() if not value or not value.strip()]
