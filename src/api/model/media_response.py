from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class MediaMetadata(BaseModel):
    model_config = ConfigDict(alias_generator = to_camel, populate_by_name = True)

    workspace_id: str
    message_id: str
    file_id: str


class MediaResponse(BaseModel):
    """Enriched answer of the media resolution endpoint"""
    model_config = ConfigDict(alias_generator = to_camel, populate_by_name = True)

    success: bool = True
    media_url: str
    expires_in: str
    timestamp: str
    metadata: MediaMetadata
    original_response: dict[str, Any]
