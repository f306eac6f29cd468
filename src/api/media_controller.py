from typing import Any

from api.model.download_request_payload import DownloadRequestPayload
from api.model.media_request_payload import MediaRequestPayload
from api.model.media_response import MediaMetadata, MediaResponse
from di.di import DI
from features.media.media_downloader import MediaDownload
from util import log
from util.error_codes import MISSING_MEDIA_PARAMETERS, MISSING_MEDIA_URL
from util.errors import ValidationError
from util.functions import iso_timestamp

REQUIRED_MEDIA_FIELDS = ["workspaceId", "messageId", "fileId"]


class MediaController:

    __di: DI

    def __init__(self, di: DI):
        self.__di = di

    def resolve_media_url(self, payload: MediaRequestPayload) -> MediaResponse:
        metadata = self.__validate(payload)
        media_url, media_data = self.__di.bird_media_api.resolve_media_url(
            metadata.workspace_id,
            metadata.message_id,
            metadata.file_id,
        )
        log.i(f"Resolved media for file '{metadata.file_id}'")
        return MediaResponse(
            media_url = media_url,
            expires_in = self.__di.config.media_url_expires_in,
            timestamp = iso_timestamp(),
            metadata = metadata,
            original_response = media_data,
        )

    def fetch_raw_media(self, payload: MediaRequestPayload) -> Any:
        metadata = self.__validate(payload)
        return self.__di.bird_media_api.fetch_media(
            metadata.workspace_id,
            metadata.message_id,
            metadata.file_id,
        )

    def download_media(self, payload: DownloadRequestPayload) -> MediaDownload:
        if not payload.media_url:
            raise ValidationError("mediaUrl is required", MISSING_MEDIA_URL, details = {"required": ["mediaUrl"]})
        return self.__di.media_downloader.open(payload.media_url, payload.filename)

    @staticmethod
    def __validate(payload: MediaRequestPayload) -> MediaMetadata:
        missing = payload.missing_fields()
        if missing:
            raise ValidationError(
                f"Missing required parameters: {', '.join(missing)}",
                MISSING_MEDIA_PARAMETERS,
                details = {
                    "missing": missing,
                    "required": REQUIRED_MEDIA_FIELDS,
                    "received": payload.model_dump(by_alias = True),
                },
            )
        return MediaMetadata.model_validate(payload.model_dump())
