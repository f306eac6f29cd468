from typing import Any
from urllib.parse import quote

import requests
from requests import RequestException, Response

from util import log
from util.config import Config
from util.error_codes import (
    ACCESS_KEY_NOT_CONFIGURED,
    MEDIA_URL_NOT_FOUND,
    UPSTREAM_REQUEST_FAILED,
    UPSTREAM_RESPONSE_NOT_JSON,
    UPSTREAM_UNREACHABLE,
)
from util.errors import ConfigurationError, NetworkError, ResponseShapeError, UpstreamError

LOCATION_FIELD = "Location"


class BirdMediaAPI:
    """https://docs.bird.com/api/channels-api/api-reference/messaging/retrieve-media"""

    __config: Config

    def __init__(self, config: Config):
        self.__config = config

    def fetch_media(self, workspace_id: str, message_id: str, file_id: str) -> dict[str, Any]:
        """Returns the raw JSON the media endpoint answers with, without following the redirect."""
        access_key = self.__config.bird_access_key
        if access_key is None:
            raise ConfigurationError("BIRD_ACCESS_KEY not configured on server", ACCESS_KEY_NOT_CONFIGURED)

        url = self.media_url_for(workspace_id, message_id, file_id)
        headers = {
            "Authorization": f"AccessKey {access_key.get_secret_value()}",
            "Content-Type": "application/json",
        }
        log.d(f"Requesting Bird.com API: {url}?redirect=false")
        try:
            response = requests.get(
                url,
                params = {"redirect": "false"},
                headers = headers,
                timeout = self.__config.bird_timeout_s,
                allow_redirects = False,
            )
        except RequestException as e:
            raise NetworkError(f"No response from Bird.com: {e}", UPSTREAM_UNREACHABLE) from e

        log.d(f"Bird.com response status: {response.status_code}")
        self.__raise_for_status(response)
        try:
            return response.json()
        except ValueError as e:
            raise ResponseShapeError(
                "Bird.com responded with a non-JSON body",
                UPSTREAM_RESPONSE_NOT_JSON,
                details = response.text,
            ) from e

    def resolve_media_url(self, workspace_id: str, message_id: str, file_id: str) -> tuple[str, dict[str, Any]]:
        media_data = self.fetch_media(workspace_id, message_id, file_id)
        log.t("Bird.com response data", media_data)
        media_url = media_data.get(LOCATION_FIELD) if isinstance(media_data, dict) else None
        if not isinstance(media_url, str) or not media_url:
            raise ResponseShapeError(
                f"No '{LOCATION_FIELD}' field in the Bird.com response",
                MEDIA_URL_NOT_FOUND,
                details = media_data,
            )
        return media_url, media_data

    def media_url_for(self, workspace_id: str, message_id: str, file_id: str) -> str:
        segments = "/".join([
            "workspaces", quote(workspace_id, safe = ""),
            "messages", quote(message_id, safe = ""),
            "media", quote(file_id, safe = ""),
        ])
        return f"{self.__config.bird_api_base_url}/{segments}"

    @staticmethod
    def __raise_for_status(response: Response):
        if 200 <= response.status_code <= 299:
            return
        try:
            body = response.json()
        except ValueError:
            body = response.text
        log.w(f"  Status is not '200': HTTP_{response.status_code}!", body)
        raise UpstreamError(
            f"Bird.com answered with HTTP {response.status_code}",
            UPSTREAM_REQUEST_FAILED,
            status = response.status_code,
            details = {"body": body, "reason": response.reason},
        )
