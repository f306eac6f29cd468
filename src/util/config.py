# ruff: noqa: E501

import os
from typing import Callable

from pydantic import SecretStr


class Config:

    log_level: str
    port: int
    version: str
    service_name: str
    bird_api_base_url: str
    bird_timeout_s: int
    download_timeout_s: int
    download_chunk_size: int
    media_url_expires_in: str

    bird_access_key: SecretStr | None

    def all_secrets(self) -> list[SecretStr]:
        return [secret for secret in [self.bird_access_key] if secret is not None]

    @property
    def is_access_key_configured(self) -> bool:
        return self.bird_access_key is not None

    @property
    def is_debug(self) -> bool:
        return self.log_level in ["local", "trace", "debug"]

    def __init__(
        self,
        def_log_level: str = "INFO",
        def_port: int = 3000,
        def_version: str = "1.0.0",
        def_service_name: str = "Bird.com Media Webhook",
        def_bird_api_base_url: str = "https://api.bird.com",
        def_bird_timeout_s: int = 30,
        def_download_timeout_s: int = 60,
        def_download_chunk_size: int = 64 * 1024,
        def_media_url_expires_in: str = "15 minutes",
    ):
        # @formatter:off
        self.log_level = self.__env("LOG_LEVEL", lambda: def_log_level).lower()
        self.port = int(self.__env("PORT", lambda: str(def_port)))
        self.version = self.__env("VERSION", lambda: def_version)
        self.service_name = self.__env("SERVICE_NAME", lambda: def_service_name)
        self.bird_api_base_url = self.__env("BIRD_API_BASE_URL", lambda: def_bird_api_base_url).rstrip("/")
        self.bird_timeout_s = int(self.__env("BIRD_TIMEOUT_S", lambda: str(def_bird_timeout_s)))
        self.download_timeout_s = int(self.__env("DOWNLOAD_TIMEOUT_S", lambda: str(def_download_timeout_s)))
        self.download_chunk_size = int(self.__env("DOWNLOAD_CHUNK_SIZE", lambda: str(def_download_chunk_size)))
        self.media_url_expires_in = self.__env("MEDIA_URL_EXPIRES_IN", lambda: def_media_url_expires_in)

        self.bird_access_key = self.__senv("BIRD_ACCESS_KEY")
        # @formatter:on

    @staticmethod
    def __env(name: str, default: Callable[[], str]) -> str:
        env_value = os.environ.get(name, "").strip()
        return env_value if env_value else default()

    @staticmethod
    def __senv(name: str) -> SecretStr | None:
        env_value = os.environ.get(name, "").strip()
        return SecretStr(env_value) if env_value else None


config = Config()
