from __future__ import annotations

from typing import TYPE_CHECKING

from util.config import Config

if TYPE_CHECKING:
    from api.media_controller import MediaController
    from features.media.bird_media_api import BirdMediaAPI
    from features.media.media_downloader import MediaDownloader


class DI:

    # Static dependencies
    _config: Config
    # SDKs
    _bird_media_api: "BirdMediaAPI | None"
    # Features
    _media_downloader: "MediaDownloader | None"
    # Controllers
    _media_controller: "MediaController | None"

    def __init__(self, config: Config):
        self._config = config
        # SDKs
        self._bird_media_api = None
        # Features
        self._media_downloader = None
        # Controllers
        self._media_controller = None

    @property
    def config(self) -> Config:
        return self._config

    # === SDKs ===

    @property
    def bird_media_api(self) -> "BirdMediaAPI":
        if self._bird_media_api is None:
            from features.media.bird_media_api import BirdMediaAPI
            self._bird_media_api = BirdMediaAPI(self.config)
        return self._bird_media_api

    # === Features ===

    @property
    def media_downloader(self) -> "MediaDownloader":
        if self._media_downloader is None:
            from features.media.media_downloader import MediaDownloader
            self._media_downloader = MediaDownloader(self.config)
        return self._media_downloader

    # === Controllers ===

    @property
    def media_controller(self) -> "MediaController":
        if self._media_controller is None:
            from api.media_controller import MediaController
            self._media_controller = MediaController(self)
        return self._media_controller
