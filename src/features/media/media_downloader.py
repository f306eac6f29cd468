from typing import Iterator

import requests
from requests import RequestException, Response

from util import log
from util.config import Config
from util.error_codes import MEDIA_DOWNLOAD_FAILED
from util.errors import DownloadError
from util.functions import build_content_disposition

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class MediaDownload:
    """An opened upstream media stream, relayed in chunks and closed when exhausted or abandoned."""

    content_type: str
    content_disposition: str
    __response: Response
    __chunk_size: int

    def __init__(self, response: Response, filename: str | None, chunk_size: int):
        self.__response = response
        self.__chunk_size = chunk_size
        self.content_type = response.headers.get("Content-Type") or DEFAULT_CONTENT_TYPE
        self.content_disposition = build_content_disposition(filename)

    def iter_bytes(self) -> Iterator[bytes]:
        relayed = 0
        try:
            for chunk in self.__response.iter_content(chunk_size = self.__chunk_size):
                if chunk:
                    relayed += len(chunk)
                    yield chunk
            log.d(f"Media relayed successfully ({relayed} bytes)")
        except RequestException as e:
            # the status line is already out, so we can only cut the stream short
            log.e(f"Media stream broke after {relayed} bytes", e)
        finally:
            self.close()

    def close(self):
        self.__response.close()


class MediaDownloader:

    __config: Config

    def __init__(self, config: Config):
        self.__config = config

    def open(self, media_url: str, filename: str | None = None) -> MediaDownload:
        log.d("Downloading media from the given URL")
        try:
            response = requests.get(media_url, stream = True, timeout = self.__config.download_timeout_s)
        except (RequestException, ValueError) as e:
            raise DownloadError(f"Could not reach the media URL: {e}", MEDIA_DOWNLOAD_FAILED) from e
        if not 200 <= response.status_code <= 299:
            response.close()
            raise DownloadError(f"Media host answered with HTTP {response.status_code}", MEDIA_DOWNLOAD_FAILED)
        return MediaDownload(response, filename, self.__config.download_chunk_size)
