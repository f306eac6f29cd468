import unittest
from unittest.mock import Mock

from api.media_controller import MediaController
from api.model.download_request_payload import DownloadRequestPayload
from api.model.media_request_payload import MediaRequestPayload
from di.di import DI
from features.media.bird_media_api import BirdMediaAPI
from features.media.media_downloader import MediaDownload, MediaDownloader
from util.config import Config
from util.error_codes import MISSING_MEDIA_PARAMETERS, MISSING_MEDIA_URL
from util.errors import ConfigurationError, UpstreamError, ValidationError


class MediaControllerTest(unittest.TestCase):

    controller: MediaController
    mock_di: DI

    def setUp(self):
        self.mock_di = Mock(spec = DI)
        # noinspection PyPropertyAccess
        self.mock_di.config = Mock(spec = Config)
        self.mock_di.config.media_url_expires_in = "15 minutes"
        # noinspection PyPropertyAccess
        self.mock_di.bird_media_api = Mock(spec = BirdMediaAPI)
        # noinspection PyPropertyAccess
        self.mock_di.media_downloader = Mock(spec = MediaDownloader)

        self.controller = MediaController(self.mock_di)
        self.payload = MediaRequestPayload(workspace_id = "ws-1", message_id = "msg-2", file_id = "file-3")

    def test_resolve_media_url_success(self):
        upstream_data = {"Location": "https://x/y"}
        self.mock_di.bird_media_api.resolve_media_url.return_value = ("https://x/y", upstream_data)

        result = self.controller.resolve_media_url(self.payload)

        self.mock_di.bird_media_api.resolve_media_url.assert_called_once_with("ws-1", "msg-2", "file-3")
        dumped = result.model_dump(by_alias = True)
        self.assertTrue(dumped["success"])
        self.assertEqual(dumped["mediaUrl"], "https://x/y")
        self.assertEqual(dumped["expiresIn"], "15 minutes")
        self.assertEqual(dumped["metadata"], {"workspaceId": "ws-1", "messageId": "msg-2", "fileId": "file-3"})
        self.assertEqual(dumped["originalResponse"], upstream_data)
        self.assertTrue(dumped["timestamp"].endswith("Z"))

    def test_resolve_media_url_lists_exactly_the_missing_fields(self):
        payload = MediaRequestPayload(workspace_id = "ws-1")

        with self.assertRaises(ValidationError) as context:
            self.controller.resolve_media_url(payload)

        error = context.exception
        self.assertEqual(error.error_code, MISSING_MEDIA_PARAMETERS)
        self.assertEqual(error.http_status, 400)
        self.assertEqual(error.details["missing"], ["messageId", "fileId"])
        self.assertEqual(error.details["required"], ["workspaceId", "messageId", "fileId"])
        self.assertEqual(error.details["received"], {"workspaceId": "ws-1", "messageId": None, "fileId": None})
        self.mock_di.bird_media_api.resolve_media_url.assert_not_called()

    def test_resolve_media_url_propagates_upstream_errors(self):
        self.mock_di.bird_media_api.resolve_media_url.side_effect = UpstreamError("nope", 5001, status = 404)

        with self.assertRaises(UpstreamError) as context:
            self.controller.resolve_media_url(self.payload)

        self.assertEqual(context.exception.http_status, 404)

    def test_resolve_media_url_propagates_configuration_errors(self):
        self.mock_di.bird_media_api.resolve_media_url.side_effect = ConfigurationError("no key", 7001)

        with self.assertRaises(ConfigurationError):
            self.controller.resolve_media_url(self.payload)

    def test_fetch_raw_media_returns_upstream_body(self):
        self.mock_di.bird_media_api.fetch_media.return_value = {"Location": "https://x/y", "extra": 1}

        result = self.controller.fetch_raw_media(self.payload)

        self.assertEqual(result, {"Location": "https://x/y", "extra": 1})
        self.mock_di.bird_media_api.fetch_media.assert_called_once_with("ws-1", "msg-2", "file-3")

    def test_fetch_raw_media_validates_input(self):
        with self.assertRaises(ValidationError) as context:
            self.controller.fetch_raw_media(MediaRequestPayload())

        self.assertEqual(context.exception.details["missing"], ["workspaceId", "messageId", "fileId"])
        self.mock_di.bird_media_api.fetch_media.assert_not_called()

    def test_download_media_opens_stream(self):
        download = Mock(spec = MediaDownload)
        self.mock_di.media_downloader.open.return_value = download

        result = self.controller.download_media(
            DownloadRequestPayload(media_url = "https://cdn.test/a.jpg", filename = "a.jpg"),
        )

        self.assertIs(result, download)
        self.mock_di.media_downloader.open.assert_called_once_with("https://cdn.test/a.jpg", "a.jpg")

    def test_download_media_requires_media_url(self):
        with self.assertRaises(ValidationError) as context:
            self.controller.download_media(DownloadRequestPayload(filename = "a.jpg"))

        self.assertEqual(context.exception.error_code, MISSING_MEDIA_URL)
        self.assertEqual(context.exception.http_status, 400)
        self.mock_di.media_downloader.open.assert_not_called()
