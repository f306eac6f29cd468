import unittest

from util.errors import (
    ConfigurationError,
    DownloadError,
    InternalError,
    NetworkError,
    ResponseShapeError,
    ServiceError,
    UpstreamError,
    ValidationError,
)


class ServiceErrorTest(unittest.TestCase):

    def test_to_log_string_without_cause(self):
        error = ServiceError("Something went wrong", error_code = 42, emoji = "🫖")

        self.assertEqual(error.to_log_string(), "[🫖 E42] Something went wrong")

    def test_to_log_string_with_cause(self):
        try:
            try:
                raise ValueError("root cause")
            except ValueError as cause:
                raise ServiceError("Something went wrong", error_code = 42, emoji = "🫖") from cause
        except ServiceError as error:
            self.assertEqual(error.to_log_string(), "[🫖 E42] Something went wrong # Caused by: root cause")

    def test_str_equals_to_log_string(self):
        error = ServiceError("Something went wrong", error_code = 42, emoji = "🫖")

        self.assertEqual(str(error), error.to_log_string())
        self.assertEqual(error.message, "Something went wrong")

    def test_to_api_dict_without_details(self):
        error = ServiceError("Something went wrong", error_code = 42)

        result = error.to_api_dict()

        self.assertEqual(
            result,
            {
                "success": False,
                "error": "Internal server error",
                "kind": "ServiceError",
                "error_code": 42,
                "message": "Something went wrong",
            },
        )

    def test_to_api_dict_with_details(self):
        error = ValidationError("Missing fields", error_code = 1001, details = {"missing": ["fileId"]})

        result = error.to_api_dict()

        self.assertFalse(result["success"])
        self.assertEqual(result["kind"], "ValidationError")
        self.assertEqual(result["details"], {"missing": ["fileId"]})


class SubclassDefaultsTest(unittest.TestCase):

    def test_validation_error(self):
        error = ValidationError("msg", error_code = 1)

        self.assertEqual(error.http_status, 400)
        self.assertEqual(error.emoji, "✏️")

    def test_configuration_error(self):
        error = ConfigurationError("msg", error_code = 1)

        self.assertEqual(error.http_status, 500)
        self.assertEqual(error.emoji, "⚙️")
        self.assertEqual(error.to_api_dict()["kind"], "ConfigurationError")

    def test_upstream_error_forwards_status(self):
        error = UpstreamError("msg", error_code = 1, status = 404, details = {"body": "not here"})

        result = error.to_api_dict()

        self.assertEqual(error.http_status, 404)
        self.assertEqual(result["status"], 404)
        self.assertEqual(result["error"], "Bird.com API error")
        self.assertEqual(result["details"], {"body": "not here"})

    def test_upstream_error_with_non_error_status_becomes_bad_gateway(self):
        error = UpstreamError("msg", error_code = 1, status = 302)

        self.assertEqual(error.http_status, 502)
        self.assertEqual(error.to_api_dict()["status"], 302)

    def test_network_error(self):
        error = NetworkError("msg", error_code = 1)

        self.assertEqual(error.http_status, 500)
        self.assertEqual(error.to_api_dict()["error"], "Network error when contacting Bird.com")

    def test_response_shape_error(self):
        error = ResponseShapeError("msg", error_code = 1, details = {"foo": "bar"})

        self.assertEqual(error.http_status, 500)
        self.assertEqual(error.to_api_dict()["details"], {"foo": "bar"})

    def test_download_error(self):
        error = DownloadError("msg", error_code = 1)

        self.assertEqual(error.http_status, 500)
        self.assertEqual(error.to_api_dict()["error"], "Failed to download media")

    def test_internal_error(self):
        error = InternalError("msg", error_code = 1)

        self.assertEqual(error.http_status, 500)
        self.assertEqual(error.emoji, "⚠️")
