from typing import Any

from starlette.status import HTTP_400_BAD_REQUEST, HTTP_500_INTERNAL_SERVER_ERROR, HTTP_502_BAD_GATEWAY


class ServiceError(Exception):
    title: str = "Internal server error"
    error_code: int
    http_status: int
    emoji: str
    details: Any | None

    def __init__(
        self,
        message: str,
        error_code: int,
        http_status: int = HTTP_500_INTERNAL_SERVER_ERROR,
        emoji: str = "⚠️",
        details: Any | None = None,
    ):
        super().__init__(message)
        self.error_code = error_code
        self.http_status = http_status
        self.emoji = emoji
        self.details = details

    @property
    def message(self) -> str:
        return super().__str__()

    @property
    def kind(self) -> str:
        return type(self).__name__

    def __str__(self) -> str:
        return self.to_log_string()

    def to_log_string(self) -> str:
        cause_str = f" # Caused by: {self.__cause__}" if self.__cause__ else ""
        return f"[{self.emoji} E{self.error_code}] {self.message}{cause_str}"

    def to_api_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "success": False,
            "error": self.title,
            "kind": self.kind,
            "error_code": self.error_code,
            "message": self.message,
        }
        if self.details is not None:
            result["details"] = self.details
        return result


class ValidationError(ServiceError):
    title = "Invalid request"

    def __init__(self, message: str, error_code: int, details: Any | None = None, emoji: str = "✏️"):
        super().__init__(message, error_code, http_status = HTTP_400_BAD_REQUEST, emoji = emoji, details = details)


class ConfigurationError(ServiceError):
    title = "Server misconfigured"

    def __init__(self, message: str, error_code: int, emoji: str = "⚙️"):
        super().__init__(message, error_code, http_status = HTTP_500_INTERNAL_SERVER_ERROR, emoji = emoji)


class UpstreamError(ServiceError):
    title = "Bird.com API error"
    status: int

    def __init__(
        self,
        message: str,
        error_code: int,
        status: int,
        details: Any | None = None,
        emoji: str = "🌐",
    ):
        # informational and redirect statuses can't carry an error body
        http_status = status if status >= 400 else HTTP_502_BAD_GATEWAY
        super().__init__(message, error_code, http_status = http_status, emoji = emoji, details = details)
        self.status = status

    def to_api_dict(self) -> dict[str, Any]:
        return {**super().to_api_dict(), "status": self.status}


class NetworkError(ServiceError):
    title = "Network error when contacting Bird.com"

    def __init__(self, message: str, error_code: int, emoji: str = "📡"):
        super().__init__(message, error_code, http_status = HTTP_500_INTERNAL_SERVER_ERROR, emoji = emoji)


class ResponseShapeError(ServiceError):
    title = "Media URL not found in Bird.com response"

    def __init__(self, message: str, error_code: int, details: Any | None = None, emoji: str = "🧩"):
        super().__init__(
            message,
            error_code,
            http_status = HTTP_500_INTERNAL_SERVER_ERROR,
            emoji = emoji,
            details = details,
        )


class DownloadError(ServiceError):
    title = "Failed to download media"

    def __init__(self, message: str, error_code: int, emoji: str = "📥"):
        super().__init__(message, error_code, http_status = HTTP_500_INTERNAL_SERVER_ERROR, emoji = emoji)


class InternalError(ServiceError):

    def __init__(self, message: str, error_code: int, emoji: str = "⚠️"):
        super().__init__(message, error_code, http_status = HTTP_500_INTERNAL_SERVER_ERROR, emoji = emoji)
