"""Typed errors raised by the Web API client."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Mapping, Optional


class ErrorCode(str, Enum):
    REQUEST_ERROR = "slack_webapi_request_error"
    HTTP_ERROR = "slack_webapi_http_error"
    PLATFORM_ERROR = "slack_webapi_platform_error"
    RATE_LIMITED_ERROR = "slack_webapi_rate_limited_error"


class WebAPICallError(Exception):
    """Base class for every error a Web API call can end with."""

    code: ErrorCode

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class WebAPIRequestError(WebAPICallError):
    """The request never produced a response (DNS, connect, timeout, ...)."""

    code = ErrorCode.REQUEST_ERROR

    def __init__(self, original: BaseException) -> None:
        super().__init__(f"A request error occurred: {original}")
        self.original = original


class WebAPIHTTPError(WebAPICallError):
    code = ErrorCode.HTTP_ERROR

    def __init__(
        self,
        status_code: int,
        status_message: str = "",
        headers: Optional[Mapping[str, str]] = None,
        body: Any = None,
        message: Optional[str] = None,
    ) -> None:
        super().__init__(message or f"An HTTP protocol error occurred: statusCode = {status_code}")
        self.status_code = status_code
        self.status_message = status_message
        self.headers: Dict[str, str] = dict(headers or {})
        self.body = body


class WebAPIPlatformError(WebAPICallError):
    code = ErrorCode.PLATFORM_ERROR

    def __init__(self, data: Dict[str, Any]) -> None:
        super().__init__(f"An API error occurred: {data.get('error')}")
        self.data = data

    @property
    def error(self) -> Optional[str]:
        return self.data.get("error")


class WebAPIRateLimitedError(WebAPICallError):
    code = ErrorCode.RATE_LIMITED_ERROR

    def __init__(self, retry_after: int) -> None:
        super().__init__(f"A rate-limit has been reached, you may retry this request in {retry_after} seconds")
        self.retry_after = retry_after


__all__ = [
    "ErrorCode",
    "WebAPICallError",
    "WebAPIRequestError",
    "WebAPIHTTPError",
    "WebAPIPlatformError",
    "WebAPIRateLimitedError",
]
