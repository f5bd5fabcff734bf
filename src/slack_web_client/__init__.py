"""Async Python client for Slack's Web API."""

from ._version import __version__
from .client import DEFAULT_PAGE_SIZE, WebClient, WebClientEvent
from .config import ClientConfig
from .errors import (
    ErrorCode,
    WebAPICallError,
    WebAPIHTTPError,
    WebAPIPlatformError,
    WebAPIRateLimitedError,
    WebAPIRequestError,
)
from .instrument import add_app_metadata
from .logger import LogLevel
from .request_queue import RequestQueue
from .retry import AbortRetry, retry_call
from .retry_policies import (
    FIVE_RETRIES_IN_FIVE_MINUTES,
    RAPID_RETRY_POLICY,
    TEN_RETRIES_IN_ABOUT_THIRTY_MINUTES,
    RetryPolicy,
)
from .serializer import FileUpload

__all__ = [
    "AbortRetry",
    "ClientConfig",
    "DEFAULT_PAGE_SIZE",
    "ErrorCode",
    "FIVE_RETRIES_IN_FIVE_MINUTES",
    "FileUpload",
    "LogLevel",
    "RAPID_RETRY_POLICY",
    "RequestQueue",
    "RetryPolicy",
    "TEN_RETRIES_IN_ABOUT_THIRTY_MINUTES",
    "WebAPICallError",
    "WebAPIHTTPError",
    "WebAPIPlatformError",
    "WebAPIRateLimitedError",
    "WebAPIRequestError",
    "WebClient",
    "WebClientEvent",
    "__version__",
    "add_app_metadata",
    "retry_call",
]
