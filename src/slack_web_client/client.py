"""Async client for Slack's Web API."""

from __future__ import annotations

import asyncio
import dataclasses
import logging
import re
from contextlib import aclosing
from enum import Enum
from typing import Any, AsyncIterator, Awaitable, Callable, Dict, List, Mapping, Optional, Union

import httpx

from .config import ClientConfig
from .errors import WebAPIHTTPError, WebAPIPlatformError, WebAPIRateLimitedError, WebAPIRequestError
from .instrument import get_user_agent
from .logger import LogLevel, get_logger
from .methods import deprecation_notice, endpoint_path, is_cursor_paginated
from .metrics import ATTEMPT_COUNTER, RATE_LIMITED_COUNTER, REQUEST_LATENCY, record_outcome
from .request_queue import RequestQueue
from .results import build_result, parse_retry_headers
from .retry import AbortRetry, retry_call
from .serializer import serialize_call_options

DEFAULT_PAGE_SIZE = 200

_ERROR_MARKER = re.compile(r"\[ERROR\](.*)")
_WARN_MARKER = re.compile(r"\[WARN\](.*)")

CallResult = Dict[str, Any]
PaginatePredicate = Callable[[CallResult], Any]
PageReducer = Callable[[Any, CallResult, int], Any]
RateLimitedListener = Callable[[int], None]


class WebClientEvent(str, Enum):
    RATE_LIMITED = "rate_limited"


def _noop_reducer(accumulator: Any, page: CallResult, index: int) -> Any:
    return None


def _next_page_options(previous: CallResult, page_size: int) -> Optional[Dict[str, Any]]:
    metadata = previous.get("response_metadata") or {}
    cursor = metadata.get("next_cursor")
    if cursor:
        return {"limit": page_size, "cursor": cursor}
    return None


class WebClient:
    """Client for Slack's Web API.

    Every Web API method is reached through :meth:`api_call` with the method
    name (``"chat.postMessage"``) and a mapping of arguments. The client
    limits how many HTTP exchanges run at once, retries failures according to
    its :class:`RetryPolicy`, and waits out rate limits unless configured to
    reject them.
    """

    def __init__(
        self,
        token: Optional[str] = None,
        config: Optional[ClientConfig] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        **overrides: Any,
    ) -> None:
        config = config or ClientConfig()
        if token is not None:
            overrides["token"] = token
        if overrides:
            config = dataclasses.replace(config, **overrides)
        self._config = config

        self._logger = get_logger("WebClient", config.log_level, config.logger)
        if config.logger is not None and config.log_level is not LogLevel.INFO:
            self._logger.debug("The log_level given to WebClient was ignored as you also gave logger")

        self._queue = RequestQueue(config.max_request_concurrency)
        self._listeners: Dict[WebClientEvent, List[RateLimitedListener]] = {}
        self._http = httpx.AsyncClient(
            base_url=config.api_url,
            timeout=config.timeout,
            transport=transport,
            headers={"User-Agent": get_user_agent(), **config.headers},
        )
        self._logger.debug("initialized")

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def token(self) -> Optional[str]:
        return self._config.token

    @property
    def request_queue(self) -> RequestQueue:
        return self._queue

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    @property
    def is_closed(self) -> bool:
        return self._http.is_closed

    async def __aenter__(self) -> "WebClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        await self._http.aclose()

    def on(self, event: Union[WebClientEvent, str], listener: RateLimitedListener) -> None:
        self._listeners.setdefault(WebClientEvent(event), []).append(listener)

    def off(self, event: Union[WebClientEvent, str], listener: RateLimitedListener) -> None:
        listeners = self._listeners.get(WebClientEvent(event), [])
        if listener in listeners:
            listeners.remove(listener)

    def _emit(self, event: WebClientEvent, *args: Any) -> None:
        for listener in list(self._listeners.get(event, ())):
            try:
                listener(*args)
            except Exception:
                self._logger.exception("%s listener failed", event.value)

    async def api_call(
        self,
        method: str,
        options: Optional[Mapping[str, Any]] = None,
        *,
        headers: Optional[Mapping[str, str]] = None,
    ) -> CallResult:
        """Call a Web API method and return its normalized result.

        Raises :class:`WebAPIPlatformError` when the API answers ``ok: false``,
        :class:`WebAPIHTTPError` for unexpected HTTP statuses,
        :class:`WebAPIRateLimitedError` when rate limited calls are rejected
        and :class:`WebAPIRequestError` when no response could be obtained.
        """
        self._logger.debug("api_call(%r) start", method)
        if options is not None and not isinstance(options, Mapping):
            raise TypeError(f"Expected an options argument but instead received a {type(options).__name__}")

        notice = deprecation_notice(method)
        if notice:
            self._logger.warning(notice)

        body = {"token": self._config.token, "team_id": self._config.team_id, **(options or {})}
        try:
            response = await self._make_request(method, body, headers)
            result = build_result(response)
        except Exception:
            record_outcome(method, "error")
            raise

        self._log_response_metadata(result)

        if not result.get("ok"):
            record_outcome(method, "platform_error")
            raise WebAPIPlatformError(result)

        record_outcome(method, "ok")
        return result

    def paginate(
        self,
        method: str,
        options: Optional[Mapping[str, Any]] = None,
        should_stop: Optional[PaginatePredicate] = None,
        reduce: Optional[PageReducer] = None,
    ) -> Union[AsyncIterator[CallResult], Awaitable[Any]]:
        """Walk the pages of a cursor-paginated method.

        Without ``should_stop`` this returns an async iterator yielding one
        result per page. With ``should_stop`` it returns an awaitable that
        drives the pages, folds each into ``reduce(accumulator, page, index)``
        and resolves to the accumulator once ``should_stop(page)`` is true or
        no pages are left.
        """
        if options is not None and not isinstance(options, Mapping):
            raise TypeError(f"Expected an options argument but instead received a {type(options).__name__}")
        if not is_cursor_paginated(method):
            self._logger.warning(
                "paginate() called with method %s, which is not known to be cursor pagination enabled.", method
            )

        static_options = dict(options or {})
        limit = static_options.get("limit")
        if isinstance(limit, (int, float)) and not isinstance(limit, bool):
            page_size = static_options.pop("limit")
        else:
            page_size = DEFAULT_PAGE_SIZE

        async def pages() -> AsyncIterator[CallResult]:
            pagination: Optional[Dict[str, Any]] = {"limit": page_size}
            if static_options.get("cursor") is not None:
                pagination["cursor"] = static_options["cursor"]
            while pagination is not None:
                result = await self.api_call(method, {**static_options, **pagination})
                yield result
                pagination = _next_page_options(result, page_size)

        if should_stop is None:
            return pages()

        reducer = reduce or _noop_reducer

        async def drive() -> Any:
            accumulator = None
            async with aclosing(pages()) as iterator:
                index = 0
                async for page in iterator:
                    accumulator = reducer(accumulator, page, index)
                    if should_stop(page):
                        break
                    index += 1
            return accumulator

        return drive()

    async def _make_request(
        self,
        method: str,
        body: Mapping[str, Any],
        headers: Optional[Mapping[str, str]] = None,
    ) -> httpx.Response:
        path = endpoint_path(method)
        serialized = serialize_call_options(body)
        request_headers = httpx.Headers(headers or {})
        request_headers.update(serialized.headers)

        async def exchange() -> httpx.Response:
            ATTEMPT_COUNTER.labels(method=method).inc()
            self._logger.debug("will perform http request")
            try:
                with REQUEST_LATENCY.labels(method=method).time():
                    response = await self._http.post(path, content=serialized.content, headers=request_headers)
            except httpx.RequestError as exc:
                self._logger.warning("http request failed: %s", exc)
                raise WebAPIRequestError(exc) from exc
            self._logger.debug("http response received")

            if response.status_code == 429:
                await self._handle_rate_limit(method, response)

            if response.status_code != 200:
                raise AbortRetry(
                    WebAPIHTTPError(response.status_code, response.reason_phrase, response.headers, response.text)
                )
            return response

        return await retry_call(
            lambda: self._queue.add(exchange),
            self._config.retry_policy,
            on_failed_attempt=self._log_failed_attempt,
        )

    async def _handle_rate_limit(self, method: str, response: httpx.Response) -> None:
        """Always raises: an abort when the call cannot wait, a retryable error after waiting."""
        retry_after = parse_retry_headers(response.headers)
        if retry_after is None:
            raise AbortRetry(
                WebAPIHTTPError(
                    response.status_code,
                    response.reason_phrase,
                    response.headers,
                    response.text,
                    message="Retry header did not contain a valid timeout.",
                )
            )

        RATE_LIMITED_COUNTER.labels(method=method).inc()
        self._emit(WebClientEvent.RATE_LIMITED, retry_after)
        if self._config.reject_rate_limited_calls:
            raise AbortRetry(WebAPIRateLimitedError(retry_after))

        self._logger.info("API Call failed due to rate limiting. Will retry in %s seconds.", retry_after)
        pause = self._config.pause_queue_on_rate_limit
        if pause:
            self._queue.pause()
        try:
            await asyncio.sleep(retry_after)
        finally:
            if pause:
                self._queue.start()
        raise WebAPIRateLimitedError(retry_after)

    def _log_failed_attempt(self, error: BaseException, attempt: int, retries_left: int) -> None:
        self._logger.debug("attempt %d failed (%s), %d retries left", attempt, error, retries_left)

    def _log_response_metadata(self, result: CallResult) -> None:
        metadata = result["response_metadata"]
        for warning in metadata.get("warnings") or ():
            self._logger.warning("%s", warning)
        for message in metadata.get("messages") or ():
            if not isinstance(message, str):
                continue
            error = _ERROR_MARKER.search(message)
            if error is not None:
                self._logger.error("%s", error.group(1).strip())
                continue
            warning = _WARN_MARKER.search(message)
            if warning is not None:
                self._logger.warning("%s", warning.group(1).strip())


__all__ = [
    "WebClient",
    "WebClientEvent",
    "CallResult",
    "PaginatePredicate",
    "PageReducer",
    "DEFAULT_PAGE_SIZE",
]
