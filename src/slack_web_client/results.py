"""Normalization of HTTP responses into call results."""

from __future__ import annotations

import json
import re
from typing import Any, Dict, List, Mapping, Optional

import httpx

from .errors import WebAPIHTTPError

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_SCOPE_SEPARATOR = re.compile(r"\s*,\s*")


def parse_retry_headers(headers: Mapping[str, str]) -> Optional[int]:
    """Seconds the API asked us to wait, read like ``parseInt(value, 10)``."""
    value = headers.get("retry-after")
    if value is None:
        return None
    match = _LEADING_INT.match(value)
    if match is None:
        return None
    return int(match.group(1))


def _split_scopes(value: str) -> List[str]:
    return _SCOPE_SEPARATOR.split(value.strip())


def build_result(response: httpx.Response) -> Dict[str, Any]:
    try:
        data = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        data = None
    if not isinstance(data, dict):
        raise WebAPIHTTPError(
            response.status_code,
            response.reason_phrase,
            response.headers,
            response.text,
            message="The API responded with a body that is not a JSON object",
        )

    metadata = data.get("response_metadata")
    if not isinstance(metadata, dict):
        metadata = {}
        data["response_metadata"] = metadata

    scopes = response.headers.get("x-oauth-scopes")
    if scopes:
        metadata["scopes"] = _split_scopes(scopes)
    accepted_scopes = response.headers.get("x-accepted-oauth-scopes")
    if accepted_scopes:
        metadata["acceptedScopes"] = _split_scopes(accepted_scopes)

    retry_after = parse_retry_headers(response.headers)
    if retry_after is not None:
        metadata["retryAfter"] = retry_after

    return data


__all__ = ["build_result", "parse_retry_headers"]
