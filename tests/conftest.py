from __future__ import annotations

from typing import Any, Callable, Dict
from urllib.parse import parse_qsl

import httpx
import pytest

from slack_web_client import RAPID_RETRY_POLICY, WebClient

API_URL = "https://slack.test/api/"


def form_args(request: httpx.Request) -> Dict[str, str]:
    return dict(parse_qsl(request.content.decode("utf-8")))


def method_of(request: httpx.Request) -> str:
    return request.url.path.rsplit("/", 1)[-1]


@pytest.fixture()
def make_client() -> Callable[..., WebClient]:
    def factory(handler: Callable[[httpx.Request], Any], **overrides: Any) -> WebClient:
        overrides.setdefault("retry_policy", RAPID_RETRY_POLICY)
        overrides.setdefault("api_url", API_URL)
        return WebClient(transport=httpx.MockTransport(handler), **overrides)

    return factory
