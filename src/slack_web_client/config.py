"""Configuration objects for the Web API client."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, Optional

from .logger import LogLevel
from .retry_policies import DEFAULT_RETRY_POLICY, RetryPolicy

DEFAULT_API_URL = "https://slack.com/api/"


@dataclass(frozen=True)
class ClientConfig:
    api_url: str = DEFAULT_API_URL
    token: Optional[str] = None
    team_id: Optional[str] = None
    max_request_concurrency: int = 3
    retry_policy: RetryPolicy = DEFAULT_RETRY_POLICY
    reject_rate_limited_calls: bool = False
    # Pausing stalls every call sharing this client while one call waits out a 429.
    pause_queue_on_rate_limit: bool = True
    headers: Dict[str, str] = field(default_factory=dict)
    timeout: float = 30.0
    logger: Optional[logging.Logger] = None
    log_level: LogLevel = LogLevel.INFO

    def __post_init__(self) -> None:
        if self.max_request_concurrency < 1:
            raise ValueError("max_request_concurrency must be at least 1")
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")

    @classmethod
    def from_env(cls, **overrides) -> "ClientConfig":
        values = {
            "api_url": os.environ.get("SLACK_API_URL", DEFAULT_API_URL),
            "token": os.environ.get("SLACK_TOKEN") or None,
            "team_id": os.environ.get("SLACK_TEAM_ID") or None,
            "max_request_concurrency": int(os.environ.get("SLACK_MAX_REQUEST_CONCURRENCY", "3")),
            "reject_rate_limited_calls": os.environ.get("SLACK_REJECT_RATE_LIMITED_CALLS", "false").strip().lower()
            in ("1", "true", "yes", "on"),
            "timeout": float(os.environ.get("SLACK_REQUEST_TIMEOUT", "30")),
            "log_level": LogLevel(os.environ.get("SLACK_LOG_LEVEL", "info").strip().lower()),
        }
        values.update(overrides)
        return cls(**values)


__all__ = ["ClientConfig", "DEFAULT_API_URL"]
