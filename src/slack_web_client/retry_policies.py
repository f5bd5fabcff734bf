"""Retry policies for Web API requests."""

from __future__ import annotations

import math
import random
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class RetryPolicy(BaseModel):
    """Exponential backoff parameters. Delays are expressed in seconds."""

    model_config = ConfigDict(frozen=True)

    retries: int = Field(default=10, ge=0)
    factor: float = Field(default=2.0, gt=0)
    min_timeout: float = Field(default=1.0, ge=0)
    max_timeout: float = Field(default=math.inf, ge=0)
    randomize: bool = False

    @model_validator(mode="after")
    def _check_bounds(self) -> "RetryPolicy":
        if self.max_timeout < self.min_timeout:
            raise ValueError("max_timeout must not be smaller than min_timeout")
        return self

    @property
    def max_attempts(self) -> int:
        return self.retries + 1

    def delay_for(self, attempt: int, rng: Optional[random.Random] = None) -> float:
        """Backoff before retrying after the given (1-based) failed attempt."""
        if attempt < 1:
            raise ValueError("attempt numbers start at 1")
        jitter = (rng or random).uniform(1.0, 2.0) if self.randomize else 1.0
        delay = jitter * self.min_timeout * (self.factor ** (attempt - 1))
        return min(max(delay, self.min_timeout), self.max_timeout)


# Ten retries spread over roughly thirty minutes. Randomized so that many
# clients retrying the same failure do not hit the API in lockstep.
TEN_RETRIES_IN_ABOUT_THIRTY_MINUTES = RetryPolicy(retries=10, factor=1.96821, randomize=True)

FIVE_RETRIES_IN_FIVE_MINUTES = RetryPolicy(retries=5, factor=3.86)

# Keeps test suites fast.
RAPID_RETRY_POLICY = RetryPolicy(min_timeout=0.0, max_timeout=0.001)

DEFAULT_RETRY_POLICY = TEN_RETRIES_IN_ABOUT_THIRTY_MINUTES


__all__ = [
    "RetryPolicy",
    "TEN_RETRIES_IN_ABOUT_THIRTY_MINUTES",
    "FIVE_RETRIES_IN_FIVE_MINUTES",
    "RAPID_RETRY_POLICY",
    "DEFAULT_RETRY_POLICY",
]
