"""Configuration models."""

from __future__ import annotations

from collections.abc import Iterator

from pydantic import BaseModel, Field


class RetryPolicy(BaseModel):
    """How many times a remote call is attempted and how long to wait in between.

    The defaults match protocol discovery: three attempts, ten seconds apart.
    A ``backoff_factor`` above one grows the wait after each failure, capped
    at ``max_delay_seconds``.
    """

    max_attempts: int = Field(default=3, ge=1)
    delay_seconds: float = Field(default=10.0, gt=0.0)
    backoff_factor: float = Field(default=1.0, ge=1.0)
    max_delay_seconds: float = Field(default=60.0, gt=0.0)

    def delays(self) -> Iterator[float]:
        """Yield the wait before each retry, one fewer than ``max_attempts``."""
        delay = self.delay_seconds
        for _ in range(self.max_attempts - 1):
            yield min(delay, self.max_delay_seconds)
            delay *= self.backoff_factor


class DiscoveryConfig(BaseModel):
    """Configuration for third-party protocol discovery."""

    retry: RetryPolicy = Field(default_factory=RetryPolicy)

    @property
    def max_attempts(self) -> int:
        return self.retry.max_attempts
