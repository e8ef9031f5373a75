"""Sequential retry for remote third-party operations."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Coroutine
from typing import Any, TypeVar

from bridgekit.models.config import RetryPolicy

logger = logging.getLogger("bridgekit.retry")

__all__ = ["RetryPolicy", "retry_async"]

T = TypeVar("T")


async def retry_async(
    fn: Callable[[], Coroutine[Any, Any, T]],
    policy: RetryPolicy,
    *,
    operation: str = "operation",
) -> T:
    """Await ``fn()`` until it succeeds or ``policy.max_attempts`` is reached.

    The next attempt starts only after the previous one failed and the
    policy's delay elapsed.  The last failure is re-raised.
    """
    delays = policy.delays()
    attempt = 0
    while True:
        attempt += 1
        try:
            return await fn()
        except Exception as exc:
            delay = next(delays, None)
            if delay is None:
                raise
            logger.warning(
                "%s attempt %d/%d failed, retrying in %.1fs",
                operation,
                attempt,
                policy.max_attempts,
                delay,
                extra={
                    "operation": operation,
                    "attempt": attempt,
                    "delay": delay,
                    "error": str(exc),
                },
            )
            await asyncio.sleep(delay)
