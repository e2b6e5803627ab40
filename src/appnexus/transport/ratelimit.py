"""
Pre-flight throttle driven by the server's last reported usage (response.dbg_info).

This is a fixed-wait approximation: when the observed count reaches one below
the limit, the caller waits out a whole window. The snapshot is only as fresh
as the last response, so the wait can overshoot or undershoot the server's
real reset.
"""

import asyncio
from typing import Awaitable, Callable, Optional

import structlog

from appnexus.models.envelope import RateSnapshot

logger = structlog.get_logger(__name__)

READ_METHODS = frozenset({"GET"})

Sleep = Callable[[float], Awaitable[None]]


def throttle_delay(rate: RateSnapshot, method: str) -> int:
    """Seconds to wait before sending `method`, given the last snapshot."""
    if method.upper() in READ_METHODS:
        limit, actions, period = rate.read_limit, rate.reads, rate.read_limit_seconds
    else:
        limit, actions, period = rate.write_limit, rate.writes, rate.write_limit_seconds

    # one request of headroom below the server's hard limit
    if actions >= limit - 1:
        return period
    return 0


class RateLimiter:
    def __init__(self, sleep: Optional[Sleep] = None):
        self._sleep = sleep or asyncio.sleep

    async def wait(self, rate: RateSnapshot, method: str) -> float:
        """Block the calling task for the full window when over the limit. Returns seconds waited."""
        delay = throttle_delay(rate, method)
        if delay <= 0:
            return 0.0
        logger.info(
            "rate_limit_waiting",
            method=method,
            wait_seconds=delay,
            reads=rate.reads,
            read_limit=rate.read_limit,
            writes=rate.writes,
            write_limit=rate.write_limit,
        )
        await self._sleep(delay)
        return float(delay)
