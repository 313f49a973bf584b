"""Leading-edge rate limiting for recompute triggers."""

from __future__ import annotations

import functools
import logging
import math
import numbers
import time
from typing import Any, Callable, Optional, TypeVar

from ..errors import InvalidParameterError

logger = logging.getLogger(__name__)

R = TypeVar("R")


class RateLimiter:
    """Allows at most one run per ``interval_ms`` milliseconds.

    Leading edge only: a call arriving too early is rejected outright and is
    never replayed later.

    Usage:
        limiter = RateLimiter(200)
        if limiter.should_run(now):
            limiter.mark_run(now)
            do_work()
    """

    def __init__(self, interval_ms: float):
        if not (isinstance(interval_ms, numbers.Real) and math.isfinite(interval_ms) and interval_ms >= 0):
            raise InvalidParameterError(f"throttle interval must be a finite number >= 0, got {interval_ms!r}")
        self.interval_ms = interval_ms
        self.last_run: Optional[float] = None

    def should_run(self, now: float) -> bool:
        """Whether a call at ``now`` (seconds, monotonic) may execute."""
        if self.last_run is None:
            return True
        return (now - self.last_run) * 1000.0 >= self.interval_ms

    def mark_run(self, now: float) -> None:
        """Record that a call executed at ``now``."""
        self.last_run = now

    def reset(self) -> None:
        self.last_run = None


def throttle(
    fn: Callable[..., R],
    interval_ms: float,
    *,
    clock: Callable[[], float] = time.monotonic,
) -> Callable[..., Optional[R]]:
    """Wrap ``fn`` so calls closer than ``interval_ms`` to the last executed call are dropped.

    Args:
        fn: Function to rate limit.
        interval_ms: Minimum milliseconds between executed calls. 0 disables
            the limit.
        clock: Monotonic clock returning seconds.

    Returns:
        Wrapper returning ``fn``'s result, or None for a dropped call. The
        limiter is available as ``wrapper.limiter``.
    """
    limiter = RateLimiter(interval_ms)

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Optional[R]:
        now = clock()
        if not limiter.should_run(now):
            logger.debug("throttled call to %s", getattr(fn, "__name__", fn))
            return None
        limiter.mark_run(now)
        return fn(*args, **kwargs)

    wrapper.limiter = limiter  # type: ignore[attr-defined]
    return wrapper
