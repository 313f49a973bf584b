"""Tests for the leading-edge rate limiter."""

from __future__ import annotations

import pytest

from mapcluster.errors import InvalidParameterError
from mapcluster.layer.throttle import RateLimiter, throttle


def test_fresh_limiter_allows_the_first_call():
    limiter = RateLimiter(200)

    assert limiter.should_run(0.0)
    assert limiter.should_run(12345.0)


def test_calls_inside_the_interval_are_rejected():
    limiter = RateLimiter(200)
    limiter.mark_run(10.0)

    assert not limiter.should_run(10.05)
    assert not limiter.should_run(10.199)
    assert limiter.should_run(10.25)


def test_reset_forgets_the_last_run():
    limiter = RateLimiter(200)
    limiter.mark_run(10.0)
    limiter.reset()

    assert limiter.should_run(10.01)


@pytest.mark.parametrize("bad", [-1, float("nan"), float("inf"), float("-inf")])
def test_invalid_interval_is_rejected(bad):
    with pytest.raises(InvalidParameterError):
        RateLimiter(bad)


def test_nan_interval_cannot_silence_the_wrapper():
    with pytest.raises(InvalidParameterError):
        throttle(lambda: 1, float("nan"))


def test_wrapper_drops_calls_and_never_replays_them(clock):
    calls = []
    wrapped = throttle(lambda x: calls.append(x) or x, 200, clock=clock)

    assert wrapped("a") == "a"
    clock.advance_ms(50)
    assert wrapped("b") is None
    clock.advance_ms(500)

    assert calls == ["a"]
    assert wrapped("c") == "c"
    assert calls == ["a", "c"]


def test_interval_is_measured_from_last_executed_call(clock):
    calls = []
    wrapped = throttle(calls.append, 200, clock=clock)

    wrapped(1)
    for _ in range(5):
        clock.advance_ms(60)
        wrapped(2)

    # executed at t=0 and t=240 only
    assert calls == [1, 2]
    assert wrapped.limiter.last_run == pytest.approx(clock.now - 0.06)


def test_zero_interval_never_throttles(clock):
    calls = []
    wrapped = throttle(calls.append, 0, clock=clock)

    for i in range(3):
        wrapped(i)

    assert calls == [0, 1, 2]
