"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Leading-edge throttle.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from ..scheduling import TimerScheduler


class ThrottledCall:
    """
    Runs the first call immediately, then drops calls for `interval_ms`.

    Nothing is deferred: a dropped call is gone, so over any duration `D` the
    wrapped fn runs at most `ceil(D / interval_ms)` times.
    """

    def __init__(
        self,
        fn: Callable[..., Any],
        interval_ms: int,
        *,
        scheduler: TimerScheduler,
    ) -> None:
        self._fn = fn
        self._interval_ms = interval_ms
        self._scheduler = scheduler
        self._last_run_ms: float | None = None

    @property
    def pending(self) -> bool:
        return False

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        now = self._scheduler.now_ms()
        if self._last_run_ms is not None and now - self._last_run_ms < self._interval_ms:
            return None
        self._last_run_ms = now
        return self._fn(*args, **kwargs)

    def cancel(self) -> None:
        self._last_run_ms = None


class ThrottleStrategy:
    """Strategy provider for leading-edge throttle."""

    strategy_id = "throttle"

    def wrap(
        self,
        fn: Callable[..., Any],
        interval_ms: int,
        *,
        scheduler: TimerScheduler,
    ) -> ThrottledCall:
        return ThrottledCall(fn, interval_ms, scheduler=scheduler)
