"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Trailing-edge debounce.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from ..scheduling import TimerHandle, TimerScheduler


class DebouncedCall:
    """Runs the wrapped fn once calls stop arriving for `interval_ms`."""

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
        self._handle: TimerHandle | None = None
        self._args: tuple[Any, ...] = ()
        self._kwargs: dict[str, Any] = {}

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        # Latest call wins; earlier arguments are discarded with their timer.
        self._args = args
        self._kwargs = kwargs
        if self._handle is not None:
            self._scheduler.cancel_scheduled(self._handle)
        self._handle = self._scheduler.schedule_once(self._fire, self._interval_ms)
        return None

    def cancel(self) -> None:
        if self._handle is not None:
            self._scheduler.cancel_scheduled(self._handle)
        self._handle = None

    def _fire(self) -> None:
        self._handle = None
        args, kwargs = self._args, self._kwargs
        self._args, self._kwargs = (), {}
        self._fn(*args, **kwargs)


class DebounceStrategy:
    """Strategy provider for trailing-edge debounce."""

    strategy_id = "debounce"

    def wrap(
        self,
        fn: Callable[..., Any],
        interval_ms: int,
        *,
        scheduler: TimerScheduler,
    ) -> DebouncedCall:
        return DebouncedCall(fn, interval_ms, scheduler=scheduler)
