"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Protocols for pluggable invocation suppression.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol

from ..scheduling import TimerScheduler


class SuppressedCall(Protocol):
    """Callable produced by a strategy; forwards some calls to the wrapped fn."""

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        """Submit one call; returns the wrapped fn's result when it ran now."""
        ...

    @property
    def pending(self) -> bool:
        """Whether a deferred call is waiting on a timer."""
        ...

    def cancel(self) -> None:
        """Drop any deferred call."""
        ...


class SuppressionStrategy(Protocol):
    """Factory contract turning `(fn, interval_ms)` into a suppressed callable."""

    strategy_id: str

    def wrap(
        self,
        fn: Callable[..., Any],
        interval_ms: int,
        *,
        scheduler: TimerScheduler,
    ) -> SuppressedCall:
        """Return the suppressed form of `fn`."""
        ...
