"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Timer facility protocol.
"""

from __future__ import annotations

from typing import Protocol

from ..types import TimerCallback


class TimerHandle(Protocol):
    """Opaque handle for one scheduled callback."""

    def cancel(self) -> None:
        """Prevent the callback from firing; no-op once fired."""
        ...

    def cancelled(self) -> bool:
        """Return whether `cancel()` was called."""
        ...


class TimerScheduler(Protocol):
    """Schedule-once / cancel capability with a millisecond clock."""

    def schedule_once(self, callback: TimerCallback, delay_ms: float) -> TimerHandle:
        """Run `callback` once after `delay_ms` milliseconds."""
        ...

    def cancel_scheduled(self, handle: TimerHandle) -> None:
        """Cancel a handle returned by `schedule_once`."""
        ...

    def now_ms(self) -> float:
        """Return the scheduler's monotonic clock in milliseconds."""
        ...
