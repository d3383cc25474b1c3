"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Deterministic virtual-clock scheduler for tests and local debugging.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
import logging
from dataclasses import dataclass, field

from ..types import TimerCallback
from .base import TimerHandle

logger = logging.getLogger("reqctl.scheduling")


@dataclass(slots=True)
class VirtualTimerHandle:
    """Handle for one callback scheduled on a virtual clock."""

    due_ms: float
    callback: TimerCallback = field(repr=False)
    _cancelled: bool = False
    _fired: bool = False

    def cancel(self) -> None:
        self._cancelled = True

    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def fired(self) -> bool:
        return self._fired


class VirtualTimerScheduler:
    """
    Timer scheduler whose clock only moves when `advance()` is awaited.

    Callbacks fire in due order (ties in scheduling order). After each
    callback the running loop is given `settle_rounds` turns so tasks spawned
    or woken by the callback can run before the clock moves on.
    """

    def __init__(self, *, start_ms: float = 0.0, settle_rounds: int = 10) -> None:
        self._now_ms = float(start_ms)
        self._settle_rounds = settle_rounds
        self._heap: list[tuple[float, int, VirtualTimerHandle]] = []
        self._seq = itertools.count()

    def schedule_once(self, callback: TimerCallback, delay_ms: float) -> TimerHandle:
        handle = VirtualTimerHandle(
            due_ms=self._now_ms + max(0.0, float(delay_ms)),
            callback=callback,
        )
        heapq.heappush(self._heap, (handle.due_ms, next(self._seq), handle))
        return handle

    def cancel_scheduled(self, handle: TimerHandle) -> None:
        handle.cancel()

    def now_ms(self) -> float:
        return self._now_ms

    @property
    def pending_count(self) -> int:
        """Number of scheduled callbacks that have neither fired nor been cancelled."""
        return sum(1 for _, _, handle in self._heap if not handle.cancelled())

    async def settle(self) -> None:
        """Give the running loop a few turns without moving the clock."""
        for _ in range(self._settle_rounds):
            await asyncio.sleep(0)

    async def advance(self, delta_ms: float) -> None:
        """Move the clock forward, firing every callback that comes due."""
        target = self._now_ms + max(0.0, float(delta_ms))
        await self.settle()
        while self._heap and self._heap[0][0] <= target:
            due_ms, _, handle = heapq.heappop(self._heap)
            if handle.cancelled():
                continue
            self._now_ms = max(self._now_ms, due_ms)
            handle._fired = True
            try:
                handle.callback()
            except Exception:  # noqa: BLE001
                logger.exception("Virtual timer callback failed at %.1fms", due_ms)
            await self.settle()
        self._now_ms = target
        await self.settle()
