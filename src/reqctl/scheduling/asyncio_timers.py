"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Event-loop backed timer scheduler.
"""

from __future__ import annotations

import asyncio

from ..types import TimerCallback
from .base import TimerHandle


class AsyncioTimerScheduler:
    """Timer scheduler built on `loop.call_later` and `loop.time()`."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def _resolve_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is not None:
            return self._loop
        return asyncio.get_running_loop()

    def schedule_once(self, callback: TimerCallback, delay_ms: float) -> TimerHandle:
        delay_s = max(0.0, float(delay_ms)) / 1000.0
        return self._resolve_loop().call_later(delay_s, callback)

    def cancel_scheduled(self, handle: TimerHandle) -> None:
        handle.cancel()

    def now_ms(self) -> float:
        return self._resolve_loop().time() * 1000.0
