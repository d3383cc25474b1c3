"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Timer facilities used for polling, debounce, throttle and loading delays.
"""

from .asyncio_timers import AsyncioTimerScheduler
from .base import TimerHandle, TimerScheduler
from .virtual import VirtualTimerHandle, VirtualTimerScheduler

__all__ = [
    "TimerHandle",
    "TimerScheduler",
    "AsyncioTimerScheduler",
    "VirtualTimerScheduler",
    "VirtualTimerHandle",
]
