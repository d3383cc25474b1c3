"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Shared type aliases.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, TypeAlias

# Wrapped operation: async callable taking one optional argument.
Operation: TypeAlias = Callable[..., Awaitable[Any]]

# Success hook; may return an awaitable which is awaited before loading clears.
SuccessCallback: TypeAlias = Callable[[Any], Awaitable[None] | None]

TimerCallback: TypeAlias = Callable[[], None]
