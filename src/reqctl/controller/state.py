"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Observable controller state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class RequestState:
    """Snapshot of the observable request state."""

    data: Any = None
    loading: bool = False
    error: str | None = None


class CachedValue:
    """Zero-argument accessor bound to one `data` value."""

    __slots__ = ("_value",)

    def __init__(self, value: Any) -> None:
        self._value = value

    def __call__(self) -> Any:
        return self._value

    def __repr__(self) -> str:
        return f"CachedValue({self._value!r})"
