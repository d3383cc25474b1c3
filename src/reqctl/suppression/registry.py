"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Registry for pluggable suppression strategies.
"""

from __future__ import annotations

from threading import Lock

from ..errors import ControllerConfigurationError
from .base import SuppressionStrategy

_STRATEGIES: dict[str, SuppressionStrategy] = {}
_LOCK = Lock()


def register_suppression_strategy(
    strategy: SuppressionStrategy,
    *,
    overwrite: bool = False,
) -> None:
    """Register one suppression strategy by `strategy_id`."""
    key = str(strategy.strategy_id).strip().lower()
    if not key:
        raise ControllerConfigurationError("Suppression strategy id must be non-empty")

    with _LOCK:
        if key in _STRATEGIES and not overwrite:
            raise ControllerConfigurationError(
                f"Suppression strategy already registered: {key}"
            )
        _STRATEGIES[key] = strategy


def get_suppression_strategy(
    strategy: str | SuppressionStrategy,
) -> SuppressionStrategy:
    """Resolve a strategy from its id, or pass an instance through."""
    if not isinstance(strategy, str):
        return strategy

    key = strategy.strip().lower()
    with _LOCK:
        resolved = _STRATEGIES.get(key)
    if resolved is None:
        raise ControllerConfigurationError(f"Unknown suppression strategy '{strategy}'")
    return resolved


def list_suppression_strategies() -> list[str]:
    """List registered strategy ids."""
    with _LOCK:
        return sorted(_STRATEGIES.keys())
