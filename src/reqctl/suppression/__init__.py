"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Debounce/throttle strategies applied to the invocation pipeline.
"""

from .base import SuppressedCall, SuppressionStrategy
from .debounce import DebouncedCall, DebounceStrategy
from .registry import (
    get_suppression_strategy,
    list_suppression_strategies,
    register_suppression_strategy,
)
from .throttle import ThrottledCall, ThrottleStrategy

# Register built-ins at import time.
register_suppression_strategy(DebounceStrategy(), overwrite=True)
register_suppression_strategy(ThrottleStrategy(), overwrite=True)

__all__ = [
    "SuppressedCall",
    "SuppressionStrategy",
    "DebouncedCall",
    "DebounceStrategy",
    "ThrottledCall",
    "ThrottleStrategy",
    "register_suppression_strategy",
    "get_suppression_strategy",
    "list_suppression_strategies",
]
