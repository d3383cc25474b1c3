"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Controller package: state machine, failure description and reactive binding.
"""

from .binding import RequestBinding, deps_changed, shallow_equal, use_request
from .controller import RequestController, StateListener
from .failures import describe_failure, failure_payload
from .state import CachedValue, RequestState

__all__ = [
    "RequestController",
    "RequestState",
    "CachedValue",
    "StateListener",
    "RequestBinding",
    "use_request",
    "shallow_equal",
    "deps_changed",
    "describe_failure",
    "failure_payload",
]
