"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Asynchronous request controller.

Wraps one async operation and manages when it runs, how rapid calls are
suppressed, how its result is surfaced and how polling re-invokes it.

Quick start::

    from reqctl import RequestOptions, use_request

    binding = use_request(fetch_profile, RequestOptions(polling_interval_ms=5000))
    ...
    binding.controller.cancel()
"""

from .controller import (
    RequestBinding,
    RequestController,
    RequestState,
    deps_changed,
    describe_failure,
    shallow_equal,
    use_request,
)
from .errors import (
    ControllerClosedError,
    ControllerConfigurationError,
    OperationFailure,
    RequestControllerError,
)
from .options import RequestOptions
from .scheduling import AsyncioTimerScheduler, TimerScheduler, VirtualTimerScheduler
from .settings import ControllerSettings

__all__ = [
    "RequestController",
    "RequestOptions",
    "RequestState",
    "RequestBinding",
    "use_request",
    "shallow_equal",
    "deps_changed",
    "describe_failure",
    "ControllerSettings",
    "TimerScheduler",
    "AsyncioTimerScheduler",
    "VirtualTimerScheduler",
    "RequestControllerError",
    "ControllerConfigurationError",
    "ControllerClosedError",
    "OperationFailure",
]
