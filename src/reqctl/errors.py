"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Error taxonomy for the request controller.
"""

from __future__ import annotations

from typing import Any


class RequestControllerError(RuntimeError):
    """Base error raised by controller runtime APIs."""


class ControllerConfigurationError(RequestControllerError, ValueError):
    """Raised when options, settings or strategy resolution are invalid."""


class ControllerClosedError(RequestControllerError):
    """Raised when a closed controller is asked to start or trigger."""


class OperationFailure(Exception):
    """
    Failure raised by a wrapped operation with a structured payload.

    Any exception raised by the operation counts as a failure; this class only
    exists so callers can attach a payload other than a message string. The
    controller keeps nothing but the string form of the payload.
    """

    def __init__(self, payload: Any = None) -> None:
        super().__init__(payload)
        self.payload = payload
