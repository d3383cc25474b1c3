"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Conversion of operation failures into the string stored in `error`.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from ..errors import OperationFailure


def failure_payload(exc: BaseException) -> Any:
    """Extract the payload an exception carries."""
    if isinstance(exc, OperationFailure):
        return exc.payload
    if not exc.args:
        return None
    if len(exc.args) == 1:
        return exc.args[0]
    return exc.args


def _is_empty(payload: Any) -> bool:
    try:
        return not payload
    except (TypeError, ValueError):
        # Objects with ambiguous truthiness count as present.
        return False


def _serialize(payload: Any) -> str:
    if isinstance(payload, str):
        return payload
    if isinstance(payload, (Mapping, list, tuple)):
        try:
            return json.dumps(payload, default=str, ensure_ascii=False)
        except (TypeError, ValueError):
            return str(payload)
    return str(payload)


def describe_failure(exc: BaseException) -> str | None:
    """
    Describe a failure as a string, or `None` when the raised payload is falsy.

    The raised payload is `OperationFailure.payload`; only that can be empty.
    Any other exception is a truthy raised value and always yields a string:
    its message or arguments when they carry something, otherwise its class
    name (a bare `TimeoutError()` becomes ``"TimeoutError"``).

    Strings pass through, mappings and sequences are JSON encoded with `str`
    for anything JSON cannot hold, and everything else goes through `str`.
    Structure beyond the resulting string is not kept.
    """
    payload = failure_payload(exc)
    if isinstance(exc, OperationFailure):
        if _is_empty(payload):
            return None
        return _serialize(payload)
    if _is_empty(payload):
        return type(exc).__name__
    return _serialize(payload) or type(exc).__name__
