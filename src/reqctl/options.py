"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Per-controller request options.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, PositiveInt, ValidationError

from .errors import ControllerConfigurationError


class RequestOptions(BaseModel):
    """
    Immutable configuration for one request controller.

    Attributes:
        manual: Skip automatic invocation on attach and dependency change.
        initial_data: Sole argument passed to the wrapped operation.
        polling_interval_ms: Re-run the pipeline this long after each
            invocation starts, until cancelled.
        ready: Gate for automatic invocation.
        debounce_interval_ms: Trailing-edge debounce window for `trigger()`.
        throttle_interval_ms: Leading-edge throttle window, used only when no
            debounce window is set.
        loading_delay_ms: Delay before the loading flag is raised.
        refresh_deps: Watched values; any change re-runs the lifecycle.
        on_success: Called with each successful result before loading clears.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    manual: bool = False
    initial_data: Any = None
    polling_interval_ms: PositiveInt | None = None
    ready: bool = True
    debounce_interval_ms: PositiveInt | None = None
    throttle_interval_ms: PositiveInt | None = None
    loading_delay_ms: PositiveInt | None = None
    refresh_deps: tuple[Any, ...] = ()
    on_success: Callable[[Any], Any] | None = None

    @classmethod
    def coerce(
        cls, value: "RequestOptions | Mapping[str, Any] | None"
    ) -> "RequestOptions":
        """Normalize an options instance, mapping or `None` into options."""
        if isinstance(value, cls):
            return value
        try:
            if value is None:
                return cls()
            return cls.model_validate(dict(value))
        except ValidationError as exc:
            raise ControllerConfigurationError(
                f"Invalid request options: {exc}"
            ) from exc

    def with_changes(self, **changes: Any) -> "RequestOptions":
        """Return a validated copy with `changes` applied."""
        fields = {name: getattr(self, name) for name in type(self).model_fields}
        fields.update(changes)
        try:
            return type(self).model_validate(fields)
        except ValidationError as exc:
            raise ControllerConfigurationError(
                f"Invalid request options: {exc}"
            ) from exc

    @property
    def watched_key(self) -> tuple[Any, ...]:
        """Values whose change re-runs the lifecycle."""
        return (self.manual, self.ready, *self.refresh_deps)
