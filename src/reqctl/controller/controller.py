"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Request controller: lifecycle, invocation pipeline, polling and cancellation.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable, Mapping
from dataclasses import replace
from typing import Any

from ..errors import ControllerClosedError, ControllerConfigurationError
from ..options import RequestOptions
from ..scheduling import AsyncioTimerScheduler, TimerHandle, TimerScheduler
from ..settings import ControllerSettings
from ..suppression import SuppressedCall, SuppressionStrategy, get_suppression_strategy
from ..types import Operation
from .failures import describe_failure
from .state import CachedValue, RequestState

logger = logging.getLogger("reqctl.controller")

StateListener = Callable[[RequestState], None]


class RequestController:
    """
    Manages when one async operation runs and surfaces its outcome.

    A host drives the controller by calling `start()` when it attaches and
    whenever `manual`, `ready` or a watched dependency changes (see
    `RequestBinding`), and by calling `trigger()`/`cancel()` directly.
    Everything runs on the current event loop; there are no locks, and two
    executors that overlap simply race for the final state.
    """

    def __init__(
        self,
        operation: Operation,
        options: RequestOptions | Mapping[str, Any] | None = None,
        *,
        scheduler: TimerScheduler | None = None,
        settings: ControllerSettings | None = None,
        debounce_strategy: str | SuppressionStrategy | None = None,
        throttle_strategy: str | SuppressionStrategy | None = None,
        name: str | None = None,
    ) -> None:
        if not callable(operation):
            raise ControllerConfigurationError("Request operation must be callable")
        self._operation = operation
        self._options = RequestOptions.coerce(options)
        self._settings = settings or ControllerSettings()
        self._scheduler: TimerScheduler = scheduler or AsyncioTimerScheduler()
        self._debounce_strategy = get_suppression_strategy(
            debounce_strategy or self._settings.debounce_strategy
        )
        self._throttle_strategy = get_suppression_strategy(
            throttle_strategy or self._settings.throttle_strategy
        )
        self._name = name or getattr(operation, "__qualname__", None) or "request"

        self._state = RequestState()
        self._cached = CachedValue(None)
        self._listeners: list[StateListener] = []

        self._active = False
        self._closed = False
        self._epoch = 0
        self._in_flight = 0
        self._poll_handle: TimerHandle | None = None
        self._loading_handle: TimerHandle | None = None
        self._tasks: set[asyncio.Task[None]] = set()
        self._suppressed = self._build_suppressor()

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def options(self) -> RequestOptions:
        return self._options

    @property
    def state(self) -> RequestState:
        return self._state

    @property
    def data(self) -> Any:
        return self._state.data

    @property
    def loading(self) -> bool:
        return self._state.loading

    @property
    def error(self) -> str | None:
        return self._state.error

    @property
    def active(self) -> bool:
        """Whether a polling chain is logically alive."""
        return self._active

    @property
    def epoch(self) -> int:
        """Number of lifecycles started so far."""
        return self._epoch

    @property
    def in_flight(self) -> int:
        return self._in_flight

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def cached_value(self) -> CachedValue:
        """Accessor for `data`; a new accessor is issued only when `data` changes."""
        return self._cached

    def get_cached_value(self) -> Any:
        """Return the current `data` without side effects."""
        return self._cached()

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """
        Call `listener` with a state snapshot after every observable change.

        Returns a callable that removes the listener.
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def replace_options(self, options: RequestOptions | Mapping[str, Any]) -> None:
        """Swap options in place; does not start a lifecycle."""
        new = RequestOptions.coerce(options)
        old = self._options
        self._options = new
        windows_changed = (old.debounce_interval_ms, old.throttle_interval_ms) != (
            new.debounce_interval_ms,
            new.throttle_interval_ms,
        )
        if windows_changed:
            if self._suppressed is not None:
                self._suppressed.cancel()
            self._suppressed = self._build_suppressor()

    def start(self) -> asyncio.Task[None] | None:
        """
        Begin a lifecycle epoch.

        Clears `data` and `error`, arms the delayed loading flag when
        configured and, unless manual or not ready, runs the pipeline. A poll
        chain left over from an earlier epoch is not cancelled here.

        Returns:
            The executor task when one was spawned immediately, else `None`.
        """
        self._ensure_open()
        self._epoch += 1
        options = self._options
        will_invoke = not options.manual and options.ready
        logger.debug(
            "Request %s lifecycle %d started (invoke=%s)",
            self._name,
            self._epoch,
            will_invoke,
        )

        if options.loading_delay_ms is not None:
            self._arm_loading_flag(options.loading_delay_ms)
        self._set_state(error=None, data=None)
        if not will_invoke:
            return None
        return self.trigger()

    def trigger(self) -> asyncio.Task[None] | None:
        """
        Run the operation once, subject to debounce or throttle.

        Returns:
            The executor task when it started now, `None` when the call was
            deferred (debounce) or dropped (throttle).
        """
        self._ensure_open()
        if self._suppressed is not None:
            return self._suppressed()
        return self._spawn()

    def cancel(self) -> None:
        """
        Stop the polling chain.

        No-op unless a poll timer is held. The awaited operation itself is
        never interrupted.
        """
        if self._poll_handle is None:
            return
        self._scheduler.cancel_scheduled(self._poll_handle)
        self._poll_handle = None
        self._active = False
        # A deferred debounced call would otherwise revive the chain.
        if self._suppressed is not None and self._suppressed.pending:
            self._suppressed.cancel()
        logger.debug("Request %s polling cancelled", self._name)

    def close(self) -> None:
        """Cancel every timer this controller owns and refuse further work."""
        if self._closed:
            return
        self._closed = True
        self._active = False
        for handle in (self._poll_handle, self._loading_handle):
            if handle is not None:
                self._scheduler.cancel_scheduled(handle)
        self._poll_handle = None
        self._loading_handle = None
        if self._suppressed is not None:
            self._suppressed.cancel()
        logger.debug(
            "Request %s closed (%d executor(s) still in flight)",
            self._name,
            self._in_flight,
        )

    async def aclose(self) -> None:
        """Close, then wait for in-flight executors to settle."""
        self.close()
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def __aenter__(self) -> "RequestController":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        _ = (exc_type, exc, tb)
        await self.aclose()

    # ------------------------------------------------------------------
    # Invocation pipeline
    # ------------------------------------------------------------------

    def _build_suppressor(self) -> SuppressedCall | None:
        options = self._options
        if options.debounce_interval_ms is not None:
            return self._debounce_strategy.wrap(
                self._spawn, options.debounce_interval_ms, scheduler=self._scheduler
            )
        if options.throttle_interval_ms is not None:
            return self._throttle_strategy.wrap(
                self._spawn, options.throttle_interval_ms, scheduler=self._scheduler
            )
        return None

    def _spawn(self) -> asyncio.Task[None] | None:
        if self._closed:
            return None
        loop = asyncio.get_running_loop()
        options = self._options
        self._begin_invocation(options)
        task = loop.create_task(self._execute(options))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _begin_invocation(self, options: RequestOptions) -> None:
        self._active = True
        if options.polling_interval_ms is not None and self._active:
            self._schedule_poll(options.polling_interval_ms)
        self._in_flight += 1
        if options.loading_delay_ms is None:
            self._set_state(loading=True)
        else:
            self._arm_loading_flag(options.loading_delay_ms)
        logger.debug(
            "Request %s invocation started (in_flight=%d)", self._name, self._in_flight
        )

    async def _execute(self, options: RequestOptions) -> None:
        try:
            result = await self._operation(options.initial_data)
            self._set_state(data=result)
            if options.on_success is not None:
                outcome = options.on_success(result)
                if inspect.isawaitable(outcome):
                    await outcome
        except asyncio.CancelledError:
            raise
        except Exception as exc:  # noqa: BLE001
            self._record_failure(describe_failure(exc))
        finally:
            self._in_flight -= 1
            self._set_state(loading=False)

    def _record_failure(self, error: str | None) -> None:
        if error is None:
            logger.debug("Request %s failed with an empty payload; ignored", self._name)
            return
        if self._settings.log_failures:
            logger.warning("Request %s failed: %s", self._name, error)
        self._set_state(error=error)

    # ------------------------------------------------------------------
    # Timers
    # ------------------------------------------------------------------

    def _schedule_poll(self, interval_ms: int) -> None:
        if self._poll_handle is not None:
            self._scheduler.cancel_scheduled(self._poll_handle)
        self._poll_handle = self._scheduler.schedule_once(self._on_poll_due, interval_ms)

    def _on_poll_due(self) -> None:
        # The handle is kept after firing so cancel() still ends the chain
        # while a suppressed poll waits to spawn its executor.
        if not self._active or self._closed:
            return
        logger.debug("Request %s poll due", self._name)
        self.trigger()

    def _arm_loading_flag(self, delay_ms: int) -> None:
        if self._loading_handle is not None:
            self._scheduler.cancel_scheduled(self._loading_handle)
        self._loading_handle = self._scheduler.schedule_once(
            self._on_loading_delay_elapsed, delay_ms
        )

    def _on_loading_delay_elapsed(self) -> None:
        self._loading_handle = None
        if self._closed or not self._active or self._in_flight == 0:
            return
        self._set_state(loading=True)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _ensure_open(self) -> None:
        if self._closed:
            raise ControllerClosedError(f"Request controller '{self._name}' is closed")

    def _set_state(self, **changes: Any) -> None:
        current = self._state
        # `data` compares by identity since the cached accessor tracks identity.
        if all(
            getattr(current, key) is value
            if key == "data"
            else getattr(current, key) == value
            for key, value in changes.items()
        ):
            return
        self._state = replace(current, **changes)
        if "data" in changes and changes["data"] is not current.data:
            self._cached = CachedValue(changes["data"])
        self._notify()

    def _notify(self) -> None:
        snapshot = self._state
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:  # noqa: BLE001
                logger.exception("Request %s state listener failed", self._name)
