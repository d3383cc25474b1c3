"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Reactive binding: re-runs the controller lifecycle when watched inputs change.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping, Sequence
from typing import Any

from ..errors import RequestControllerError
from ..options import RequestOptions
from ..types import Operation
from .controller import RequestController


def _same(left: Any, right: Any) -> bool:
    if left is right:
        return True
    try:
        return bool(left == right)
    except (TypeError, ValueError):
        return False


def shallow_equal(left: Sequence[Any] | None, right: Sequence[Any] | None) -> bool:
    """Compare two sequences element-wise by identity, then equality."""
    if left is right:
        return True
    if left is None or right is None:
        return False
    if len(left) != len(right):
        return False
    return all(_same(a, b) for a, b in zip(left, right))


def deps_changed(previous: Sequence[Any] | None, current: Sequence[Any]) -> bool:
    """Return whether the lifecycle must re-run; `None` means never run."""
    return previous is None or not shallow_equal(previous, current)


class RequestBinding:
    """
    Host-side driver for one controller.

    `attach()` runs the first lifecycle. Each `update()` applies new option
    values and re-runs the lifecycle only when `manual`, `ready` or an element
    of `refresh_deps` differs from the previous run. Other option changes
    (for example `initial_data`) take effect on the next invocation without a
    restart.
    """

    def __init__(self, controller: RequestController) -> None:
        self._controller = controller
        self._last_key: tuple[Any, ...] | None = None

    @property
    def controller(self) -> RequestController:
        return self._controller

    @property
    def attached(self) -> bool:
        return self._last_key is not None

    def attach(self) -> asyncio.Task[None] | None:
        """Run the first lifecycle."""
        if self.attached:
            raise RequestControllerError(
                f"Request binding for '{self._controller.name}' is already attached"
            )
        return self._run_if_changed()

    def update(self, **changes: Any) -> asyncio.Task[None] | None:
        """Apply option changes; restart the lifecycle if watched inputs moved."""
        if changes:
            self._controller.replace_options(
                self._controller.options.with_changes(**changes)
            )
        if not self.attached:
            return None
        return self._run_if_changed()

    def detach(self) -> None:
        """Tear down the controller's timers."""
        self._controller.close()
        self._last_key = None

    def _run_if_changed(self) -> asyncio.Task[None] | None:
        key = self._controller.options.watched_key
        if not deps_changed(self._last_key, key):
            return None
        self._last_key = key
        return self._controller.start()


def use_request(
    operation: Operation,
    options: RequestOptions | Mapping[str, Any] | None = None,
    **controller_kwargs: Any,
) -> RequestBinding:
    """Build a controller for `operation`, bind it and run the first lifecycle."""
    binding = RequestBinding(RequestController(operation, options, **controller_kwargs))
    binding.attach()
    return binding
