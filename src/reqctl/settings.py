"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Process-wide controller defaults and explicit env loading.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True, slots=True)
class ControllerSettings:
    """Defaults shared by controllers that are not given explicit overrides."""

    debounce_strategy: str = "debounce"
    throttle_strategy: str = "throttle"
    log_failures: bool = True

    @staticmethod
    def from_env() -> "ControllerSettings":
        """Load settings from environment variables."""
        return ControllerSettings(
            debounce_strategy=os.getenv("REQCTL_DEBOUNCE_STRATEGY", "debounce"),
            throttle_strategy=os.getenv("REQCTL_THROTTLE_STRATEGY", "throttle"),
            log_failures=os.getenv("REQCTL_LOG_FAILURES", "true").strip().lower()
            in _TRUTHY,
        )
