"""Lifecycle hooks for record types.

Each record type owns a HookRegistry with two registration points:
- before_create: runs with an instance before it is first persisted
- after_find: runs with the list of instances loaded by a query

Callbacks run synchronously, in registration order, and complete before
the surrounding save or query returns. Exceptions propagate to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

logger = logging.getLogger(__name__)

Hook = Callable[[Any], None]


class HookRegistry:
    """Ordered lifecycle callbacks of one record type."""

    def __init__(self) -> None:
        self._before_create: list[Hook] = []
        self._after_find: list[Hook] = []

    def add_before_create(self, callback: Hook) -> None:
        """Register a callback run before an instance is first persisted."""
        self._before_create.append(callback)

    def add_after_find(self, callback: Hook) -> None:
        """Register a callback run after instances are loaded."""
        self._after_find.append(callback)

    @property
    def before_create(self) -> tuple[Hook, ...]:
        """Registered before-create callbacks, in order."""
        return tuple(self._before_create)

    @property
    def after_find(self) -> tuple[Hook, ...]:
        """Registered after-find callbacks, in order."""
        return tuple(self._after_find)

    def run_before_create(self, instance: Any) -> None:
        """Run before-create callbacks on an instance."""
        for callback in self._before_create:
            callback(instance)

    def run_after_find(self, instances: Sequence[Any]) -> None:
        """Run after-find callbacks on a batch of loaded instances."""
        if not instances:
            return
        logger.debug(
            f"Running {len(self._after_find)} after-find hooks on "
            f"{len(instances)} instances"
        )
        for callback in self._after_find:
            callback(instances)

    def __len__(self) -> int:
        return len(self._before_create) + len(self._after_find)
