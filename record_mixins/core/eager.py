"""Eager application of operation bags at lifecycle events.

An EagerApplier is a callback object holding an immutable, validated
MixinTable. It is registered with a lifecycle-hook collaborator and, when
invoked with an instance or a batch, copies the bag matching each instance's
discriminant value onto that instance. The copy is a snapshot: later changes
to the discriminant do not re-derive it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any, Protocol

from record_mixins.core.errors import MissingMixinEntry
from record_mixins.core.spec import DiscriminantSpec
from record_mixins.core.table import MixinTable
from record_mixins.core.validation import TableValidator, validate_table

logger = logging.getLogger(__name__)


class LifecycleHooks(Protocol):
    """Registration points the eager strategy needs from the host."""

    def add_before_create(self, callback: Callable[[Any], None]) -> None: ...

    def add_after_find(self, callback: Callable[[Any], None]) -> None: ...


class EagerApplier:
    """Copies a resolved operation bag onto instances.

    Attributes:
        table: Validated mixin table (immutable)
    """

    def __init__(self, table: MixinTable) -> None:
        self.table = table

    @property
    def attribute_name(self) -> str:
        """Discriminant attribute the applier reads."""
        return self.table.attribute_name

    def apply(self, instance: Any) -> None:
        """Copy the bag for an instance's discriminant value onto the instance.

        Existing attributes with the same names are overwritten. An unset
        (None) discriminant leaves the instance unchanged.

        Raises:
            MissingMixinEntry: If the value has no bag in the table
        """
        value = getattr(instance, self.attribute_name, None)
        if value is None:
            return

        bag = self.table.bag(value)
        if bag is None:
            raise MissingMixinEntry(self.attribute_name, value)

        instance.__dict__.update(bag)

    def __call__(self, instances: Any) -> None:
        """Apply to a single instance or to each member of a batch."""
        if isinstance(instances, Iterable):
            for instance in instances:
                self.apply(instance)
        else:
            self.apply(instances)

    def __repr__(self) -> str:
        values = ", ".join(sorted(map(str, self.table.values)))
        return f"EagerApplier({self.attribute_name!r}: [{values}])"


def attach(
    hooks: LifecycleHooks,
    spec: DiscriminantSpec | None,
    table: MixinTable,
    validator: TableValidator | None = None,
) -> EagerApplier:
    """Validate a mixin table and register it with the lifecycle hooks.

    The same applier runs before an instance is first persisted and after
    instances are loaded. Nothing is registered if validation fails.

    Args:
        hooks: Lifecycle-hook collaborator of the record type
        spec: Discriminant spec, or None if it could not be read
        table: Mixin table to register
        validator: Validator to use (defaults to the shared one)

    Returns:
        The registered applier

    Raises:
        DispatchError: Any validation failure, before registration
    """
    if validator is None:
        validate_table(spec, table)
    else:
        validator.validate(spec, table)

    if spec is not None and spec.allowed_values is not None:
        unreachable = table.values - spec.allowed_values
        if unreachable:
            logger.debug(
                f"Mixin on '{table.attribute_name}' has bags for undeclared "
                f"values {sorted(map(str, unreachable))}; they will never apply"
            )

    applier = EagerApplier(table)
    hooks.add_before_create(applier)
    hooks.add_after_find(applier)
    logger.debug(f"Registered mixin by '{table.attribute_name}'")
    return applier
