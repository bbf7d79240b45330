"""Lazy, per-access resolution of a single dispatched operation.

A LazyResolver holds an immutable BehaviorTable and resolves the operation
for an instance from the instance's current discriminant value. Nothing is
cached: changing the discriminant changes the next resolution.

Installed on a record type, the resolver acts as a non-data descriptor so
that ``instance.<operation_name>`` delegates to ``resolve(instance)``.

Example:
    >>> resolver = attach(User, "greet", build_table("role", {"admin": hello}))
    >>> resolver.resolve(admin_user) is hello
    True
    >>> admin_user.greet is hello
    True
"""

from __future__ import annotations

import logging
from typing import Any

from record_mixins.core.errors import UnresolvedBehavior
from record_mixins.core.table import BehaviorTable, Operation

logger = logging.getLogger(__name__)


class LazyResolver:
    """Resolves one named operation from a discriminant value on each access.

    Attributes:
        operation_name: Name the operation is exposed under
        table: Dispatch table (immutable)
        strict: Raise UnresolvedBehavior instead of returning None when the
            table has neither an entry nor a default
    """

    def __init__(
        self,
        operation_name: str,
        table: BehaviorTable,
        strict: bool = False,
    ) -> None:
        self.operation_name = operation_name
        self.table = table
        self.strict = strict

    @property
    def attribute_name(self) -> str:
        """Discriminant attribute the resolver reads."""
        return self.table.attribute_name

    def resolve(self, instance: Any) -> Operation | None:
        """Resolve the operation for an instance's current discriminant value.

        Args:
            instance: Record instance carrying the discriminant attribute

        Returns:
            The mapped operation, else the table default, else None

        Raises:
            UnresolvedBehavior: Only in strict mode, when nothing resolves
        """
        value = getattr(instance, self.table.attribute_name, None)
        operation = self.table.lookup(value)
        if operation is None and self.strict:
            raise UnresolvedBehavior(self.operation_name, self.attribute_name, value)
        return operation

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        return self.resolve(instance)

    def __repr__(self) -> str:
        values = ", ".join(sorted(map(str, self.table.mapping)))
        return (
            f"LazyResolver({self.operation_name!r} by {self.attribute_name!r}: "
            f"[{values}], default={self.table.default is not None})"
        )


def attach(
    model: type,
    operation_name: str,
    table: BehaviorTable,
    strict: bool = False,
) -> LazyResolver:
    """Install a lazy resolver on a record type.

    No validation is performed; unmapped values fall back to the default at
    access time. A later attach under the same name replaces the earlier one.

    Args:
        model: Record type to install the resolver on (its own class only)
        operation_name: Name the operation is exposed under
        table: Dispatch table
        strict: See LazyResolver.strict

    Returns:
        The installed resolver
    """
    if isinstance(vars(model).get(operation_name), LazyResolver):
        logger.debug(f"Replacing lazy method {model.__name__}.{operation_name}")

    resolver = LazyResolver(operation_name, table, strict=strict)
    setattr(model, operation_name, resolver)
    logger.debug(
        f"Attached lazy method {model.__name__}.{operation_name} "
        f"by '{table.attribute_name}'"
    )
    return resolver
