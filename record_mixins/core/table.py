"""Behavior tables keyed by discriminant value.

Two shapes exist:
- BehaviorTable: value -> single operation, plus an optional default
  (lazy strategy)
- MixinTable: value -> bag of named operations, no default (eager strategy)

Both are literal captures. Construction never validates; eager tables go
through TableValidator before they are registered.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any

Operation = Callable[..., Any]


def discriminant_key(value: Any) -> Any:
    """Normalize a discriminant value (Enum members become their value)."""
    if isinstance(value, Enum):
        return value.value
    return value


def _freeze(mapping: Mapping[Any, Any]) -> Mapping[Any, Any]:
    return MappingProxyType({discriminant_key(k): v for k, v in mapping.items()})


@dataclass(frozen=True)
class BehaviorTable:
    """Single-operation dispatch table for lazy resolution.

    Attributes:
        attribute_name: Discriminant attribute read off each instance
        mapping: Read-only mapping of discriminant value -> operation
        default: Operation used for values absent from mapping (may be None)

    Example:
        >>> table = build_table("role", {"admin": str.upper}, default=str.lower)
        >>> table.lookup("admin") is str.upper
        True
        >>> table.lookup("normal") is str.lower
        True
    """

    attribute_name: str
    mapping: Mapping[Any, Operation]
    default: Operation | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "mapping", _freeze(self.mapping))

    def lookup(self, value: Any) -> Operation | None:
        """Return the operation for a value, falling back to the default.

        Entries mapped to None and unhashable values also fall back to the
        default.
        """
        try:
            operation = self.mapping.get(discriminant_key(value))
        except TypeError:
            # unhashable values never match an entry
            operation = None
        if operation is None:
            return self.default
        return operation


@dataclass(frozen=True)
class MixinTable:
    """Bag-of-operations table for eager application.

    Attributes:
        attribute_name: Discriminant attribute read off each instance
        bags: Read-only mapping of discriminant value -> {name: operation}
    """

    attribute_name: str
    bags: Mapping[Any, Mapping[str, Operation]]

    def __post_init__(self) -> None:
        frozen = {
            discriminant_key(value): MappingProxyType(dict(bag))
            for value, bag in self.bags.items()
        }
        object.__setattr__(self, "bags", MappingProxyType(frozen))

    @property
    def values(self) -> frozenset[Any]:
        """Discriminant values that have a bag."""
        return frozenset(self.bags)

    def bag(self, value: Any) -> Mapping[str, Operation] | None:
        """Return the bag for a value, or None if the table has no entry."""
        try:
            return self.bags.get(discriminant_key(value))
        except TypeError:
            return None

    def operation_names(self, value: Any) -> frozenset[str]:
        """Return the operation names declared in a value's bag."""
        bag = self.bag(value)
        return frozenset(bag) if bag is not None else frozenset()


def build_table(
    attribute_name: str,
    mapping: Mapping[Any, Operation],
    default: Operation | None = None,
) -> BehaviorTable:
    """Capture a lazy dispatch table from literal input."""
    return BehaviorTable(attribute_name=attribute_name, mapping=mapping, default=default)


def build_mixin_table(
    attribute_name: str,
    bags: Mapping[Any, Mapping[str, Operation]],
) -> MixinTable:
    """Capture an eager mixin table from literal input."""
    return MixinTable(attribute_name=attribute_name, bags=bags)
