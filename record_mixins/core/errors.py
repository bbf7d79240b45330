"""Exception types raised by the dispatch engine.

Registration-time failures (eager strategy) derive from DispatchError, a
ValueError, since they describe a bad table or a bad attribute choice:
- AttributeNotFound: attribute missing from the record schema
- NotEnumerated: attribute has no finite value domain
- IncompleteCoverage: table lacks entries for some allowed values
- InconsistentMethods: bags disagree on their operation names
- ReservedOperationName: bag operations named like stored attributes

Resolution-time failures are separate:
- UnresolvedBehavior: lazy lookup found nothing (strict resolution only)
- MissingMixinEntry: eager bag missing at a lifecycle event
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

__all__ = [
    "AttributeNotFound",
    "DispatchError",
    "IncompleteCoverage",
    "InconsistentMethods",
    "MissingMixinEntry",
    "NotEnumerated",
    "ReservedOperationName",
    "UnresolvedBehavior",
]


def _format_names(names: Iterable[Any]) -> str:
    return ", ".join(repr(n) for n in sorted(names, key=str))


class DispatchError(ValueError):
    """Base class for registration-time dispatch failures."""

    def __init__(self, attribute_name: str, message: str) -> None:
        super().__init__(message)
        self.attribute_name = attribute_name


class AttributeNotFound(DispatchError):
    """Referenced discriminant attribute is not declared in the schema."""

    def __init__(self, attribute_name: str) -> None:
        super().__init__(
            attribute_name,
            f"Attribute '{attribute_name}' is not declared in the record schema",
        )


class NotEnumerated(DispatchError):
    """Discriminant attribute has an open-ended value domain."""

    def __init__(self, attribute_name: str) -> None:
        super().__init__(
            attribute_name,
            f"Mixins must be defined over an ENUM attribute, "
            f"'{attribute_name}' has no finite set of values",
        )


class IncompleteCoverage(DispatchError):
    """Mixin table is missing entries for some allowed values.

    Attributes:
        missing: Allowed discriminant values with no bag in the table
    """

    def __init__(self, attribute_name: str, missing: Iterable[str]) -> None:
        self.missing = frozenset(missing)
        super().__init__(
            attribute_name,
            f"Mixin on '{attribute_name}' is missing an implementation for "
            f"some attribute values: {_format_names(self.missing)}",
        )


class InconsistentMethods(DispatchError):
    """Mixin bags do not all declare the same operation names.

    Attributes:
        mismatched: Operation names present in some bags but not in all
    """

    def __init__(self, attribute_name: str, mismatched: Iterable[str]) -> None:
        self.mismatched = frozenset(mismatched)
        super().__init__(
            attribute_name,
            f"Mixin on '{attribute_name}' has implementations with different "
            f"methods: {_format_names(self.mismatched)}",
        )


class ReservedOperationName(DispatchError):
    """Mixin operation names collide with stored record attributes.

    Attributes:
        names: Operation names that are also attribute names
    """

    def __init__(self, attribute_name: str, names: Iterable[str]) -> None:
        self.names = frozenset(names)
        super().__init__(
            attribute_name,
            f"Mixin on '{attribute_name}' defines methods named like record "
            f"attributes: {_format_names(self.names)}",
        )


class UnresolvedBehavior(LookupError):
    """Lazy lookup produced no operation while strict resolution is enabled."""

    def __init__(self, operation_name: str, attribute_name: str, value: Any) -> None:
        super().__init__(
            f"No implementation of '{operation_name}' for "
            f"{attribute_name}={value!r} and no default"
        )
        self.operation_name = operation_name
        self.attribute_name = attribute_name
        self.value = value


class MissingMixinEntry(RuntimeError):
    """A validated mixin table has no bag for an instance's value."""

    def __init__(self, attribute_name: str, value: Any) -> None:
        super().__init__(
            f"No mixin registered for {attribute_name}={value!r}; "
            f"the value is outside the attribute's declared domain"
        )
        self.attribute_name = attribute_name
        self.value = value
