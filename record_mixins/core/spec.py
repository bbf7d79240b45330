"""Discriminant specification reader.

Reads from a schema collaborator whether an attribute exists and whether
its values are restricted to a finite set. Pure query, no state.
"""

from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from record_mixins.core.errors import AttributeNotFound


@runtime_checkable
class DiscriminantSource(Protocol):
    """What the dispatch engine needs to know about a record schema."""

    def has_attribute(self, name: str) -> bool: ...

    def value_domain(self, name: str) -> Collection[str] | None: ...


@dataclass(frozen=True)
class DiscriminantSpec:
    """Declared value domain of a discriminant attribute.

    Attributes:
        attribute_name: Name of the attribute in the record schema
        allowed_values: Finite set of values, or None for an open-ended attribute
    """

    attribute_name: str
    allowed_values: frozenset[str] | None = None

    @property
    def is_enumerated(self) -> bool:
        """Check if the attribute is restricted to a finite set of values."""
        return self.allowed_values is not None


def read_spec(schema: DiscriminantSource, attribute_name: str) -> DiscriminantSpec:
    """Read the discriminant spec for an attribute.

    Args:
        schema: Schema collaborator describing the record
        attribute_name: Attribute to inspect

    Returns:
        DiscriminantSpec, with allowed_values None when the attribute is
        not an enumeration

    Raises:
        AttributeNotFound: If the schema does not declare the attribute
    """
    if not schema.has_attribute(attribute_name):
        raise AttributeNotFound(attribute_name)

    domain = schema.value_domain(attribute_name)
    if domain is None:
        return DiscriminantSpec(attribute_name=attribute_name)
    return DiscriminantSpec(
        attribute_name=attribute_name, allowed_values=frozenset(domain)
    )
