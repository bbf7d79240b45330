"""Registration entry points for discriminant-keyed behavior.

Two strategies attach behavior to a record type, keyed by the value of one of
its attributes:

- ``add_method_by``: one method, resolved lazily from the instance's current
  value on every access, with an optional default
- ``mixin``: a bag of methods per value of an ENUM attribute, validated for
  completeness and copied onto instances when they are created or loaded

Both return the record type so registrations can be chained, and both record
what they registered in the type's ordered ``__behaviors__``.

Example:
    >>> User = store.define("user", {
    ...     "role": {"type": "enum", "values": ["normal", "admin"]},
    ... })
    >>> User = mixin(User, "role", {
    ...     "normal": {"destroy_everything": refuse},
    ...     "admin": {"destroy_everything": comply},
    ... })
    >>> User.create(role="admin").destroy_everything is comply
    True
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from record_mixins.config import get_settings
from record_mixins.core import eager, lazy
from record_mixins.core.errors import ReservedOperationName
from record_mixins.core.spec import read_spec
from record_mixins.core.table import build_mixin_table, build_table

if TYPE_CHECKING:
    from record_mixins.host.model import Record

logger = logging.getLogger(__name__)

# Stored on every record next to the declared attributes
ID_ATTRIBUTE = "id"


class Strategy(str, Enum):
    """How a registration attaches behavior."""

    LAZY = "lazy"  # resolved on every access
    EAGER = "eager"  # copied at lifecycle events


@dataclass(frozen=True)
class Registration:
    """One entry in a record type's behavior surface.

    Attributes:
        attribute_name: Discriminant attribute
        strategy: Attachment strategy
        operation_names: Names of the operations installed
        values: Discriminant values with an explicit entry
        has_default: Whether a default operation was supplied (lazy only)
    """

    attribute_name: str
    strategy: Strategy
    operation_names: tuple[str, ...]
    values: tuple[str, ...]
    has_default: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "attribute_name": self.attribute_name,
            "strategy": self.strategy.value,
            "operation_names": list(self.operation_names),
            "values": list(self.values),
            "has_default": self.has_default,
        }


def _record(model: type[Record], registration: Registration) -> None:
    model.__behaviors__ = (*model.__behaviors__, registration)


def add_method_by(
    model: type[Record],
    attribute_name: str,
    method_name: str,
    methods: Mapping[Any, Callable[..., Any]],
    default: Callable[..., Any] | None = None,
) -> type[Record]:
    """Add a method dispatched on the current value of an attribute.

    Accessing ``instance.<method_name>`` returns ``methods[value]`` for the
    instance's current value of ``attribute_name``, else ``default``, else
    None. The attribute is not checked against the schema.

    Args:
        model: Record type to extend
        attribute_name: Attribute whose value selects the implementation
        method_name: Name of the method to add
        methods: Implementations keyed by attribute value
        default: Implementation for values not in methods

    Returns:
        The record type, for chaining
    """
    if model.__schema__.has_attribute(method_name):
        logger.warning(
            f"Method '{method_name}' on {model.__name__} has the name of a "
            f"declared attribute; instance values will shadow it"
        )

    table = build_table(attribute_name, methods, default)
    lazy.attach(model, method_name, table, strict=get_settings().strict_resolution)

    _record(
        model,
        Registration(
            attribute_name=attribute_name,
            strategy=Strategy.LAZY,
            operation_names=(method_name,),
            values=tuple(str(v) for v in table.mapping),
            has_default=default is not None,
        ),
    )
    return model


def mixin(
    model: type[Record],
    attribute_name: str,
    methods: Mapping[Any, Mapping[str, Callable[..., Any]]],
) -> type[Record]:
    """Add a bag of methods selected by the value of an ENUM attribute.

    The bag matching an instance's value is copied onto the instance before
    it is first saved and after it is loaded. Later mixins overwrite methods
    of the same name installed by earlier ones.

    Args:
        model: Record type to extend
        attribute_name: ENUM attribute whose value selects the bag
        methods: Bags of {method name: implementation} keyed by attribute value

    Returns:
        The record type, for chaining

    Raises:
        AttributeNotFound: If the attribute is not declared
        NotEnumerated: If the attribute is not an ENUM
        IncompleteCoverage: If some ENUM values have no bag
        InconsistentMethods: If bags declare different method names
        ReservedOperationName: If a method is named like a stored attribute
    """
    spec = read_spec(model.__schema__, attribute_name)
    table = build_mixin_table(attribute_name, methods)

    names: set[str] = set()
    for value in table.values:
        names |= table.operation_names(value)
    reserved = names & {ID_ATTRIBUTE, *model.__schema__.attributes}
    if reserved:
        raise ReservedOperationName(attribute_name, reserved)

    eager.attach(model.__hooks__, spec, table)
    _record(
        model,
        Registration(
            attribute_name=attribute_name,
            strategy=Strategy.EAGER,
            operation_names=tuple(sorted(names)),
            values=tuple(str(v) for v in table.bags),
        ),
    )
    return model


def describe_behaviors(model: type[Record]) -> list[dict[str, Any]]:
    """List a record type's behavior registrations, in order."""
    return [registration.to_dict() for registration in model.__behaviors__]
