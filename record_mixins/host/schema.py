"""Record schema declarations.

This module provides the schema collaborator used by record types:
attribute declarations (validated with pydantic), value coercion for record
construction, and the discriminant queries the dispatch engine relies on
(``has_attribute`` and ``value_domain``).

Example:
    >>> schema = ModelSchema("user", {
    ...     "name": "string",
    ...     "role": {"type": "enum", "values": ["normal", "admin"]},
    ... })
    >>> schema.value_domain("role")
    ('normal', 'admin')
    >>> schema.value_domain("name") is None
    True
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class SchemaError(ValueError):
    """Invalid attribute declaration or record value."""


class AttributeType(str, Enum):
    """Value types an attribute can be declared with."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    ENUM = "enum"  # finite set of string values

    @classmethod
    def python_types(cls, attr_type: AttributeType) -> tuple[type, ...]:
        """Python types accepted for values of an attribute type."""
        return {
            cls.STRING: (str,),
            cls.INTEGER: (int,),
            cls.FLOAT: (int, float),
            cls.BOOLEAN: (bool,),
            cls.ENUM: (str, Enum),
        }[attr_type]


class AttributeSpec(BaseModel):
    """Declaration of a single record attribute.

    Attributes:
        type: Value type of the attribute
        values: Allowed values (ENUM only)
        allow_null: Whether None is an accepted value
        default: Value used when a record is built without this attribute
    """

    model_config = ConfigDict(frozen=True, use_enum_values=False)

    type: AttributeType = Field(..., description="Attribute value type")
    values: tuple[str, ...] | None = Field(
        default=None, description="Allowed values for ENUM attributes"
    )
    allow_null: bool = Field(default=True, description="Accept None values")
    default: Any = Field(default=None, description="Default value")

    @field_validator("values", mode="before")
    @classmethod
    def normalize_values(cls, v: Any) -> Any:
        """Accept Enum classes and Enum members as value lists."""
        if isinstance(v, type) and issubclass(v, Enum):
            return tuple(member.value for member in v)
        if v is not None and not isinstance(v, str):
            return tuple(item.value if isinstance(item, Enum) else item for item in v)
        return v

    @model_validator(mode="after")
    def validate_values_for_type(self) -> Self:
        """Validate that only ENUM attributes declare values."""
        if self.type == AttributeType.ENUM:
            if not self.values:
                raise ValueError("ENUM attribute requires a non-empty list of values")
            if len(set(self.values)) != len(self.values):
                raise ValueError(f"ENUM values must be unique, got: {list(self.values)}")
        elif self.values is not None:
            raise ValueError(
                f"Only ENUM attributes may declare values, got type '{self.type.value}'"
            )
        return self

    @property
    def is_enumerated(self) -> bool:
        """Check if the attribute has a finite value domain."""
        return self.type == AttributeType.ENUM

    def check_value(self, name: str, value: Any) -> Any:
        """Validate a value for this attribute.

        Args:
            name: Attribute name (for error messages)
            value: Candidate value

        Returns:
            The value, with Enum members normalized for ENUM attributes

        Raises:
            SchemaError: If the value is not acceptable
        """
        if value is None:
            if not self.allow_null:
                raise SchemaError(f"Attribute '{name}' cannot be null")
            return None

        # bool is an int subclass; keep the two apart
        if isinstance(value, bool) and self.type in (AttributeType.INTEGER, AttributeType.FLOAT):
            raise SchemaError(f"Attribute '{name}' expects {self.type.value}, got bool")
        if not isinstance(value, AttributeType.python_types(self.type)):
            raise SchemaError(
                f"Attribute '{name}' expects {self.type.value}, "
                f"got {type(value).__name__}: {value!r}"
            )

        if self.type == AttributeType.ENUM:
            if isinstance(value, Enum):
                value = value.value
            if value not in (self.values or ()):
                raise SchemaError(
                    f"Invalid value {value!r} for '{name}'. "
                    f"Must be one of: {', '.join(self.values or ())}"
                )
        return value


def normalize_attribute(declaration: Any) -> AttributeSpec:
    """Build an AttributeSpec from a shorthand declaration.

    Accepts an AttributeSpec, an AttributeType, a type name ("string"), an
    Enum class (becomes an ENUM over its values), or a dict of spec fields.

    Raises:
        SchemaError: If the declaration is not valid
    """
    if isinstance(declaration, AttributeSpec):
        return declaration
    try:
        if isinstance(declaration, type) and issubclass(declaration, Enum):
            return AttributeSpec(type=AttributeType.ENUM, values=declaration)
        if isinstance(declaration, (AttributeType, str)):
            return AttributeSpec(type=AttributeType(declaration))
        if isinstance(declaration, Mapping):
            return AttributeSpec.model_validate(dict(declaration))
    except ValueError as e:
        raise SchemaError(f"Invalid attribute declaration {declaration!r}: {e}") from e
    raise SchemaError(f"Unsupported attribute declaration: {declaration!r}")


class ModelSchema:
    """Attribute declarations of a record type.

    Implements the discriminant queries used by the dispatch engine.
    """

    def __init__(self, name: str, attributes: Mapping[str, Any] | None = None) -> None:
        self.name = name
        specs: dict[str, AttributeSpec] = {}
        for attr_name, declaration in (attributes or {}).items():
            if not attr_name.isidentifier() or attr_name.startswith("_"):
                raise SchemaError(f"Invalid attribute name: {attr_name!r}")
            try:
                specs[attr_name] = normalize_attribute(declaration)
            except SchemaError as e:
                raise SchemaError(f"{name}.{attr_name}: {e}") from e
        self._attributes = MappingProxyType(specs)

    @property
    def attributes(self) -> Mapping[str, AttributeSpec]:
        """Read-only mapping of attribute name -> spec."""
        return self._attributes

    def get_attribute(self, name: str) -> AttributeSpec | None:
        """Get the spec of an attribute, or None if undeclared."""
        return self._attributes.get(name)

    def has_attribute(self, name: str) -> bool:
        """Check if an attribute is declared."""
        return name in self._attributes

    def value_domain(self, name: str) -> tuple[str, ...] | None:
        """Allowed values of an ENUM attribute, None for other attributes."""
        spec = self.get_attribute(name)
        if spec is None or not spec.is_enumerated:
            return None
        return spec.values

    def coerce(self, values: Mapping[str, Any]) -> dict[str, Any]:
        """Validate record values and fill in defaults.

        Args:
            values: Attribute values supplied for a record

        Returns:
            Dict with one entry per declared attribute, in declaration order

        Raises:
            SchemaError: For unknown attributes or invalid values
        """
        unknown = set(values) - set(self._attributes)
        if unknown:
            raise SchemaError(
                f"Unknown attributes for '{self.name}': {', '.join(sorted(unknown))}"
            )
        return {
            name: spec.check_value(name, values.get(name, spec.default))
            for name, spec in self._attributes.items()
        }

    def __repr__(self) -> str:
        return f"ModelSchema({self.name!r}, attributes={list(self._attributes)})"
