"""Tests for record schema declarations."""

from enum import Enum

import pytest
from pydantic import ValidationError

from record_mixins.host.schema import (
    AttributeSpec,
    AttributeType,
    ModelSchema,
    SchemaError,
    normalize_attribute,
)


class Role(str, Enum):
    NORMAL = "normal"
    ADMIN = "admin"


class TestAttributeSpec:
    """Tests for AttributeSpec model."""

    def test_enum_attribute(self) -> None:
        """Test declaring an ENUM attribute."""
        spec = AttributeSpec(type="enum", values=["normal", "admin"])
        assert spec.type == AttributeType.ENUM
        assert spec.values == ("normal", "admin")
        assert spec.is_enumerated

    def test_enum_values_from_enum_class(self) -> None:
        """Test that an Enum class provides the values."""
        spec = AttributeSpec(type="enum", values=Role)
        assert spec.values == ("normal", "admin")

    def test_enum_requires_values(self) -> None:
        """Test that an ENUM without values is rejected."""
        with pytest.raises(ValidationError, match="non-empty"):
            AttributeSpec(type="enum")
        with pytest.raises(ValidationError, match="non-empty"):
            AttributeSpec(type="enum", values=[])

    def test_enum_values_unique(self) -> None:
        """Test that duplicate ENUM values are rejected."""
        with pytest.raises(ValidationError, match="unique"):
            AttributeSpec(type="enum", values=["a", "a"])

    def test_values_only_for_enum(self) -> None:
        """Test that other types cannot declare values."""
        with pytest.raises(ValidationError, match="Only ENUM"):
            AttributeSpec(type="string", values=["a"])

    def test_unknown_type(self) -> None:
        """Test that an unknown type is rejected."""
        with pytest.raises(ValidationError):
            AttributeSpec(type="decimal")

    def test_spec_is_frozen(self) -> None:
        """Test that specs cannot be modified."""
        spec = AttributeSpec(type="string")
        with pytest.raises(ValidationError):
            spec.allow_null = False  # type: ignore[misc]

    # === Value checks ===

    def test_check_enum_value(self) -> None:
        """Test checking ENUM values."""
        spec = AttributeSpec(type="enum", values=["normal", "admin"])
        assert spec.check_value("role", "admin") == "admin"
        assert spec.check_value("role", Role.ADMIN) == "admin"
        with pytest.raises(SchemaError, match="Must be one of"):
            spec.check_value("role", "root")

    def test_check_types(self) -> None:
        """Test checking primitive types."""
        assert AttributeSpec(type="integer").check_value("n", 3) == 3
        assert AttributeSpec(type="float").check_value("x", 3) == 3
        assert AttributeSpec(type="boolean").check_value("b", True) is True
        with pytest.raises(SchemaError, match="expects integer"):
            AttributeSpec(type="integer").check_value("n", "3")
        with pytest.raises(SchemaError, match="got bool"):
            AttributeSpec(type="integer").check_value("n", True)

    def test_check_null(self) -> None:
        """Test null handling."""
        assert AttributeSpec(type="string").check_value("s", None) is None
        with pytest.raises(SchemaError, match="cannot be null"):
            AttributeSpec(type="string", allow_null=False).check_value("s", None)


class TestNormalizeAttribute:
    """Tests for normalize_attribute."""

    def test_from_type_name(self) -> None:
        """Test shorthand type names."""
        assert normalize_attribute("string").type == AttributeType.STRING
        assert normalize_attribute(AttributeType.INTEGER).type == AttributeType.INTEGER

    def test_from_enum_class(self) -> None:
        """Test that an Enum class becomes an ENUM attribute."""
        spec = normalize_attribute(Role)
        assert spec.type == AttributeType.ENUM
        assert spec.values == ("normal", "admin")

    def test_from_dict(self) -> None:
        """Test dict declarations."""
        spec = normalize_attribute({"type": "enum", "values": ["a", "b"]})
        assert spec.values == ("a", "b")

    def test_spec_passes_through(self) -> None:
        """Test that specs are returned unchanged."""
        spec = AttributeSpec(type="string")
        assert normalize_attribute(spec) is spec

    def test_invalid_declarations(self) -> None:
        """Test that invalid declarations raise SchemaError."""
        with pytest.raises(SchemaError):
            normalize_attribute("decimal")
        with pytest.raises(SchemaError):
            normalize_attribute({"type": "enum"})
        with pytest.raises(SchemaError, match="Unsupported"):
            normalize_attribute(42)


class TestModelSchema:
    """Tests for ModelSchema."""

    @pytest.fixture
    def schema(self) -> ModelSchema:
        return ModelSchema(
            "user",
            {
                "name": {"type": "string", "allow_null": False, "default": "anon"},
                "role": {"type": "enum", "values": ["normal", "admin"]},
                "score": "integer",
            },
        )

    def test_discriminant_queries(self, schema: ModelSchema) -> None:
        """Test has_attribute and value_domain."""
        assert schema.has_attribute("role")
        assert not schema.has_attribute("age")
        assert schema.value_domain("role") == ("normal", "admin")
        assert schema.value_domain("name") is None
        assert schema.value_domain("age") is None

    def test_get_attribute(self, schema: ModelSchema) -> None:
        """Test looking up attribute specs by name."""
        spec = schema.get_attribute("score")
        assert spec is not None
        assert spec.type == AttributeType.INTEGER
        assert schema.get_attribute("age") is None

    def test_attributes_read_only(self, schema: ModelSchema) -> None:
        """Test that the attribute mapping cannot be changed."""
        with pytest.raises(TypeError):
            schema.attributes["age"] = AttributeSpec(type="string")  # type: ignore[index]

    def test_coerce_fills_defaults(self, schema: ModelSchema) -> None:
        """Test that coerce returns every attribute in declaration order."""
        values = schema.coerce({"role": "admin"})
        assert values == {"name": "anon", "role": "admin", "score": None}
        assert list(values) == ["name", "role", "score"]

    def test_coerce_rejects_unknown(self, schema: ModelSchema) -> None:
        """Test that undeclared attributes are rejected."""
        with pytest.raises(SchemaError, match="Unknown attributes"):
            schema.coerce({"age": "old"})

    def test_coerce_rejects_bad_values(self, schema: ModelSchema) -> None:
        """Test that invalid values are rejected."""
        with pytest.raises(SchemaError):
            schema.coerce({"role": "root"})
        with pytest.raises(SchemaError):
            schema.coerce({"name": None})

    def test_invalid_attribute_name(self) -> None:
        """Test that attribute names must be public identifiers."""
        with pytest.raises(SchemaError):
            ModelSchema("user", {"not valid": "string"})
        with pytest.raises(SchemaError):
            ModelSchema("user", {"_private": "string"})

    def test_invalid_declaration_names_attribute(self) -> None:
        """Test that declaration errors mention the attribute."""
        with pytest.raises(SchemaError, match="user.role"):
            ModelSchema("user", {"role": {"type": "enum"}})
