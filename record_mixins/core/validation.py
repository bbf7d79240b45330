"""Mixin table validation.

Checks an eager MixinTable against the declared domain of its discriminant
attribute before the table may be registered:
- the attribute exists in the schema
- the attribute is an enumeration
- every allowed value has a bag (extra values are tolerated)
- every bag declares the same operation names

The validator is pure: the same spec and table always give the same result.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from record_mixins.core.errors import (
    AttributeNotFound,
    DispatchError,
    IncompleteCoverage,
    InconsistentMethods,
    NotEnumerated,
)
from record_mixins.core.spec import DiscriminantSpec
from record_mixins.core.table import MixinTable


@dataclass(frozen=True)
class TableCheck:
    """Outcome of checking a mixin table.

    Attributes:
        attribute_name: Discriminant attribute the table is keyed by
        error: The failure found, or None if the table is valid
    """

    attribute_name: str
    error: DispatchError | None = None

    @property
    def ok(self) -> bool:
        """Check if the table passed validation."""
        return self.error is None

    def raise_for_error(self) -> None:
        """Raise the recorded failure, if any."""
        if self.error is not None:
            raise self.error

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "attribute_name": self.attribute_name,
            "ok": self.ok,
            "error": type(self.error).__name__ if self.error else None,
            "message": str(self.error) if self.error else None,
        }


class TableValidator:
    """Validates eager mixin tables for completeness and consistency.

    Example:
        >>> spec = DiscriminantSpec("role", frozenset({"admin", "normal"}))
        >>> table = build_mixin_table("role", {"admin": {"m1": print}})
        >>> TableValidator().check(spec, table).ok
        False
    """

    def check(self, spec: DiscriminantSpec | None, table: MixinTable) -> TableCheck:
        """Check a table against a discriminant spec.

        Args:
            spec: Spec read from the schema, or None if it could not be read
            table: Mixin table to check

        Returns:
            TableCheck holding the first failure found, if any
        """
        name = spec.attribute_name if spec is not None else table.attribute_name

        if spec is None:
            return TableCheck(name, AttributeNotFound(name))

        if spec.allowed_values is None:
            return TableCheck(name, NotEnumerated(name))

        missing = spec.allowed_values - table.values
        if missing:
            return TableCheck(name, IncompleteCoverage(name, missing))

        mismatched = self._mismatched_names(table)
        if mismatched:
            return TableCheck(name, InconsistentMethods(name, mismatched))

        return TableCheck(name)

    def validate(self, spec: DiscriminantSpec | None, table: MixinTable) -> None:
        """Validate a table, raising the failure found.

        Raises:
            AttributeNotFound: If the spec could not be read
            NotEnumerated: If the attribute has no finite value domain
            IncompleteCoverage: If allowed values are missing from the table
            InconsistentMethods: If bags declare different operation names
        """
        self.check(spec, table).raise_for_error()

    @staticmethod
    def _mismatched_names(table: MixinTable) -> frozenset[str]:
        name_sets = [table.operation_names(value) for value in table.values]
        if not name_sets:
            return frozenset()
        union = frozenset().union(*name_sets)
        common = frozenset.intersection(*name_sets)
        return union - common


_default_validator = TableValidator()


def validate_table(spec: DiscriminantSpec | None, table: MixinTable) -> None:
    """Validate a mixin table with the shared validator."""
    _default_validator.validate(spec, table)
