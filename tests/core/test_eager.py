"""Tests for eager application of mixin bags."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from record_mixins.core.eager import EagerApplier, attach
from record_mixins.core.errors import IncompleteCoverage, MissingMixinEntry, NotEnumerated
from record_mixins.core.spec import DiscriminantSpec
from record_mixins.core.table import build_mixin_table
from record_mixins.core.validation import TableValidator


def admin_a() -> None:
    pass


def admin_b() -> None:
    pass


def normal_a() -> None:
    pass


def normal_b() -> None:
    pass


@pytest.fixture
def table():
    return build_mixin_table(
        "role",
        {
            "admin": {"method_a": admin_a, "method_b": admin_b},
            "normal": {"method_a": normal_a, "method_b": normal_b},
        },
    )


@pytest.fixture
def spec() -> DiscriminantSpec:
    return DiscriminantSpec("role", frozenset({"admin", "normal"}))


class TestEagerApplier:
    """Tests for EagerApplier."""

    def test_apply_copies_bag(self, table) -> None:
        """Test that the bag is copied onto the instance."""
        instance = SimpleNamespace(role="admin")
        EagerApplier(table).apply(instance)
        assert instance.method_a is admin_a
        assert instance.method_b is admin_b
        assert "method_a" in vars(instance)

    def test_apply_overwrites_existing(self, table) -> None:
        """Test that existing attributes of the same name are replaced."""
        instance = SimpleNamespace(role="normal", method_a="old")
        EagerApplier(table).apply(instance)
        assert instance.method_a is normal_a

    def test_snapshot_semantics(self, table) -> None:
        """Test that changing the discriminant later keeps the copied bag."""
        instance = SimpleNamespace(role="admin")
        EagerApplier(table).apply(instance)
        instance.role = "normal"
        assert instance.method_a is admin_a

    def test_none_discriminant_untouched(self, table) -> None:
        """Test that an unset discriminant applies nothing."""
        instance = SimpleNamespace(role=None)
        EagerApplier(table).apply(instance)
        assert not hasattr(instance, "method_a")

    def test_unknown_value_is_invariant_violation(self, table) -> None:
        """Test that a value outside the table raises MissingMixinEntry."""
        with pytest.raises(MissingMixinEntry) as exc_info:
            EagerApplier(table).apply(SimpleNamespace(role="ghost"))
        assert exc_info.value.value == "ghost"

    def test_unhashable_value_is_invariant_violation(self, table) -> None:
        """Test that an unhashable value raises MissingMixinEntry."""
        with pytest.raises(MissingMixinEntry):
            EagerApplier(table).apply(SimpleNamespace(role=["admin"]))

    def test_call_with_single_instance(self, table) -> None:
        """Test calling with one instance."""
        instance = SimpleNamespace(role="normal")
        EagerApplier(table)(instance)
        assert instance.method_b is normal_b

    def test_call_with_batch(self, table) -> None:
        """Test calling with a batch applies to each member independently."""
        batch = [SimpleNamespace(role="admin"), SimpleNamespace(role="normal")]
        EagerApplier(table)(batch)
        assert batch[0].method_a is admin_a
        assert batch[1].method_a is normal_a

    def test_repr(self, table) -> None:
        """Test the applier representation."""
        assert "admin, normal" in repr(EagerApplier(table))


class TestAttach:
    """Tests for registering an applier with lifecycle hooks."""

    def test_registers_both_hooks(self, table, spec: DiscriminantSpec) -> None:
        """Test that the applier is registered before create and after find."""
        hooks = MagicMock()
        applier = attach(hooks, spec, table)
        hooks.add_before_create.assert_called_once_with(applier)
        hooks.add_after_find.assert_called_once_with(applier)

    def test_validation_failure_registers_nothing(self, spec: DiscriminantSpec) -> None:
        """Test that a failing table never reaches the hooks."""
        hooks = MagicMock()
        table = build_mixin_table("role", {"admin": {"method_a": admin_a}})
        with pytest.raises(IncompleteCoverage):
            attach(hooks, spec, table)
        hooks.add_before_create.assert_not_called()
        hooks.add_after_find.assert_not_called()

    def test_not_enumerated(self, table) -> None:
        """Test that an open-ended spec is rejected."""
        hooks = MagicMock()
        with pytest.raises(NotEnumerated):
            attach(hooks, DiscriminantSpec("role"), table)
        hooks.add_before_create.assert_not_called()

    def test_custom_validator(self, table, spec: DiscriminantSpec) -> None:
        """Test that a supplied validator is used."""
        hooks = MagicMock()
        validator = MagicMock(spec=TableValidator)
        attach(hooks, spec, table, validator=validator)
        validator.validate.assert_called_once_with(spec, table)
