"""Tests for the lifecycle hook registry."""

from unittest.mock import MagicMock, call

from record_mixins.host.hooks import HookRegistry


class TestHookRegistry:
    """Tests for HookRegistry."""

    def test_empty_registry(self) -> None:
        """Test a registry with no callbacks."""
        hooks = HookRegistry()
        assert len(hooks) == 0
        hooks.run_before_create(object())
        hooks.run_after_find([object()])

    def test_before_create_runs_in_order(self) -> None:
        """Test that before-create callbacks run in registration order."""
        hooks = HookRegistry()
        parent = MagicMock()
        hooks.add_before_create(parent.first)
        hooks.add_before_create(parent.second)

        instance = object()
        hooks.run_before_create(instance)

        assert parent.mock_calls == [call.first(instance), call.second(instance)]

    def test_after_find_receives_batch(self) -> None:
        """Test that after-find callbacks receive the whole batch once."""
        hooks = HookRegistry()
        callback = MagicMock()
        hooks.add_after_find(callback)

        batch = [object(), object()]
        hooks.run_after_find(batch)

        callback.assert_called_once_with(batch)

    def test_after_find_skips_empty_batch(self) -> None:
        """Test that an empty result runs no callbacks."""
        hooks = HookRegistry()
        callback = MagicMock()
        hooks.add_after_find(callback)
        hooks.run_after_find([])
        callback.assert_not_called()

    def test_registered_callbacks(self) -> None:
        """Test reading back registered callbacks."""
        hooks = HookRegistry()
        a, b = MagicMock(), MagicMock()
        hooks.add_before_create(a)
        hooks.add_after_find(b)
        assert hooks.before_create == (a,)
        assert hooks.after_find == (b,)
        assert len(hooks) == 2
