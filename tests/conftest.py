"""Pytest configuration and fixtures for record-mixins tests."""

import pytest

from record_mixins.host.store import RecordStore


@pytest.fixture
def store() -> RecordStore:
    """Return an empty, isolated record store."""
    return RecordStore(name="test")


@pytest.fixture
def role_attributes() -> dict:
    """Return attribute declarations with a two-valued role ENUM."""
    return {
        "name": "string",
        "role": {"type": "enum", "values": ["normal", "admin"]},
    }


@pytest.fixture
def role_age_attributes() -> dict:
    """Return attribute declarations with two independent ENUMs."""
    return {
        "role": {"type": "enum", "values": ["admin", "normal"]},
        "age": {"type": "enum", "values": ["old", "young"]},
    }


@pytest.fixture
def user_model(store: RecordStore, role_attributes: dict):
    """Return a synced 'user' record type with a role ENUM."""
    User = store.define("user", role_attributes)
    User.sync(force=True)
    return User
