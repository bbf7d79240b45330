"""Host collaborators for record types.

This module contains:
- Attribute declarations and the record schema
- Lifecycle hook registry
- Record base type and model definition
- pandas-backed record store
"""

from record_mixins.host.hooks import HookRegistry
from record_mixins.host.model import Record, define_model
from record_mixins.host.schema import (
    AttributeSpec,
    AttributeType,
    ModelSchema,
    SchemaError,
    normalize_attribute,
)
from record_mixins.host.store import RecordStore, StoreError, get_default_store

__all__ = [
    "AttributeSpec",
    "AttributeType",
    "HookRegistry",
    "ModelSchema",
    "Record",
    "RecordStore",
    "SchemaError",
    "StoreError",
    "define_model",
    "get_default_store",
    "normalize_attribute",
]
