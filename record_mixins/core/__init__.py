"""Core dispatch engine for record-mixins.

This module contains:
- Discriminant spec reader
- Behavior and mixin tables
- Mixin table validation
- Lazy resolver and eager applier
"""

from record_mixins.core.eager import EagerApplier, LifecycleHooks
from record_mixins.core.errors import (
    AttributeNotFound,
    DispatchError,
    IncompleteCoverage,
    InconsistentMethods,
    MissingMixinEntry,
    NotEnumerated,
    ReservedOperationName,
    UnresolvedBehavior,
)
from record_mixins.core.lazy import LazyResolver
from record_mixins.core.spec import DiscriminantSource, DiscriminantSpec, read_spec
from record_mixins.core.table import (
    BehaviorTable,
    MixinTable,
    build_mixin_table,
    build_table,
    discriminant_key,
)
from record_mixins.core.validation import TableCheck, TableValidator, validate_table

__all__ = [
    # Errors
    "AttributeNotFound",
    "DispatchError",
    "IncompleteCoverage",
    "InconsistentMethods",
    "MissingMixinEntry",
    "NotEnumerated",
    "ReservedOperationName",
    "UnresolvedBehavior",
    # Specs and tables
    "DiscriminantSource",
    "DiscriminantSpec",
    "read_spec",
    "BehaviorTable",
    "MixinTable",
    "build_table",
    "build_mixin_table",
    "discriminant_key",
    # Validation
    "TableCheck",
    "TableValidator",
    "validate_table",
    # Resolution
    "EagerApplier",
    "LazyResolver",
    "LifecycleHooks",
]
