"""Record types and instances.

A record type is a Record subclass created by define_model(). Each type owns
its schema, its lifecycle hooks, its store binding and its ordered behavior
registrations; nothing is shared through the Record base class, so
registering behavior on one type never affects another.

Example:
    >>> User = define_model("user", {
    ...     "role": {"type": "enum", "values": ["normal", "admin"]},
    ... }).add_method_by("role", "describe", {"admin": lambda: "root"})
    >>> User.build(role="admin").describe()
    'root'
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any, ClassVar

from record_mixins import dispatch
from record_mixins.host.hooks import HookRegistry
from record_mixins.host.schema import ModelSchema, SchemaError
from record_mixins.host.store import ID_COLUMN, RecordStore, get_default_store

logger = logging.getLogger(__name__)


class Record:
    """Base class of all record types.

    Instances carry one attribute per declared schema attribute plus ``id``
    (None until first saved).
    """

    __tablename__: ClassVar[str]
    __schema__: ClassVar[ModelSchema]
    __hooks__: ClassVar[HookRegistry]
    __store__: ClassVar[RecordStore]
    __behaviors__: ClassVar[tuple[dispatch.Registration, ...]] = ()

    def __init__(self, **values: Any) -> None:
        if type(self) is Record:
            raise TypeError("Record types must be created with define_model()")
        self.id: int | None = None
        for name, value in self.__schema__.coerce(values).items():
            self.__dict__[name] = value

    # === Instance API ===

    def to_dict(self) -> dict[str, Any]:
        """Convert stored attribute values to a dictionary."""
        return {ID_COLUMN: self.id, **self._row()}

    def _row(self) -> dict[str, Any]:
        return {name: self.__dict__.get(name) for name in self.__schema__.attributes}

    def save(self) -> Record:
        """Persist the instance.

        Before-create hooks run only on first persistence, before the row is
        written.

        Raises:
            SchemaError: If current attribute values are invalid
            StoreError: If the table has not been synced
        """
        cls = type(self)
        store = cls.__store__
        if self.id is None:
            cls.__hooks__.run_before_create(self)
            row = cls.__schema__.coerce(self._row())
            self.id = store.insert(cls.__tablename__, row)
            logger.debug(f"Created {cls.__name__} id={self.id}")
        else:
            row = cls.__schema__.coerce(self._row())
            store.update(cls.__tablename__, self.id, row)
        return self

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in self.to_dict().items())
        return f"{type(self).__name__}({fields})"

    # === Class API ===

    @classmethod
    def build(cls, **values: Any) -> Record:
        """Build an unsaved instance (no lifecycle hooks run)."""
        return cls(**values)

    @classmethod
    def create(cls, **values: Any) -> Record:
        """Build and save an instance."""
        return cls(**values).save()

    @classmethod
    def sync(cls, force: bool = False) -> None:
        """Create the record table in the bound store."""
        cls.__store__.sync(cls.__tablename__, list(cls.__schema__.attributes), force=force)

    @classmethod
    def _from_row(cls, row: Mapping[str, Any]) -> Record:
        instance = cls(**{k: v for k, v in row.items() if k != ID_COLUMN})
        instance.id = row[ID_COLUMN]
        return instance

    @classmethod
    def find_all(
        cls,
        where: Mapping[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[Record]:
        """Load instances from the store.

        After-find hooks run once with the whole batch before returning.
        """
        rows = cls.__store__.select(
            cls.__tablename__,
            where=where,
            order_by=order_by,
            descending=descending,
            limit=limit,
        )
        instances = [cls._from_row(row) for row in rows]
        cls.__hooks__.run_after_find(instances)
        return instances

    @classmethod
    def find_one(
        cls,
        where: Mapping[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> Record | None:
        """Load the first matching instance, or None."""
        found = cls.find_all(where=where, order_by=order_by, descending=descending, limit=1)
        return found[0] if found else None

    @classmethod
    def add_method_by(
        cls,
        attribute_name: str,
        method_name: str,
        methods: Mapping[Any, Callable[..., Any]],
        default: Callable[..., Any] | None = None,
    ) -> type[Record]:
        """Register a lazily dispatched method. See dispatch.add_method_by."""
        return dispatch.add_method_by(cls, attribute_name, method_name, methods, default)

    @classmethod
    def mixin(
        cls,
        attribute_name: str,
        methods: Mapping[Any, Mapping[str, Callable[..., Any]]],
    ) -> type[Record]:
        """Register an eagerly applied mixin. See dispatch.mixin."""
        return dispatch.mixin(cls, attribute_name, methods)


def _class_name(name: str) -> str:
    return "".join(part[:1].upper() + part[1:] for part in name.split("_") if part)


def define_model(
    name: str,
    attributes: Mapping[str, Any] | None = None,
    store: RecordStore | None = None,
) -> type[Record]:
    """Create a new record type.

    Args:
        name: Table name (a Python identifier)
        attributes: Attribute declarations (see ModelSchema)
        store: Store to bind to (defaults to the process-wide store)

    Returns:
        A fresh Record subclass with its own schema, hooks and behaviors

    Raises:
        SchemaError: If the name or any declaration is invalid
    """
    if not name.isidentifier():
        raise SchemaError(f"Invalid record type name: {name!r}")
    if attributes and ID_COLUMN in attributes:
        raise SchemaError(f"Attribute name '{ID_COLUMN}' is reserved")

    namespace = {
        "__module__": __name__,
        "__tablename__": name,
        "__schema__": ModelSchema(name, attributes),
        "__hooks__": HookRegistry(),
        "__store__": store if store is not None else get_default_store(),
        "__behaviors__": (),
    }
    return type(_class_name(name) or "Record_", (Record,), namespace)
