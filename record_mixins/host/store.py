"""In-memory record store backed by pandas.

This module provides the persistence layer record types are bound to. It
handles:
- Table creation and reset (sync)
- Row insertion and update with sequential ids
- Filtered, ordered, limited selection

Example:
    >>> from record_mixins.host.store import RecordStore
    >>> store = RecordStore()
    >>> User = store.define("user", {
    ...     "role": {"type": "enum", "values": ["normal", "admin"]},
    ... })
    >>> User.sync(force=True)
    >>> User.create(role="admin").id
    1
    >>> [u.role for u in User.find_all()]
    ['admin']
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

import pandas as pd

if TYPE_CHECKING:
    from record_mixins.host.model import Record

logger = logging.getLogger(__name__)

ID_COLUMN = "id"


class StoreError(RuntimeError):
    """Store operation on a missing table or row."""


def _to_python(value: Any) -> Any:
    """Map pandas missing values to None."""
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        # Non-scalar values are never missing markers
        pass
    return value


class RecordStore:
    """Holds one DataFrame per table.

    Attributes:
        name: Store name, used in log messages
    """

    def __init__(self, name: str = "default") -> None:
        self.name = name
        self._frames: dict[str, pd.DataFrame] = {}
        self._next_id: dict[str, int] = {}

    def define(self, name: str, attributes: Mapping[str, Any] | None = None) -> type[Record]:
        """Define a record type bound to this store.

        Args:
            name: Table name of the record type
            attributes: Attribute declarations (see ModelSchema)

        Returns:
            A new Record subclass
        """
        from record_mixins.host.model import define_model

        return define_model(name, attributes, store=self)

    @property
    def tables(self) -> list[str]:
        """Names of synced tables."""
        return list(self._frames)

    def has_table(self, table: str) -> bool:
        """Check if a table has been synced."""
        return table in self._frames

    def sync(self, table: str, columns: Sequence[str], force: bool = False) -> None:
        """Create a table, or reset it when force is set.

        Args:
            table: Table name
            columns: Attribute columns (the id column is added)
            force: Drop existing rows
        """
        if table in self._frames and not force:
            return
        all_columns = [ID_COLUMN, *columns]
        self._frames[table] = pd.DataFrame(
            {col: pd.Series(dtype=object) for col in all_columns}
        )
        self._next_id[table] = 1
        logger.info(f"Synced table '{table}' in store '{self.name}' (force={force})")

    def drop(self, table: str) -> None:
        """Remove a table and its rows."""
        self._frames.pop(table, None)
        self._next_id.pop(table, None)

    def _frame(self, table: str) -> pd.DataFrame:
        if table not in self._frames:
            raise StoreError(
                f"Table '{table}' does not exist in store '{self.name}'. "
                f"Call sync() first."
            )
        return self._frames[table]

    def insert(self, table: str, row: Mapping[str, Any]) -> int:
        """Insert a row and return its id."""
        frame = self._frame(table)
        row_id = self._next_id[table]
        record = {col: row.get(col) for col in frame.columns if col != ID_COLUMN}
        record[ID_COLUMN] = row_id

        new_row = pd.DataFrame([record], columns=frame.columns, dtype=object)
        if frame.empty:
            self._frames[table] = new_row
        else:
            self._frames[table] = pd.concat([frame, new_row], ignore_index=True)
        self._next_id[table] = row_id + 1
        return row_id

    def update(self, table: str, row_id: int, row: Mapping[str, Any]) -> None:
        """Overwrite the stored values of an existing row."""
        frame = self._frame(table)
        matches = frame.index[frame[ID_COLUMN] == row_id]
        if len(matches) == 0:
            raise StoreError(f"Row {row_id} not found in table '{table}'")
        for col, value in row.items():
            if col in frame.columns and col != ID_COLUMN:
                frame.at[matches[0], col] = value

    def select(
        self,
        table: str,
        where: Mapping[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Select rows as plain dicts.

        Args:
            table: Table name
            where: Equality filters (column -> value)
            order_by: Column to sort by (stable sort)
            descending: Sort descending if True
            limit: Maximum number of rows

        Returns:
            List of row dicts, missing values mapped to None
        """
        df = self._frame(table)

        for col, value in (where or {}).items():
            if col not in df.columns:
                raise StoreError(f"Unknown column '{col}' in table '{table}'")
            if value is None:
                df = df[df[col].isna()]
            else:
                df = df[df[col] == value]

        if order_by is not None:
            if order_by not in df.columns:
                raise StoreError(f"Unknown column '{order_by}' in table '{table}'")
            df = df.sort_values(order_by, ascending=not descending, kind="stable")

        if limit is not None:
            df = df.head(limit)

        return [
            {col: _to_python(value) for col, value in row.items()}
            for row in df.to_dict(orient="records")
        ]

    def count(self, table: str) -> int:
        """Number of rows in a table."""
        return len(self._frame(table))


# Default store used by define_model() when none is given
default_store = RecordStore()


def get_default_store() -> RecordStore:
    """Get the process-wide default store."""
    return default_store
