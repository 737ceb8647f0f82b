"""ZObjectTable: the flat row table holding the ZObject of one editing session.

The table owns its rows; there is no module-level state.  Lookups that miss
return None (or an empty list) and mutations addressed to a missing row do
nothing.

Row ids are allocated from ``next_id()``, which reads the highest live id at
the moment of insertion.  Every inserting method reads it once and threads
the last used id forward itself, so callers never carry ids between calls.

Example::

    table = ZObjectTable.from_json({"Z1K1": "Z11", "Z11K1": "Z1002", "Z11K2": "hi"})
    row = table.get_row_by_key_path(["Z11K2", "Z6K1"])
    table.set_value_by_row_id(row.id, "hello")
    table.to_json()["Z11K2"]   # {"Z1K1": "Z6", "Z6K1": "hello"}
"""

from __future__ import annotations

import dataclasses
import logging
import re
from collections.abc import Iterable, Iterator, Sequence
from typing import Any

from zobject_table.constants import Z_STRING_VALUE
from zobject_table.tree.flattener import TableFlattener
from zobject_table.tree.reconstructor import TableReconstructor
from zobject_table.tree.row import Row, RowValue

__all__ = ["ZObjectTable"]

logger = logging.getLogger(__name__)

# Stateless, safe to share across all tables
_flattener = TableFlattener()
_reconstructor = TableReconstructor()


def _key_index(row: Row) -> int:
    return int(row.key) if row.key is not None and row.key.isdigit() else -1


class ZObjectTable:
    """Ordered collection of rows for one ZObject (or several detached ones).

    Args:
        rows: Initial rows.  Defaults to an empty table.
    """

    def __init__(self, rows: Iterable[Row] | None = None) -> None:
        self._rows: list[Row] = list(rows) if rows is not None else []

    @classmethod
    def from_json(cls, zobject: Any) -> ZObjectTable:
        """Build a table holding ``zobject`` rooted at row id 0."""
        return cls(_flattener.flatten(zobject))

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    @property
    def rows(self) -> list[Row]:
        """The rows, in insertion order.  The list is a copy; rows are not."""
        return list(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self._rows)

    def get_row_by_id(self, row_id: int | None) -> Row | None:
        if row_id is None:
            return None
        return next((row for row in self._rows if row.id == row_id), None)

    def get_row_index_by_id(self, row_id: int | None) -> int | None:
        for index, row in enumerate(self._rows):
            if row.id == row_id:
                return index
        return None

    def get_children_by_parent_row_id(self, row_id: int | None) -> list[Row]:
        return [row for row in self._rows if row.parent == row_id]

    def get_parent_row_id(self, row_id: int | None) -> int | None:
        row = self.get_row_by_id(row_id)
        return row.parent if row is not None else None

    def get_key_by_row_id(self, row_id: int | None) -> str | None:
        row = self.get_row_by_id(row_id)
        return row.key if row is not None else None

    def get_value_by_row_id(self, row_id: int | None) -> str | None:
        """Terminal value of a row; None for container or missing rows."""
        row = self.get_row_by_id(row_id)
        if row is not None and row.is_terminal():
            return row.value  # type: ignore[return-value]
        return None

    def get_depth_by_row_id(self, row_id: int | None) -> int:
        """Number of ancestors between ``row_id`` and its root (0 for a root)."""
        depth = 0
        row = self.get_row_by_id(row_id)
        while row is not None and row.parent is not None:
            depth += 1
            row = self.get_row_by_id(row.parent)
        return depth

    def get_row_by_key_path(
        self, path: Sequence[str] = (), row_id: int | None = 0
    ) -> Row | None:
        """Follow ``path`` of keys down from ``row_id`` and return the row reached."""
        row = self.get_row_by_id(row_id)
        for key in path:
            if row is None:
                return None
            row = next(
                (
                    child
                    for child in self.get_children_by_parent_row_id(row.id)
                    if child.key == key
                ),
                None,
            )
        return row

    def get_terminal_value(self, row_id: int | None, terminal_key: str) -> str | None:
        """Terminal value of a string or reference, however deeply it is nested.

        ``get_terminal_value(row_id, "Z9K1")`` returns ``"value"`` for rows
        holding ``{"Z9K1": {"Z9K1": "value"}}``, ``{"Z9K1": "value"}`` or
        ``"value"``.
        """
        row = self.get_row_by_id(row_id)
        while row is not None and not row.is_terminal():
            row = self.get_row_by_key_path([terminal_key], row.id)
        if row is None:
            return None
        return row.value  # type: ignore[return-value]

    def get_typed_list_item_row_ids(self, row_id: int | None) -> list[int]:
        """Row ids of the items of a list, in key order, without the item type."""
        children = sorted(self.get_children_by_parent_row_id(row_id), key=_key_index)
        return [row.id for row in children[1:]]

    def get_next_array_index(self, row_id: int | None) -> int:
        return len(self.get_children_by_parent_row_id(row_id))

    def next_id(self) -> int:
        """First free row id: one past the highest live id, or 0 when empty."""
        if not self._rows:
            return 0
        return max(row.id for row in self._rows) + 1

    def get_next_key(self, zid: str) -> str:
        """Next unused key of ``zid``: ``Z408K3`` when ``Z408K1`` and ``Z408K2`` exist."""
        key_re = re.compile(rf"^{re.escape(zid)}K([0-9]+)$")
        last = 0
        for row in self._rows:
            if row.is_terminal():
                match = key_re.match(row.value)  # type: ignore[arg-type]
                if match:
                    last = max(last, int(match.group(1)))
        return f"{zid}K{last + 1}"

    def copy(self) -> ZObjectTable:
        """Return an independent table with copies of every row."""
        return ZObjectTable(dataclasses.replace(row) for row in self._rows)

    # ------------------------------------------------------------------
    # Atomic mutations
    # ------------------------------------------------------------------

    def set_rows(self, rows: Iterable[Row]) -> None:
        self._rows = list(rows)

    def push_row(self, row: Row) -> None:
        """Append a row whose id, key and parent are already final."""
        self._rows.append(row)

    def set_value_by_row_index(self, index: int, value: str | RowValue) -> None:
        self._rows[index].value = value

    def set_key_by_row_index(self, index: int, key: str | None) -> None:
        self._rows[index].key = key

    def set_value_by_row_id(self, row_id: int | None, value: str | RowValue) -> None:
        index = self.get_row_index_by_id(row_id)
        if index is not None:
            self.set_value_by_row_index(index, value)

    def remove_row(self, row_id: int | None) -> None:
        """Remove one row.  Its children are left in place."""
        index = self.get_row_index_by_id(row_id)
        if index is not None:
            del self._rows[index]

    def remove_row_children(self, row_id: int | None, remove_parent: bool = False) -> None:
        """Remove every descendant of ``row_id``, and the row itself if asked."""
        if row_id is None:
            return
        for child in self.get_children_by_parent_row_id(row_id):
            self.remove_row_children(child.id, remove_parent=True)
        if remove_parent:
            self.remove_row(row_id)

    # ------------------------------------------------------------------
    # List editing
    # ------------------------------------------------------------------

    def recalculate_list_keys(self, list_row_id: int | None) -> None:
        """Renumber the children of a list as ``"0".."n-1"``, keeping their order."""
        children = sorted(self.get_children_by_parent_row_id(list_row_id), key=_key_index)
        for index, child in enumerate(children):
            child.key = str(index)

    def recalculate_keys(self, list_row_id: int | None, key: str, zid: str) -> None:
        """Renumber the key ids of an argument or key list as ``<zid>K1..Kn``.

        Each item (skipping the item type) holds its key id as a string under
        ``key``, e.g. ``Z17K2`` for argument declarations.  Items without one
        are skipped but still counted.
        """
        items = sorted(self.get_children_by_parent_row_id(list_row_id), key=_key_index)
        for index, item in enumerate(items[1:], start=1):
            key_row = self.get_row_by_key_path([key, Z_STRING_VALUE], item.id)
            if key_row is not None:
                key_row.value = f"{zid}K{index}"

    def remove_item_from_list(self, row_id: int) -> None:
        row = self.get_row_by_id(row_id)
        if row is None:
            return
        self.remove_row_children(row_id, remove_parent=True)
        self.recalculate_list_keys(row.parent)
        logger.debug("Removed list item %d from list %s", row_id, row.parent)

    def remove_items_from_list(self, parent_row_id: int, item_row_ids: Iterable[int]) -> None:
        for item_row_id in item_row_ids:
            self.remove_row_children(item_row_id, remove_parent=True)
        self.recalculate_list_keys(parent_row_id)

    def move_item_in_list(self, parent_row_id: int, key: str, offset: int) -> None:
        """Swap the item at ``key`` with the one ``offset`` positions away."""
        if not key.isdigit():
            return
        items = self.get_children_by_parent_row_id(parent_row_id)
        new_key = str(int(key) + offset)
        moved = next((row for row in items if row.key == key), None)
        displaced = next((row for row in items if row.key == new_key), None)
        if moved is None or displaced is None:
            return
        moved.key = new_key
        displaced.key = key

    # ------------------------------------------------------------------
    # Insertion
    # ------------------------------------------------------------------

    def inject_value(
        self, row_id: int | None, value: Any, append: bool = False
    ) -> list[Row]:
        """Flatten ``value`` into the table under ``row_id``.

        With a parent row, its current children are removed first (unless
        ``append``, which adds ``value`` as a new item of the parent list) and
        its container marker is updated.  Without a parent row, ``value`` is
        inserted as a new detached root.

        Args:
            row_id: Parent row id, or None to insert a new root.
            value:  ZObject to insert, canonical or hybrid.
            append: Add ``value`` as the next item of the parent list.

        Returns:
            The rows added to the table.  Empty when ``row_id`` is missing.

        Raises:
            PreconditionError: If ``append`` is set and the parent is not a list.
        """
        if row_id is None:
            rows = _flattener.flatten(value, starting_id=self.next_id())
            self._rows.extend(rows)
            logger.debug("Inserted root %d with %d rows", rows[0].id, len(rows))
            return rows

        parent_row = self.get_row_by_id(row_id)
        if parent_row is None:
            logger.warning("Cannot inject value under missing row %d", row_id)
            return []

        if append:
            rows = _flattener.flatten(
                value,
                parent_row,
                self.next_id(),
                append_to_list=True,
                append_from_index=self.get_next_array_index(row_id),
            )
        else:
            rows = _flattener.flatten(value, parent_row, self.next_id())

        restated_parent = rows.pop(0)
        self.set_value_by_row_id(restated_parent.id, restated_parent.value)
        if not append:
            self.remove_row_children(restated_parent.id)

        self._rows.extend(rows)
        logger.debug("Inserted %d rows under row %d", len(rows), row_id)
        return rows

    def inject_key_value(self, row_id: int, key: str, value: Any) -> list[Row]:
        """Add ``key: value`` to the object at ``row_id``; the key must be new."""
        parent_row = self.get_row_by_id(row_id)
        if parent_row is None:
            logger.warning("Cannot inject key %s under missing row %d", key, row_id)
            return []
        rows = _flattener.flatten(
            {key: value}, parent_row, self.next_id(), return_parent=False
        )
        self._rows.extend(rows)
        return rows

    def push_values_to_list(self, row_id: int, values: Iterable[Any]) -> list[Row]:
        """Append each of ``values`` as a new item of the list at ``row_id``."""
        parent_row = self.get_row_by_id(row_id)
        if parent_row is None or not parent_row.is_array():
            return []

        added: list[Row] = []
        next_id = self.next_id()
        for value in values:
            rows = _flattener.flatten(
                value,
                parent_row,
                next_id,
                append_to_list=True,
                append_from_index=self.get_next_array_index(row_id),
                return_parent=False,
            )
            self._rows.extend(rows)
            added.extend(rows)
            next_id = rows[-1].id + 1
        return added

    def set_value_by_key_path(
        self,
        row_id: int,
        key_path: Sequence[str],
        value: Any,
        append: bool = False,
    ) -> list[Row]:
        """Set the value found by following ``key_path`` down from ``row_id``.

        A string replaces the terminal value in place; anything else is
        injected under the row found.

        Returns:
            The rows added to the table, empty for in-place and missed updates.
        """
        row = self.get_row_by_key_path(key_path, row_id)
        if row is None:
            return []
        if isinstance(value, str):
            self.set_value_by_row_id(row.id, value)
            return []
        return self.inject_value(row.id, value, append=append)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def to_json(self, row_id: int | None = 0, is_array: bool | None = None) -> Any:
        """Rebuild the value under ``row_id``.

        ``is_array`` defaults to whether the row at ``row_id`` is a list.
        """
        if is_array is None:
            row = self.get_row_by_id(row_id)
            is_array = row is not None and row.is_array()
        return _reconstructor.reconstruct(self._rows, row_id, is_array)
