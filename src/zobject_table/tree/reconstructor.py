"""TableReconstructor: rebuilds a nested ZObject from the rows of a flat table.

Reconstruction starts from the children of ``root_id`` and only visits their
descendants, so one table may hold several detached trees and each can be
rebuilt on its own.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from zobject_table.tree.row import Row

__all__ = ["TableReconstructor"]

_Children = dict[int | None, list[Row]]


def _array_index(row: Row, position: int) -> int:
    """Position of an array child, from its stringified index key."""
    if row.key is not None and row.key.isdigit():
        return int(row.key)
    return position


@dataclass
class TableReconstructor:
    """Converts table rows back into a nested ZObject.

    The result is a pure function of ``(rows, root_id, root_is_array)``; the
    rows are never modified.

    Example::

        rows = TableFlattener().flatten({"Z1K1": "Z6", "Z6K1": "hi"})
        TableReconstructor().reconstruct(rows, root_id=0)
        # {"Z1K1": "Z6", "Z6K1": "hi"}
    """

    def reconstruct(
        self,
        rows: Iterable[Row],
        root_id: int | None = 0,
        root_is_array: bool = False,
    ) -> Any:
        """Rebuild the value held under ``root_id``.

        Args:
            rows:          The table rows, in any order.
            root_id:       Row whose children form the value.  None rebuilds
                           from the root rows themselves.
            root_is_array: Whether ``root_id`` is an array container.

        Returns:
            The nested value.  None when ``root_id`` has no children and is
            not an array; an empty list when it has none and is an array.
        """
        children: _Children = defaultdict(list)
        for row in rows:
            children[row.parent].append(row)

        if not children.get(root_id):
            return [] if root_is_array else None

        if root_is_array:
            return self._build_array(children, root_id)
        return self._build_object(children, root_id)

    def _build_value(self, children: _Children, row: Row) -> Any:
        if row.is_array():
            return self._build_array(children, row.id)
        if row.is_object():
            return self._build_object(children, row.id)
        return row.value

    def _build_object(self, children: _Children, row_id: int | None) -> Any:
        result: Any = {}
        for row in children.get(row_id, []):
            if not row.key and not row.is_terminal():
                # Keyless container: a root row unwrapped in place
                result = self._build_value(children, row)
            else:
                result[row.key] = self._build_value(children, row)
        return result

    def _build_array(self, children: _Children, row_id: int | None) -> list[Any]:
        items = [
            (_array_index(row, position), self._build_value(children, row))
            for position, row in enumerate(children.get(row_id, []))
        ]
        items.sort(key=lambda item: item[0])
        return [value for _, value in items]
