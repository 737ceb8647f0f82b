"""TableFlattener: converts a ZObject into the ordered rows of a flat table.

The value is brought to hybrid form first, so every string and reference
becomes an object with a ``Z1K1`` tag row and a ``Z6K1``/``Z9K1`` value row.
Rows are emitted depth-first in pre-order: a container row comes before its
children, and every new row takes the next integer id.

When flattening under an existing ``parent_row`` the first emitted row
re-states that parent (same id, key and parent) with the container marker of
the new value.  It takes no new id.  Callers decide whether to keep it
(``return_parent=True``) or drop it.
"""

from __future__ import annotations

import itertools
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from zobject_table.exceptions import PreconditionError
from zobject_table.schemata.forms import to_hybrid
from zobject_table.tree.row import Row, RowValue

__all__ = ["TableFlattener"]


@dataclass
class TableFlattener:
    """Converts a ZObject into a list of Row objects.

    Dispatches purely on the runtime shape of each node (str, list, dict),
    so no knowledge of ZObject types is needed beyond the hybrid conversion.

    Example::

        flattener = TableFlattener()
        rows = flattener.flatten("hello")
        # Row(0, None, OBJECT, None)
        # Row(1, "Z1K1", "Z6", 0)
        # Row(2, "Z6K1", "hello", 0)
    """

    def flatten(
        self,
        value: Any,
        parent_row: Row | None = None,
        starting_id: int | None = None,
        append_to_list: bool = False,
        append_from_index: int = 0,
        return_parent: bool = True,
    ) -> list[Row]:
        """Flatten ``value`` into rows.

        Args:
            value:             ZObject to flatten, canonical or hybrid.
            parent_row:        Existing row the value will hang from.  Its
                               current children are not touched here.
            starting_id:       First free row id.  Required with ``parent_row``.
                               Defaults to 0 without a parent.
            append_to_list:    Wrap ``value`` as one extra element of the
                               ``parent_row`` array instead of replacing it.
            append_from_index: Index given to the appended element.
            return_parent:     When False, drop the row that represents
                               ``parent_row`` (or the new root) from the output.

        Returns:
            The emitted rows, in pre-order.

        Raises:
            PreconditionError: If ``parent_row`` is given without
                ``starting_id``, or ``append_to_list`` is set without an array
                ``parent_row``.
            TypeError: If a node is not a str, list or dict.
        """
        if parent_row is not None and starting_id is None:
            msg = "cannot flatten under a parent without a starting id"
            raise PreconditionError(msg)
        if append_to_list and (parent_row is None or not parent_row.is_array()):
            msg = "cannot append to a list without an array parent row"
            raise PreconditionError(msg)

        rows: list[Row] = []
        ids = itertools.count(starting_id or 0)
        child_value = [value] if append_to_list else value

        self._flatten_node(
            to_hybrid(child_value),
            key=parent_row.key if parent_row is not None else None,
            parent_id=parent_row.id if parent_row is not None else None,
            rows=rows,
            ids=ids,
            existing_parent=parent_row,
            starting_index=append_from_index,
        )

        if not return_parent:
            rows.pop(0)
        return rows

    def _flatten_node(
        self,
        value: Any,
        key: str | None,
        parent_id: int | None,
        rows: list[Row],
        ids: Iterator[int],
        existing_parent: Row | None = None,
        starting_index: int = 0,
    ) -> None:
        if isinstance(value, str):
            rows.append(Row(next(ids), key, value, parent_id))
            return

        children: Iterator[tuple[str, Any]]
        if isinstance(value, list):
            marker = RowValue.ARRAY
            children = (
                (str(index + starting_index), item)
                for index, item in enumerate(value)
            )
        elif isinstance(value, dict):
            marker = RowValue.OBJECT
            children = iter(value.items())
        else:
            raise TypeError(f"Unsupported ZObject node type: {type(value)!r}")

        if existing_parent is not None:
            row_id = existing_parent.id
            rows.append(Row(row_id, key, marker, existing_parent.parent))
        else:
            row_id = next(ids)
            rows.append(Row(row_id, key, marker, parent_id))

        for child_key, child in children:
            self._flatten_node(child, child_key, row_id, rows, ids)
