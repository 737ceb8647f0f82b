"""Public API functions for zobject-table.

Function-style entry points for the table conversions.  Each call uses a
fresh flattener or reconstructor, so no state is shared between calls.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from zobject_table.tree.flattener import TableFlattener
from zobject_table.tree.reconstructor import TableReconstructor
from zobject_table.tree.row import Row

__all__ = ["convert_json_to_table", "convert_table_to_json", "flatten", "reconstruct"]


def convert_json_to_table(
    zobject: Any,
    parent_row: Row | None = None,
    starting_id: int | None = None,
    append_to_list: bool = False,
    append_from_index: int = 0,
    return_parent: bool = True,
) -> list[Row]:
    """Flatten a ZObject into table rows.

    Args:
        zobject:           ZObject to flatten, canonical or hybrid.
        parent_row:        Existing row the value will hang from.
        starting_id:       First free row id; required with ``parent_row``.
        append_to_list:    Add the value as one more item of the
                           ``parent_row`` list.
        append_from_index: Index of the appended item.
        return_parent:     Keep the row representing the parent or root.

    Returns:
        The rows, in depth-first pre-order.

    Raises:
        PreconditionError: On an invalid combination of arguments.
    """
    return TableFlattener().flatten(
        zobject,
        parent_row=parent_row,
        starting_id=starting_id,
        append_to_list=append_to_list,
        append_from_index=append_from_index,
        return_parent=return_parent,
    )


def convert_table_to_json(
    rows: Iterable[Row],
    root_id: int | None = 0,
    root_is_array: bool = False,
) -> Any:
    """Rebuild the ZObject held under ``root_id``.

    Args:
        rows:          The table rows.
        root_id:       Row whose children form the value.  Defaults to 0.
        root_is_array: Whether ``root_id`` is a list container.

    Returns:
        The nested value; None (or ``[]`` for a list root) when ``root_id``
        has no children.
    """
    return TableReconstructor().reconstruct(rows, root_id, root_is_array)


flatten = convert_json_to_table
reconstruct = convert_table_to_json
