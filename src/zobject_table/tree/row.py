"""Row dataclass and RowValue enum for the flat table representation of a ZObject.

A ZObject tree is stored as a list of rows linked by parent ids.  Terminal rows
carry their string value; container rows carry a RowValue marker and own the
rows whose ``parent`` equals their ``id``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

__all__ = ["Row", "RowValue"]


class RowValue(Enum):
    """Markers for rows whose value is a container of child rows.

    Markers never compare equal to a terminal string such as ``"object"``.

    - OBJECT : the children form a mapping, keyed by field name
    - ARRAY  : the children form a list, keyed by stringified index
    """

    OBJECT = auto()
    ARRAY = auto()


@dataclass(slots=True)
class Row:
    """One key/value entry of a flattened ZObject.

    Attributes:
        id:     Table-local identifier, unique among live rows.
        key:    Field name under the parent, or the stringified index when the
                parent is an array.  None only for root rows.
        value:  Terminal string, or a RowValue marker for container rows.
        parent: Id of the owning row.  None marks a root row.
    """

    id: int
    key: str | None
    value: str | RowValue
    parent: int | None

    def is_terminal(self) -> bool:
        return isinstance(self.value, str)

    def is_object(self) -> bool:
        return self.value is RowValue.OBJECT

    def is_array(self) -> bool:
        return self.value is RowValue.ARRAY
