"""Tree subpackage for the flat row-table representation of ZObjects.

Re-exports the public API for the tree module:
- Row: dataclass for one key/value entry of the table
- RowValue: Enum of the two container markers (OBJECT, ARRAY)
- TableFlattener: converts a ZObject into rows
- TableReconstructor: rebuilds a ZObject from rows
"""

from zobject_table.tree.flattener import TableFlattener
from zobject_table.tree.reconstructor import TableReconstructor
from zobject_table.tree.row import Row, RowValue

__all__ = ["Row", "RowValue", "TableFlattener", "TableReconstructor"]
