"""pytest plugin for zobject-table.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from typing import Any

import pytest

from zobject_table.api import convert_json_to_table, convert_table_to_json
from zobject_table.schemata.forms import to_hybrid


@pytest.fixture(scope="session")
def assert_table_round_trip() -> Any:
    """Fixture that returns a callable flatten/reconstruct round-trip asserter.

    Usage in tests::

        def test_label(assert_table_round_trip):
            assert_table_round_trip({"Z1K1": "Z11", "Z11K1": "Z1002", "Z11K2": "hi"})

    Returns:
        A callable ``_assert(zobject) -> list[Row]`` that flattens ``zobject``,
        rebuilds it from row 0 and raises ``AssertionError`` unless the result
        equals the hybrid form of ``zobject``.  Returns the rows on success.
    """

    def _assert(zobject: Any) -> Any:
        rows = convert_json_to_table(zobject)
        expected = to_hybrid(zobject)
        actual = convert_table_to_json(rows, 0, isinstance(expected, list))
        if actual != expected:
            table = "\n".join(f"    {row}" for row in rows)
            raise AssertionError(
                f"Table round trip changed the ZObject\n"
                f"  expected: {expected}\n"
                f"  actual:   {actual}\n"
                f"  rows:\n{table}"
            )
        return rows

    return _assert
