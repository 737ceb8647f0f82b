"""Collect every ZID and key mentioned anywhere inside a ZObject."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from zobject_table.constants import ZID_OR_KEY_TOKEN_RE

__all__ = ["extract_ids", "extract_zids"]


def _iter_strings(zobject: Any) -> Iterator[str]:
    """Yield object keys and string leaves in serialization order."""
    if isinstance(zobject, str):
        yield zobject
    elif isinstance(zobject, dict):
        for key, value in zobject.items():
            yield str(key)
            yield from _iter_strings(value)
    elif isinstance(zobject, list):
        for item in zobject:
            yield from _iter_strings(item)


def extract_ids(zobject: Any, return_keys: bool = False) -> list[str]:
    """Find all the ZIDs appearing in an arbitrary ZObject.

    Nesting does not matter: a token is found wherever it appears, as a key
    or inside a string value.

    Args:
        zobject:     Any ZObject, in any form.
        return_keys: When True, return full tokens including key suffixes
                     (``"Z11K1"``) instead of their base ZIDs (``"Z11"``).

    Returns:
        Distinct tokens in order of first appearance, with key tokens moved
        ahead of plain ZIDs.
    """
    tokens: list[str] = []
    for text in _iter_strings(zobject):
        for match in ZID_OR_KEY_TOKEN_RE.finditer(text):
            tokens.append(match.group(0) if return_keys else match.group(1))

    unique = list(dict.fromkeys(tokens))
    # Stable: relative order is kept within each group
    return sorted(unique, key=lambda token: "K" not in token)


extract_zids = extract_ids
