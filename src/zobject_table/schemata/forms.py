"""Conversion between the canonical and hybrid forms of a ZObject.

Canonical form is the terse wire serialization: strings and references are
bare strings and lists are plain arrays whose first element is the item type.

Hybrid form is what the editor flattens into rows: strings and references are
spelled out as ``{"Z1K1": "Z6", "Z6K1": ...}`` and ``{"Z1K1": "Z9", "Z9K1": ...}``
objects, while lists stay plain arrays.

Both converters are total over well-formed input and never raise.  Absent
fields degrade to ``""`` (strings, references, list item types) or to an
empty item sequence (lists in normal form).  Applying either converter twice
gives the same result as applying it once.

Example::

    to_hybrid("Z11")                  # {"Z1K1": "Z9", "Z9K1": "Z11"}
    to_canonical({"Z1K1": "Z6", "Z6K1": "hello"})   # "hello"
    to_canonical({"Z1K1": "Z6", "Z6K1": "Z123"})    # kept wrapped
"""

from __future__ import annotations

from typing import Any

from zobject_table.constants import (
    REFERENCE_ID_RE,
    REFERENCE_TOKEN_RE,
    Z_FUNCTION_CALL_FUNCTION,
    Z_OBJECT_TYPE,
    Z_PERSISTENTOBJECT_ID,
    Z_QUOTE,
    Z_QUOTE_VALUE,
    Z_REFERENCE,
    Z_REFERENCE_ID,
    Z_STRING,
    Z_STRING_VALUE,
    Z_TYPED_LIST,
    Z_TYPED_LIST_TYPE,
    Z_TYPED_OBJECT_ELEMENT_1,
    Z_TYPED_OBJECT_ELEMENT_2,
)

__all__ = [
    "ZObject",
    "canonical_to_hybrid",
    "hybrid_to_canonical",
    "to_canonical",
    "to_hybrid",
]

# Type alias for a ZObject in either form
ZObject = dict[str, Any] | list[Any] | str


def _is_reference_to(value: Any, zid: str) -> bool:
    """True if ``value`` is ``zid`` either bare or as a hybrid reference object."""
    if isinstance(value, str):
        return value == zid
    if isinstance(value, dict):
        return value.get(Z_REFERENCE_ID) == zid
    return False


def _is_quote(object_type: Any) -> bool:
    return _is_reference_to(object_type, Z_QUOTE)


def _is_normal_typed_list(zobject: dict[str, Any]) -> bool:
    """True for a list in normal form, whose type is a call to the typed list function."""
    object_type = zobject.get(Z_OBJECT_TYPE)
    if not isinstance(object_type, dict):
        return False
    return _is_reference_to(object_type.get(Z_FUNCTION_CALL_FUNCTION), Z_TYPED_LIST)


def _canonicalize_string_or_reference(zobject: dict[str, Any]) -> ZObject:
    if zobject.get(Z_OBJECT_TYPE) == Z_STRING:
        value = zobject.get(Z_STRING_VALUE)
        if isinstance(value, str) and REFERENCE_TOKEN_RE.match(value):
            # Collapsing would turn the literal into a reference
            return dict(zobject)
        return value if isinstance(value, str) else ""

    value = zobject.get(Z_REFERENCE_ID)
    if isinstance(value, str) and REFERENCE_TOKEN_RE.match(value):
        return value
    return ""


def _normal_list_items(zlist: dict[str, Any]) -> list[Any]:
    """Walk the head/tail pair chain of a normal-form list, canonicalizing each head."""
    items: list[Any] = []
    node: Any = zlist
    while isinstance(node, dict):
        head = node.get(Z_TYPED_OBJECT_ELEMENT_1)
        if head:
            items.append(to_canonical(head))
        node = node.get(Z_TYPED_OBJECT_ELEMENT_2)
    return items


def to_canonical(zobject: Any) -> Any:
    """Transform a ZObject from hybrid form to canonical form.

    Also accepts lists in normal form (nested ``K1``/``K2`` pair objects typed
    as a call to ``Z881``), which some producers still emit, and flattens them
    into ``[item_type, *items]``.

    Args:
        zobject: A ZObject in hybrid, canonical or mixed form.  None and
            non-container scalars are returned unchanged.

    Returns:
        The canonical form of ``zobject``.
    """
    if zobject is None or isinstance(zobject, str):
        return zobject

    if isinstance(zobject, list):
        return [to_canonical(element) for element in zobject]

    if not isinstance(zobject, dict):
        return zobject

    object_type = zobject.get(Z_OBJECT_TYPE)

    if object_type in (Z_REFERENCE, Z_STRING):
        return _canonicalize_string_or_reference(zobject)

    if _is_normal_typed_list(zobject):
        item_type = object_type.get(Z_TYPED_LIST_TYPE) or ""
        return [to_canonical(item_type), *_normal_list_items(zobject)]

    if _is_quote(object_type):
        canon: dict[str, Any] = {Z_OBJECT_TYPE: Z_QUOTE}
        if Z_QUOTE_VALUE in zobject:
            canon[Z_QUOTE_VALUE] = to_canonical(zobject[Z_QUOTE_VALUE])
        return canon

    return {key: to_canonical(value) for key, value in zobject.items()}


def to_hybrid(zobject: Any) -> Any:
    """Transform a ZObject from canonical form to hybrid form.

    Bare strings are wrapped as references when they look like a ZID
    (``Z`` followed by digits) and as strings otherwise.  Lists stay lists.
    A quote keeps its payload untouched.

    Args:
        zobject: A ZObject in canonical or hybrid form.  None and non-string
            scalars are returned unchanged.

    Returns:
        The hybrid form of ``zobject``.
    """
    if zobject is None:
        return None

    if isinstance(zobject, str):
        if REFERENCE_ID_RE.match(zobject):
            return {Z_OBJECT_TYPE: Z_REFERENCE, Z_REFERENCE_ID: zobject}
        return {Z_OBJECT_TYPE: Z_STRING, Z_STRING_VALUE: zobject}

    if isinstance(zobject, list):
        return [to_hybrid(element) for element in zobject]

    if not isinstance(zobject, dict):
        return zobject

    if _is_quote(zobject.get(Z_OBJECT_TYPE)):
        quote: dict[str, Any] = {
            Z_OBJECT_TYPE: {Z_OBJECT_TYPE: Z_REFERENCE, Z_REFERENCE_ID: Z_QUOTE}
        }
        if Z_QUOTE_VALUE in zobject:
            quote[Z_QUOTE_VALUE] = zobject[Z_QUOTE_VALUE]
        return quote

    hybrid: dict[str, Any] = {}
    for key, value in zobject.items():
        if key == Z_OBJECT_TYPE and value in (Z_STRING, Z_REFERENCE):
            hybrid[key] = value
        elif key == Z_PERSISTENTOBJECT_ID and isinstance(value, str):
            hybrid[key] = {Z_OBJECT_TYPE: Z_STRING, Z_STRING_VALUE: value}
        elif key in (Z_STRING_VALUE, Z_REFERENCE_ID) and isinstance(value, str):
            hybrid[key] = value
        else:
            hybrid[key] = to_hybrid(value)
    return hybrid


# Names used by the editor's store layer
hybrid_to_canonical = to_canonical
canonical_to_hybrid = to_hybrid
