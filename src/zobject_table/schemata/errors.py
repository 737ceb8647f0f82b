"""Extraction of the nested sub-error structure of a diagnostic ZObject.

A sub-error is an object whose type is an error type (``Z500``-``Z599``).  Two
shapes are recognised:

- relaxed, as the orchestrator emits it: ``{"Z1K1": "Z500", "Z500K1": "..."}``
- strict, through a call to ``Z885``/"Errortype to type":
  ``{"Z1K1": {"Z1K1": "Z7", "Z7K1": "Z885", "Z885K1": "Z500"}, "K1": "..."}``

Example::

    extract_errors({"Z1K1": "Z500", "Z500K1": "Could not find argument Z811K1"})
    # [ErrorNode(error_type="Z500", explanation="Could not find argument Z811K1")]
"""

from __future__ import annotations

from typing import Any

from zobject_table.constants import (
    ERROR_TYPE_RE,
    ZID_RE,
    Z_ERRORTYPE_TO_TYPE_KEY,
    Z_OBJECT_TYPE,
    Z_TYPED_OBJECT_ELEMENT_1,
)
from zobject_table.result import ErrorNode

__all__ = [
    "ERROR_KEYS_TO_TRAVERSE",
    "ERROR_TYPES_NOT_TO_TRAVERSE",
    "extract_error_structure",
    "extract_errors",
]

# Error types with no keys whose values can hold nested errors
ERROR_TYPES_NOT_TO_TRAVERSE: frozenset[str] = frozenset(
    {
        "Z501", "Z505", "Z508", "Z511", "Z512", "Z513", "Z516",
        "Z531", "Z532", "Z533", "Z534", "Z535", "Z536", "Z537",
        "Z542", "Z547", "Z548", "Z551", "Z553",
    }
)  # fmt: skip

# Error types whose nested errors can only appear under these keys.
# Both the global key and the local key of the strict shape are listed.
ERROR_KEYS_TO_TRAVERSE: dict[str, frozenset[str]] = {
    "Z502": frozenset({"Z502K2", "K2"}),  # Not wellformed, [value]
    "Z506": frozenset({"Z506K4", "K4"}),  # Argument type mismatch, [propagated error]
    "Z507": frozenset({"Z507K2", "K2"}),  # Error in evaluation, [propagated error]
    "Z517": frozenset({"Z517K4", "K4"}),  # Return type mismatch, [propagated error]
    "Z518": frozenset({"Z518K3", "K3"}),  # Object type mismatch, [propagated error]
}


def _is_error_type(value: Any) -> bool:
    return isinstance(value, str) and ERROR_TYPE_RE.match(value) is not None


def _match_suberror(zobject: Any) -> tuple[str, str] | None:
    """Return ``(error_type, explanation_key)`` if ``zobject`` is a sub-error."""
    if not isinstance(zobject, dict):
        return None

    object_type = zobject.get(Z_OBJECT_TYPE)

    # Relaxed shape: the error type is the object type
    if _is_error_type(object_type):
        return object_type, f"{object_type}K1"

    # Strict shape: the object type is a call to Z885 with the error type as argument
    if isinstance(object_type, dict) and _is_error_type(
        object_type.get(Z_ERRORTYPE_TO_TYPE_KEY)
    ):
        return object_type[Z_ERRORTYPE_TO_TYPE_KEY], Z_TYPED_OBJECT_ELEMENT_1

    return None


def _explanation(zobject: dict[str, Any], key: str) -> str | None:
    value = zobject.get(key)
    if isinstance(value, str) and value and not ZID_RE.match(value):
        return value
    return None


def extract_errors(zobject: Any) -> list[ErrorNode]:
    """Find all the sub-errors inside ``zobject``.

    ``zobject`` is normally a ``Z5``/Error but does not have to be: when it is
    not itself a sub-error, its children are searched instead.

    Recursion into a sub-error stops when it carries an explanation or its
    type is listed in ``ERROR_TYPES_NOT_TO_TRAVERSE``.  Types listed in
    ``ERROR_KEYS_TO_TRAVERSE`` are searched only under their listed keys, and
    any other type under every key except ``Z1K1``.

    Args:
        zobject: Any ZObject.

    Returns:
        The sub-errors found at the shallowest level, each with its own
        nested ``children``.  Empty when none are found.
    """
    matched = _match_suberror(zobject)
    if matched is None:
        return _extract_nested(zobject, None)

    error_type, explanation_key = matched
    explanation = _explanation(zobject, explanation_key)
    if explanation is not None or error_type in ERROR_TYPES_NOT_TO_TRAVERSE:
        children: list[ErrorNode] = []
    else:
        children = _extract_nested(zobject, error_type)
    return [ErrorNode(error_type, explanation, children)]


def _extract_nested(zobject: Any, error_type: str | None) -> list[ErrorNode]:
    if isinstance(zobject, dict):
        entries = list(zobject.items())
    elif isinstance(zobject, list):
        entries = [(str(index), item) for index, item in enumerate(zobject)]
    else:
        return []

    keys_to_traverse = ERROR_KEYS_TO_TRAVERSE.get(error_type) if error_type else None
    nested: list[ErrorNode] = []
    for key, value in entries:
        # The type has already been inspected
        if key == Z_OBJECT_TYPE:
            continue
        if keys_to_traverse is None or key in keys_to_traverse:
            nested.extend(extract_errors(value))
    return nested


extract_error_structure = extract_errors
