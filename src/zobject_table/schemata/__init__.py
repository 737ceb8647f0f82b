"""Schemata subpackage: operations on ZObject values that need no row table.

Re-exports the public API for the schemata module:
- to_canonical / to_hybrid: conversion between the two serialized forms
- extract_ids: every ZID or key mentioned in a value
- extract_errors: the nested sub-error structure of a diagnostic value
"""

from zobject_table.schemata.errors import extract_errors
from zobject_table.schemata.forms import ZObject, to_canonical, to_hybrid
from zobject_table.schemata.identifiers import extract_ids

__all__ = ["ZObject", "extract_errors", "extract_ids", "to_canonical", "to_hybrid"]
