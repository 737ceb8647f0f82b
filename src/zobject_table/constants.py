"""ZObject key and type identifiers, and the token patterns shared by the converters.

Keys follow the ``Z<type>K<n>`` convention: ``Z1K1`` is the type tag of every
object, ``Z6K1`` the value of a string, ``Z9K1`` the id held by a reference.
"""

from __future__ import annotations

import re

# Structural keys
Z_OBJECT_TYPE = "Z1K1"
Z_PERSISTENTOBJECT_ID = "Z2K1"
Z_STRING_VALUE = "Z6K1"
Z_FUNCTION_CALL_FUNCTION = "Z7K1"
Z_REFERENCE_ID = "Z9K1"
Z_QUOTE_VALUE = "Z99K1"
Z_TYPED_LIST_TYPE = "Z881K1"
Z_TYPED_OBJECT_ELEMENT_1 = "K1"
Z_TYPED_OBJECT_ELEMENT_2 = "K2"
Z_ERRORTYPE_TO_TYPE_KEY = "Z885K1"

# Type identifiers
Z_STRING = "Z6"
Z_FUNCTION_CALL = "Z7"
Z_REFERENCE = "Z9"
Z_QUOTE = "Z99"
Z_TYPED_LIST = "Z881"

# Placeholder id of an object that has not been persisted yet
NEW_ZID_PLACEHOLDER = "Z0"

# Maximum number of zids handed to the resolver in one request
API_REQUEST_ITEMS_LIMIT = 50

# A bare string that reads like a reference.  Allows "Z" and "Z0" on purpose and
# excludes letters so that keys (containing a "K") never match.
REFERENCE_TOKEN_RE = re.compile(r"^Z\d*$")

# A string that the hybrid form wraps as a reference rather than a string
REFERENCE_ID_RE = re.compile(r"^Z\d+$")

# A well-formed persistent ZID
ZID_RE = re.compile(r"^Z[1-9]\d*$")

# Any ZID, optionally followed by a key suffix, anywhere inside a string
ZID_OR_KEY_TOKEN_RE = re.compile(r"(Z[1-9]\d*)(K[1-9]\d*)?")

# Error type identifiers live in the Z500-Z599 range
ERROR_TYPE_RE = re.compile(r"^Z5\d{2}$")
