"""Exception hierarchy for zobject-table.

Only programmer-contract failures are raised.  Irregular data (missing rows,
empty subtrees, values that are not errors) resolves to empty results instead.
"""

from __future__ import annotations

__all__ = ["MissingCollaboratorError", "PreconditionError", "ZObjectTableError"]


class ZObjectTableError(Exception):
    """Base class for every error raised by zobject-table."""


class PreconditionError(ZObjectTableError, ValueError):
    """An invalid combination of arguments was passed by the calling code."""


class MissingCollaboratorError(ZObjectTableError):
    """A session operation needs a collaborator that was not provided."""
