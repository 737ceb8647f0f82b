"""Collaborator protocols for the boundaries of an editing session.

The core never performs I/O.  Fetching definitions, saving edits and
resolving labels are delegated to objects satisfying these protocols.  Any
class with conformant methods passes ``isinstance`` checks, no inheritance
required.

Example::

    from zobject_table.protocols import DefinitionStore

    class InMemoryStore:
        def __init__(self, objects):
            self._objects = objects

        def fetch(self, zid):
            return self._objects[zid]

    assert isinstance(InMemoryStore({}), DefinitionStore)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from zobject_table.result import SubmissionPayload

__all__ = ["DefinitionStore", "ZObjectSaver", "ZidResolver"]


@runtime_checkable
class DefinitionStore(Protocol):
    """Source of persisted ZObjects.

    ``fetch`` must return the stored object in canonical form.
    """

    def fetch(self, zid: str) -> Any: ...


@runtime_checkable
class ZObjectSaver(Protocol):
    """Destination of edited ZObjects."""

    def save(self, payload: SubmissionPayload) -> Any: ...


@runtime_checkable
class ZidResolver(Protocol):
    """Schedules label and definition lookups for a batch of ZIDs."""

    def resolve(self, zids: list[str]) -> None: ...
