"""ZidRequestTracker: request-once proxy in front of any ZidResolver.

Every ZObject that enters the session is scanned for ZIDs and the result is
handed to the resolver.  The tracker forwards only ZIDs it has not forwarded
before, in batches of bounded size.  Forwarded ZIDs are remembered in an
``LRUCache``; once ``max_size`` is exceeded the least recently requested ZID
is forgotten and may be requested again.

Each tracker owns its own cache, so two sessions never share request state.

Example::

    tracker = ZidRequestTracker(resolver, batch_size=50)
    tracker.request(["Z6", "Z11"])   # resolver.resolve(["Z6", "Z11"])
    tracker.request(["Z6", "Z12"])   # resolver.resolve(["Z12"])
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from cachetools import LRUCache

from zobject_table.constants import API_REQUEST_ITEMS_LIMIT, NEW_ZID_PLACEHOLDER

if TYPE_CHECKING:
    from zobject_table.protocols import ZidResolver

__all__ = ["ZidRequestTracker"]

logger = logging.getLogger(__name__)


class ZidRequestTracker:
    """Forwards each ZID to the wrapped resolver at most once.

    Args:
        resolver: Any object satisfying the ``ZidResolver`` Protocol.
        batch_size: Maximum number of ZIDs per ``resolve()`` call.  Defaults to 50.
        max_size: Maximum number of requested ZIDs remembered.  Defaults to 4096.
    """

    def __init__(
        self,
        resolver: ZidResolver,
        batch_size: int = API_REQUEST_ITEMS_LIMIT,
        max_size: int = 4096,
    ) -> None:
        self._resolver: Any = resolver
        self._batch_size = batch_size
        self._requested: LRUCache[str, bool] = LRUCache(maxsize=max_size)

    @property
    def max_size(self) -> int:
        """The maximum number of requested ZIDs remembered."""
        return int(self._requested.maxsize)

    @property
    def curr_size(self) -> int:
        """The number of requested ZIDs currently remembered."""
        return int(self._requested.currsize)

    def __contains__(self, zid: object) -> bool:
        return zid in self._requested

    def request(self, zids: Iterable[str]) -> list[str]:
        """Hand the not-yet-requested ``zids`` to the resolver.

        Empty values, the ``Z0`` placeholder and duplicates are dropped.  A
        batch is only remembered once the resolver accepted it, so a failing
        batch is requested again next time.

        Args:
            zids: ZIDs to resolve, in priority order.

        Returns:
            The ZIDs that were forwarded, in order.
        """
        pending = [
            zid
            for zid in dict.fromkeys(zids)
            if zid and zid != NEW_ZID_PLACEHOLDER and zid not in self._requested
        ]

        for start in range(0, len(pending), self._batch_size):
            batch = pending[start : start + self._batch_size]
            logger.debug("Requesting %d zids: %s", len(batch), batch)
            self._resolver.resolve(batch)
            for zid in batch:
                self._requested[zid] = True

        return pending

    def forget(self, zid: str) -> None:
        """Allow ``zid`` to be requested again."""
        self._requested.pop(zid, None)

    def clear(self) -> None:
        self._requested.clear()
