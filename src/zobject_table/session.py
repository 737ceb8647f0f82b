"""EditSession: wires a ZObjectTable to the collaborators of an editing session.

Data flow:
- load: the store returns a canonical ZObject, which is converted to hybrid
  form and flattened into a fresh table rooted at row id 0.
- edit: callers mutate the table directly, or inject values through the
  session so that their ZIDs are handed to the resolver.
- submit: the table is rebuilt from row 0, converted to canonical form and
  handed to the saver inside a SubmissionPayload.

Every value entering the session is scanned with ``extract_ids`` and the
result is passed to the resolver through a ZidRequestTracker, so each ZID is
requested once per session.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from zobject_table.cache import ZidRequestTracker
from zobject_table.config import SessionConfig
from zobject_table.constants import NEW_ZID_PLACEHOLDER
from zobject_table.exceptions import MissingCollaboratorError
from zobject_table.result import ErrorNode, SubmissionPayload
from zobject_table.schemata.errors import extract_errors
from zobject_table.schemata.forms import to_canonical, to_hybrid
from zobject_table.schemata.identifiers import extract_ids
from zobject_table.table import ZObjectTable
from zobject_table.tree.row import Row

if TYPE_CHECKING:
    from zobject_table.protocols import DefinitionStore, ZidResolver, ZObjectSaver

__all__ = ["EditSession"]

logger = logging.getLogger(__name__)


class EditSession:
    """One editing session over a single ZObject.

    Example::

        session = EditSession(SessionConfig(zid="Z10001"), store=store, saver=saver)
        table = session.load()
        row = table.get_row_by_key_path(["Z2K2", "Z6K1"])
        table.set_value_by_row_id(row.id, "new value")
        session.submit(summary="Fix value")
    """

    def __init__(
        self,
        config: SessionConfig | None = None,
        store: DefinitionStore | None = None,
        saver: ZObjectSaver | None = None,
        resolver: ZidResolver | None = None,
    ) -> None:
        """Initialise the session with an empty table.

        Args:
            config:   Session settings.  Defaults to ``SessionConfig()``.
            store:    Source of persisted ZObjects, needed by ``load()``.
            saver:    Destination of edits, needed by ``submit()``.
            resolver: Receives the ZIDs found in every value entering the
                session.  ZIDs are dropped when None.
        """
        self._config: SessionConfig = config if config is not None else SessionConfig()
        self._store = store
        self._saver = saver
        self._requests: ZidRequestTracker | None = (
            ZidRequestTracker(
                resolver,
                batch_size=self._config.request_batch_size,
                max_size=self._config.max_requested_zids,
            )
            if resolver is not None
            else None
        )
        self._zid: str | None = self._config.zid
        self._table = ZObjectTable()

    @property
    def config(self) -> SessionConfig:
        return self._config

    @property
    def table(self) -> ZObjectTable:
        return self._table

    @property
    def zid(self) -> str | None:
        return self._zid

    @property
    def is_new(self) -> bool:
        """True when the edited object has not been persisted yet."""
        return self._zid is None or self._zid == NEW_ZID_PLACEHOLDER

    # ------------------------------------------------------------------
    # Wire format in
    # ------------------------------------------------------------------

    def load(self, zid: str | None = None) -> ZObjectTable:
        """Fetch ``zid`` (default: the configured one) and load it into a fresh table.

        Raises:
            MissingCollaboratorError: If the session has no store.
            ValueError: If no zid is given or configured.
        """
        if self._store is None:
            msg = "load() needs a DefinitionStore"
            raise MissingCollaboratorError(msg)
        zid = zid if zid is not None else self._config.zid
        if zid is None:
            msg = "load() needs a zid, either as argument or in the SessionConfig"
            raise ValueError(msg)

        logger.debug("Loading %s", zid)
        zobject = self._store.fetch(zid)
        self._zid = zid
        return self.load_value(zobject)

    def load_value(self, zobject: Any) -> ZObjectTable:
        """Replace the table with one holding ``zobject`` (canonical form)."""
        self._table = ZObjectTable.from_json(to_hybrid(zobject))
        logger.debug("Loaded table with %d rows", len(self._table))
        self._request_ids(zobject)
        return self._table

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def inject(self, row_id: int | None, value: Any, append: bool = False) -> list[Row]:
        """Flatten ``value`` under ``row_id`` and request the ZIDs it mentions."""
        rows = self._table.inject_value(row_id, value, append=append)
        if rows:
            self._request_ids(value)
        return rows

    def set_value_by_key_path(
        self,
        row_id: int,
        key_path: Sequence[str],
        value: Any,
        append: bool = False,
    ) -> list[Row]:
        rows = self._table.set_value_by_key_path(row_id, key_path, value, append=append)
        self._request_ids(value)
        return rows

    def remove_list_item(self, row_id: int, key: str | None = None) -> None:
        """Remove a list item; with ``key``, renumber the remaining key ids.

        ``key`` names where each item holds its key id, e.g. ``"Z17K2"`` for
        the argument list of a function.  Ids are rebuilt from the edited
        object's zid (``Z0`` while it is new).
        """
        list_row_id = self._table.get_parent_row_id(row_id)
        self._table.remove_item_from_list(row_id)
        if key is not None:
            zid = NEW_ZID_PLACEHOLDER if self.is_new else self._zid
            self._table.recalculate_keys(list_row_id, key, zid)  # type: ignore[arg-type]

    def reset(self) -> None:
        """Discard the table and go back to the configured zid."""
        self._table = ZObjectTable()
        self._zid = self._config.zid

    # ------------------------------------------------------------------
    # Wire format out
    # ------------------------------------------------------------------

    def to_canonical_json(self) -> Any:
        """The edited ZObject, rebuilt from row 0, in canonical form."""
        return to_canonical(self._table.to_json(0))

    def build_payload(self, summary: str = "") -> SubmissionPayload:
        return SubmissionPayload(
            zobject=self.to_canonical_json(),
            zid=None if self.is_new else self._zid,
            summary=summary,
            language=self._config.language,
        )

    def submit(self, summary: str = "") -> Any:
        """Hand the canonical ZObject to the saver and return what it returns.

        Raises:
            MissingCollaboratorError: If the session has no saver.
        """
        if self._saver is None:
            msg = "submit() needs a ZObjectSaver"
            raise MissingCollaboratorError(msg)
        payload = self.build_payload(summary)
        logger.debug("Submitting %s", payload.zid or "new object")
        return self._saver.save(payload)

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def diagnostics(self, zobject: Any) -> list[ErrorNode]:
        """The sub-error structure of a diagnostic value, e.g. a failed run."""
        errors = extract_errors(zobject)
        self._request_ids([node.error_type for node in _walk(errors)])
        return errors

    def _request_ids(self, zobject: Any) -> None:
        if self._requests is None:
            return
        self._requests.request(extract_ids(zobject))


def _walk(nodes: list[ErrorNode]) -> list[ErrorNode]:
    flat: list[ErrorNode] = []
    for node in nodes:
        flat.append(node)
        flat.extend(_walk(node.children))
    return flat
