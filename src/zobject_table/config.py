"""SessionConfig: immutable settings for one editing session."""

from __future__ import annotations

from dataclasses import dataclass

from zobject_table.constants import API_REQUEST_ITEMS_LIMIT, REFERENCE_ID_RE

__all__ = ["SessionConfig"]


@dataclass(frozen=True, slots=True)
class SessionConfig:
    """Immutable configuration for an EditSession.

    Attributes:
        zid: ZID of the object being edited.  None (or ``"Z0"``) when creating
            a new object.
        language: Language code of the editing user, sent with submissions.
        request_batch_size: Maximum number of ZIDs handed to the resolver in
            one call.  Defaults to 50.
        max_requested_zids: How many already-requested ZIDs are remembered
            before the least recently used is forgotten.  Defaults to 4096.
    """

    zid: str | None = None
    language: str = "en"
    request_batch_size: int = API_REQUEST_ITEMS_LIMIT
    max_requested_zids: int = 4096

    def __post_init__(self) -> None:
        if self.zid is not None and not REFERENCE_ID_RE.match(self.zid):
            msg = f"zid must look like Z<digits>, got {self.zid!r}"
            raise ValueError(msg)
        if not self.language:
            msg = "language must be a non-empty language code"
            raise ValueError(msg)
        if self.request_batch_size < 1:
            msg = f"request_batch_size must be >= 1, got {self.request_batch_size}"
            raise ValueError(msg)
        if self.max_requested_zids < 1:
            msg = f"max_requested_zids must be >= 1, got {self.max_requested_zids}"
            raise ValueError(msg)
