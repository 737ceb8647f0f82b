"""Result dataclasses returned by the extraction and submission operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

__all__ = ["ErrorNode", "SubmissionPayload"]


@dataclass(frozen=True, slots=True)
class ErrorNode:
    """One sub-error found inside a diagnostic ZObject.

    Attributes:
        error_type:  ZID of the error type, e.g. ``"Z500"``.
        explanation: Explanatory string carried by the error, if any.
        children:    Sub-errors nested inside this one.
    """

    error_type: str
    explanation: str | None = None
    children: list[ErrorNode] = field(default_factory=list)

    def as_dict(self) -> dict[str, Any]:
        """Return the ``{"errorType", "explanation", "children"}`` wire shape."""
        node: dict[str, Any] = {"errorType": self.error_type}
        if self.explanation is not None:
            node["explanation"] = self.explanation
        node["children"] = [child.as_dict() for child in self.children]
        return node


@dataclass(frozen=True, slots=True)
class SubmissionPayload:
    """Everything the save collaborator needs to persist an edited ZObject.

    Attributes:
        zobject:  The edited ZObject in canonical form.
        zid:      ZID of the object being edited; None when creating a new one.
        summary:  Edit summary.
        language: Language code of the editing user.
    """

    zobject: Any
    zid: str | None
    summary: str
    language: str
