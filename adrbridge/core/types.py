"""Core types for adrbridge.

The data model shared by the runner, probe, parsers and client. All
dataclasses are frozen: records are built fresh from each listing and never
mutated in place.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Final


class _Absent(Enum):
    """Sentinel type for a field the source did not supply at all."""

    ABSENT = "absent"

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT: Final = _Absent.ABSENT
"""Marks a relation field missing from the source, as opposed to ``None``."""

# A relation id, an explicit "no value" (None), or not supplied (ABSENT).
RelationRef = str | None | _Absent


@dataclass(frozen=True)
class CommandOutcome:
    """Decoded output of one successful process invocation."""

    stdout: str
    stderr: str


@dataclass(frozen=True)
class WorkspaceCapabilities:
    """What tooling is usable in a workspace root.

    Gates are checked in order (runtime, repository, companion tool); a flag
    is only True if every earlier flag is True.
    """

    has_runtime: bool = False
    is_repository: bool = False
    has_companion_tool: bool = False

    @property
    def available(self) -> bool:
        """Return True if every gate passed."""
        return self.has_runtime and self.is_repository and self.has_companion_tool


@dataclass(frozen=True)
class DecisionRecord:
    """One architectural decision record summary.

    Attributes:
        id: Record identifier (e.g. "20251217-rename-homebrew-tap"). Never None.
        title: Human-readable title. Never None.
        status: Status such as "accepted" or "proposed", if reported.
        date: ISO-like creation date, if reported.
        tags: Labels for the record.
        linked_refs: Commit SHAs linked to the record.
        supersedes: Id of the record this one replaces; None if the source
            stated there is none; ABSENT if the source did not say.
        superseded_by: Id of the record replacing this one, same three states.
        raw: Original text line, only set by the text fallback parser.
    """

    id: str = ""
    title: str = ""
    status: str | None = None
    date: str | None = None
    tags: tuple[str, ...] = ()
    linked_refs: tuple[str, ...] = ()
    supersedes: RelationRef = ABSENT
    superseded_by: RelationRef = ABSENT
    raw: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Render the record using the tool's JSON field names.

        ABSENT relations are omitted; explicit None relations become null.
        """
        data: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "status": self.status,
            "date": self.date,
            "tags": list(self.tags),
            "linked_commits": list(self.linked_refs),
        }
        if self.supersedes is not ABSENT:
            data["supersedes"] = self.supersedes
        if self.superseded_by is not ABSENT:
            data["superseded_by"] = self.superseded_by
        if self.raw is not None:
            data["raw"] = self.raw
        return data
