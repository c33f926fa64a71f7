"""
Plain value types passed between storage, the derivation core and the pages.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional, Union

from you_first.dates import day_key

KINDS = ("habit", "rule", "goal")

# Categories counted by the balance score. Rules may carry other labels,
# those are kept for display but never score.
CATEGORIES = ("mind", "body", "soul")


@dataclass(frozen=True)
class Trackable:
    id: int
    name: str
    kind: str = "habit"
    category: str = "mind"
    created_at: Optional[date] = None

    @classmethod
    def from_row(cls, row: dict) -> "Trackable":
        created = row.get("created_at")
        return cls(
            id=row["id"],
            name=row.get("name", ""),
            kind=row.get("kind", "habit"),
            category=row.get("category", "mind"),
            created_at=day_key(created) if created else None,
        )


@dataclass(frozen=True)
class CompletionLogEntry:
    entity_id: int
    day: date
    completed: bool = True

    def __post_init__(self):
        # datetimes are dates too, but would never match a day key
        object.__setattr__(self, "day", day_key(self.day))

    @classmethod
    def from_row(cls, row: dict) -> "CompletionLogEntry":
        return cls(
            entity_id=row["trackable_id"],
            day=row["day"],
            completed=bool(int(row.get("completed", 1))),
        )


LogInput = Union[CompletionLogEntry, dict]


def as_entries(rows: Iterable[LogInput]) -> List[CompletionLogEntry]:
    """
    Accept storage rows or entries, return entries.
    """
    return [r if isinstance(r, CompletionLogEntry) else CompletionLogEntry.from_row(r) for r in rows]


@dataclass(frozen=True)
class TrackableStatus:
    """
    Derived per-trackable values for one reference day.
    """

    trackable: Trackable
    current_streak: int
    longest_streak: int
    completed_today: bool
    completed_last_7: int

    @property
    def category(self) -> str:
        return self.trackable.category
