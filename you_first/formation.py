"""
67-day habit formation: stage labels, the formation window and progress views.

Two views are exposed and never reconciled: the stage label follows the
current streak, the window stats follow what was actually logged in the
last 67 days.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List, Optional

from you_first import dates
from you_first.errors import InvalidInputError
from you_first.metrics import CompletionIndex, percentage, round_half_up
from you_first.models import CATEGORIES, TrackableStatus

FORMATION_DAYS = 67

# (label, first streak day of the stage)
STAGES = (
    ("Starting", 0),
    ("Initial", 7),
    ("Strengthening", 21),
    ("Automaticity", 45),
    ("Mastered", 67),
)

# (name, start offset, end offset) into the oldest-first window
WINDOW_STAGES = (
    ("Stage 1", 0, 18),
    ("Stage 2", 18, 45),
    ("Stage 3", 45, 66),
    ("Bonus", 66, 67),
)

FORMING_STREAK = 21


@dataclass(frozen=True)
class StageStats:
    name: str
    first_day: Optional[date]
    last_day: Optional[date]
    completed: int
    total: int
    percentage: int


@dataclass(frozen=True)
class FormationProgress:
    stage: str
    percent: int
    next_stage: Optional[str]
    days_to_next: int


@dataclass(frozen=True)
class CategoryProgress:
    category: str
    count: int
    average_streak: float
    percent: int
    forming: int
    mastered: int


def _check_streak(streak) -> None:
    if isinstance(streak, bool) or not isinstance(streak, numbers.Real):
        raise InvalidInputError(f"Streak must be a number, got {streak!r}")
    if math.isnan(streak) or streak < 0:
        raise InvalidInputError(f"Streak must be >= 0, got {streak!r}")


def formation_stage(streak) -> str:
    """
    Starting [0,7), Initial [7,21), Strengthening [21,45),
    Automaticity [45,67), Mastered [67,inf).
    """
    _check_streak(streak)
    label = STAGES[0][0]
    for name, start in STAGES:
        if streak >= start:
            label = name
    return label


def formation_progress(streak) -> FormationProgress:
    _check_streak(streak)
    stage = formation_stage(streak)
    next_stage = None
    days_to_next = 0
    for name, start in STAGES:
        if streak < start:
            next_stage = name
            days_to_next = math.ceil(start - streak)
            break
    return FormationProgress(
        stage=stage,
        percent=round_half_up(min(streak / FORMATION_DAYS * 100, 100)),
        next_stage=next_stage,
        days_to_next=days_to_next,
    )


def formation_days(today: Optional[date] = None) -> List[date]:
    """
    The 67 days ending today, oldest first.
    """
    today = dates.day_key(today) if today is not None else dates.today()
    return dates.trailing_days(today, FORMATION_DAYS)


def formation_window(index: CompletionIndex, today: Optional[date] = None) -> List[StageStats]:
    """
    Completed / total / percentage per stage of the 67-day window.
    """
    days = formation_days(today)
    out = []
    for name, start, end in WINDOW_STAGES:
        stage_days = days[start:end]
        completed = sum(1 for d in stage_days if index.get(d, False))
        out.append(
            StageStats(
                name=name,
                first_day=stage_days[0] if stage_days else None,
                last_day=stage_days[-1] if stage_days else None,
                completed=completed,
                total=len(stage_days),
                percentage=percentage(completed, len(stage_days)),
            )
        )
    return out


def in_formation(statuses: Iterable[TrackableStatus]) -> List[TrackableStatus]:
    return [s for s in statuses if s.current_streak < FORMATION_DAYS]


def category_progress(statuses: Iterable[TrackableStatus]) -> Dict[str, CategoryProgress]:
    by_cat: Dict[str, List[TrackableStatus]] = {c: [] for c in CATEGORIES}
    for s in statuses:
        if s.category in by_cat:
            by_cat[s.category].append(s)

    out = {}
    for cat, items in by_cat.items():
        avg = sum(s.current_streak for s in items) / len(items) if items else 0.0
        out[cat] = CategoryProgress(
            category=cat,
            count=len(items),
            average_streak=avg,
            percent=round_half_up(min(avg / FORMATION_DAYS * 100, 100)),
            forming=sum(1 for s in items if s.current_streak >= FORMING_STREAK),
            mastered=sum(1 for s in items if s.current_streak >= FORMATION_DAYS),
        )
    return out
