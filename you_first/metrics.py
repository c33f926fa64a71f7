"""
Metrics and date logic: completion index, streaks, success rates.
"""

from __future__ import annotations

import logging
import math
from datetime import date, timedelta
from typing import Dict, Iterable, Optional

import pandas as pd

from you_first import dates
from you_first.models import LogInput, Trackable, TrackableStatus, as_entries

logger = logging.getLogger(__name__)

CompletionIndex = Dict[date, bool]


def build_index(entries: Iterable[LogInput], entity_id=None) -> CompletionIndex:
    """
    day -> completed, for one trackable when entity_id is given.

    Several rows for the same day are OR-ed: the day counts as completed
    if any of them is completed.
    """
    index: CompletionIndex = {}
    for e in as_entries(entries):
        if entity_id is not None and e.entity_id != entity_id:
            continue
        index[e.day] = index.get(e.day, False) or e.completed
    return index


def is_completed(index: CompletionIndex, d: date) -> bool:
    return index.get(d, False)


def current_streak(index: CompletionIndex, today: Optional[date] = None) -> int:
    """
    Count consecutive completed days ending at today.
    A day without any entry is a gap.
    """
    cur = dates.day_key(today) if today is not None else dates.today()
    streak = 0
    while index.get(cur, False):
        streak += 1
        cur -= timedelta(days=1)
    return streak


def longest_streak(index: CompletionIndex) -> int:
    completed = sorted(d for d, done in index.items() if done)
    if not completed:
        return 0
    longest = 1
    run = 1
    for prev, cur in zip(completed, completed[1:]):
        if cur - prev == timedelta(days=1):
            run += 1
            longest = max(longest, run)
        else:
            run = 1
    return longest


def completed_in_window(index: CompletionIndex, end: date, days: int) -> int:
    """
    Completed days among the `days` days ending at `end`.
    """
    return sum(1 for d in dates.trailing_days(end, days) if index.get(d, False))


def success_rate(index: CompletionIndex, start: date, end: date) -> float:
    """
    done / days for the inclusive window.
    """
    window = dates.daterange(start, end)
    if not window:
        return 0.0
    done = sum(1 for d in window if index.get(d, False))
    return done / len(window)


def status_for(trackable: Trackable, entries: Iterable[LogInput], today: Optional[date] = None) -> TrackableStatus:
    today = dates.day_key(today) if today is not None else dates.today()
    index = build_index(entries, entity_id=trackable.id)
    status = TrackableStatus(
        trackable=trackable,
        current_streak=current_streak(index, today),
        longest_streak=longest_streak(index),
        completed_today=is_completed(index, today),
        completed_last_7=completed_in_window(index, today, 7),
    )
    logger.debug(
        "status for trackable %s: current=%d longest=%d today=%s",
        trackable.id,
        status.current_streak,
        status.longest_streak,
        status.completed_today,
    )
    return status


def heatmap_frame(index: CompletionIndex, month_start: date, month_end: date) -> pd.DataFrame:
    """
    Build a dataframe for a calendar-like heatmap for one month.

    Columns:
      - day (date)
      - day_num (int, None outside the month)
      - done (0/1, None outside the month)
      - dow (0..6)
      - week (int, week index within the month)
    """
    rows = []
    # Align weeks to Monday for a stable calendar layout
    first_monday = month_start - timedelta(days=month_start.weekday())
    for d in dates.daterange(first_monday, month_end):
        in_month = month_start <= d <= month_end
        rows.append(
            {
                "day": d,
                "day_num": d.day if in_month else None,
                "done": int(index.get(d, False)) if in_month else None,
                "dow": d.weekday(),
                "week": (d - first_monday).days // 7,
            }
        )
    return pd.DataFrame(rows)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def percentage(part: float, whole: float) -> int:
    """
    part / whole as a rounded percentage, 0 when whole is 0.
    """
    if not whole:
        return 0
    return round_half_up(part / whole * 100)
