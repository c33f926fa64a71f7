from datetime import date, datetime, timedelta

import pandas as pd
import pytest

from you_first.errors import InvalidInputError
from you_first.metrics import (
    build_index,
    completed_in_window,
    current_streak,
    heatmap_frame,
    longest_streak,
    percentage,
    status_for,
    success_rate,
)
from you_first.models import CompletionLogEntry, Trackable

TODAY = date(2026, 3, 1)


def _days_back(*offsets: int) -> list[date]:
    return [TODAY - timedelta(days=o) for o in offsets]


def _entries(days, entity_id: int = 1, completed: bool = True) -> list[CompletionLogEntry]:
    return [CompletionLogEntry(entity_id, d, completed) for d in days]


# ---------------------------------------------------------------------------
# build_index
# ---------------------------------------------------------------------------


def test_index_filters_by_entity():
    entries = _entries(_days_back(0, 1), entity_id=1) + _entries(_days_back(2), entity_id=2)
    index = build_index(entries, entity_id=1)
    assert set(index) == set(_days_back(0, 1))


def test_index_same_day_any_completed_wins():
    done = CompletionLogEntry(1, TODAY, True)
    undone = CompletionLogEntry(1, TODAY, False)
    assert build_index([done, undone]) == {TODAY: True}
    assert build_index([undone, done]) == {TODAY: True}
    assert build_index([undone, undone]) == {TODAY: False}


def test_index_from_storage_rows():
    rows = [
        {"trackable_id": 1, "day": "2026-03-01", "completed": 1, "note": ""},
        {"trackable_id": 1, "day": "2026-02-28", "completed": 0, "note": ""},
    ]
    assert build_index(rows) == {date(2026, 3, 1): True, date(2026, 2, 28): False}


# ---------------------------------------------------------------------------
# streaks
# ---------------------------------------------------------------------------


def test_no_entries():
    index = build_index([])
    assert current_streak(index, TODAY) == 0
    assert longest_streak(index) == 0


@pytest.mark.parametrize("n", [1, 2, 7, 30])
def test_last_n_days(n):
    index = build_index(_entries(_days_back(*range(n))))
    assert current_streak(index, TODAY) == n
    assert longest_streak(index) == n


def test_gap_in_the_middle():
    # completed today..3 days ago, gap 4 days ago, completed 5..9 days ago
    index = build_index(_entries(_days_back(0, 1, 2, 3, 5, 6, 7, 8, 9)))
    assert current_streak(index, TODAY) == 4
    assert longest_streak(index) == 5


def test_gap_today():
    index = build_index(_entries(_days_back(1, 2, 3, 4, 5)))
    assert current_streak(index, TODAY) == 0
    assert longest_streak(index) == 5


def test_incomplete_entry_today_is_a_gap():
    entries = _entries(_days_back(1, 2)) + _entries(_days_back(0), completed=False)
    index = build_index(entries)
    assert current_streak(index, TODAY) == 0
    assert longest_streak(index) == 2


def test_single_day():
    index = build_index(_entries(_days_back(0)))
    assert current_streak(index, TODAY) == 1
    assert longest_streak(index) == 1

    index = build_index(_entries(_days_back(3)))
    assert current_streak(index, TODAY) == 0
    assert longest_streak(index) == 1


def test_unordered_input():
    index = build_index(_entries(_days_back(9, 0, 8, 1, 2, 7)))
    assert current_streak(index, TODAY) == 3
    assert longest_streak(index) == 3


def test_streaks_do_not_mutate_index():
    index = build_index(_entries(_days_back(0, 1, 2, 4, 5)))
    before = dict(index)
    first = (current_streak(index, TODAY), longest_streak(index))
    second = (current_streak(index, TODAY), longest_streak(index))
    assert first == second == (3, 3)
    assert index == before


# ---------------------------------------------------------------------------
# rates and windows
# ---------------------------------------------------------------------------


def test_completed_in_window():
    index = build_index(_entries(_days_back(0, 2, 6, 7, 10)))
    assert completed_in_window(index, TODAY, 7) == 3


def test_success_rate():
    index = build_index(_entries(_days_back(0, 1)))
    assert success_rate(index, TODAY - timedelta(days=3), TODAY) == pytest.approx(0.5)
    assert success_rate(index, TODAY, TODAY - timedelta(days=1)) == 0.0


def test_percentage_guards_zero():
    assert percentage(3, 0) == 0
    assert percentage(1, 2) == 50
    assert percentage(1, 3) == 33
    assert percentage(2, 3) == 67


def test_heatmap_frame_aligns_weeks_to_monday():
    # 2026-03-01 is a Sunday, so the grid starts on Monday 2026-02-23
    index = build_index(_entries([date(2026, 3, 1), date(2026, 3, 2)]))
    df = heatmap_frame(index, date(2026, 3, 1), date(2026, 3, 31))

    assert len(df) == 37
    assert df.iloc[0]["day"] == date(2026, 2, 23)
    assert pd.isna(df.iloc[0]["done"])

    first = df[df["day"] == date(2026, 3, 1)].iloc[0]
    assert first["dow"] == 6
    assert first["week"] == 0
    assert first["done"] == 1

    second = df[df["day"] == date(2026, 3, 2)].iloc[0]
    assert second["week"] == 1
    assert df[df["day"] == date(2026, 3, 3)].iloc[0]["done"] == 0


def test_status_for():
    habit = Trackable(id=1, name="Read", category="mind")
    entries = _entries(_days_back(0, 1, 2, 5, 6, 7, 8)) + _entries(_days_back(0, 1), entity_id=2)
    status = status_for(habit, entries, TODAY)

    assert status.trackable is habit
    assert status.current_streak == 3
    assert status.longest_streak == 4
    assert status.completed_today is True
    assert status.completed_last_7 == 5
    assert status.category == "mind"


# ---------------------------------------------------------------------------
# datetime inputs are reduced to calendar days
# ---------------------------------------------------------------------------


def test_entry_day_drops_time_of_day():
    entry = CompletionLogEntry(1, datetime(2026, 3, 1, 8, 30))
    assert type(entry.day) is date
    assert entry.day == TODAY


def test_entry_day_accepts_iso_string():
    assert CompletionLogEntry(1, "2026-03-01T21:10:00").day == TODAY


def test_entry_day_rejects_garbage():
    with pytest.raises(InvalidInputError):
        CompletionLogEntry(1, "soon")


def test_datetime_entry_counts_for_its_day():
    index = build_index([CompletionLogEntry(1, datetime(2026, 3, 1, 8, 30))])
    assert current_streak(index, TODAY) == 1


def test_mixed_date_and_datetime_entries():
    index = build_index([
        CompletionLogEntry(1, date(2026, 2, 28)),
        CompletionLogEntry(1, datetime(2026, 3, 1, 8, 30)),
    ])
    assert longest_streak(index) == 2
    assert current_streak(index, TODAY) == 2


def test_today_as_datetime():
    assert current_streak({TODAY: True}, datetime(2026, 3, 1, 12, 0)) == 1

    status = status_for(Trackable(id=1, name="Read"), _entries(_days_back(0, 1)), datetime(2026, 3, 1, 23, 0))
    assert (status.current_streak, status.completed_today) == (2, True)


def test_row_without_completed_flag_counts_as_done():
    assert build_index([{"trackable_id": 1, "day": "2026-03-01"}]) == {TODAY: True}
