"""
You First - Dashboard

Run with:
    streamlit run You_First.py
"""

from __future__ import annotations

from datetime import date, datetime, timedelta

import altair as alt
import pandas as pd
import streamlit as st

from you_first import db, init_db
from you_first.dates import daterange, today as local_today
from you_first.formation import category_progress, formation_progress
from you_first.log import setup_logging
from you_first.metrics import build_index, status_for, success_rate
from you_first.models import Trackable
from you_first.scoring import discipline_summary, health_score, radar_scores
from you_first.ui_helpers import app_header, category_label, toggle_with_feedback


st.set_page_config(
    page_title="You First",
    page_icon="✅",
    layout="wide",
)

setup_logging()
init_db()


def parse_hhmm(text: str) -> tuple[int, int]:
    try:
        hh, mm = text.strip().split(":")
        return int(hh), int(mm)
    except ValueError:
        return 18, 0


def month_bounds(d: date) -> tuple[date, date]:
    start = d.replace(day=1)
    # next month start
    if start.month == 12:
        nm = start.replace(year=start.year + 1, month=1, day=1)
    else:
        nm = start.replace(month=start.month + 1, day=1)
    end = nm - timedelta(days=1)
    return start, end


@st.cache_data(ttl=10)
def load_trackables():
    return db.list_trackables()


@st.cache_data(ttl=10)
def load_logs():
    return db.list_logs()


def daily_progress_frame(trackables: list[Trackable], logs: list[dict], month_start: date, month_end: date) -> pd.DataFrame:
    """
    Build a per-day frame for the month:
      - tracked, done
      - cumulative totals
    """
    indexes = [build_index(logs, entity_id=t.id) for t in trackables]
    days = daterange(month_start, month_end)
    df = pd.DataFrame(
        {
            "day": days,
            "tracked": [len(indexes)] * len(days),
            "done": [sum(1 for ix in indexes if ix.get(d, False)) for d in days],
        }
    )
    df["cum_tracked"] = df["tracked"].cumsum()
    df["cum_done"] = df["done"].cumsum()
    df["completion_rate"] = df.apply(lambda r: (r["done"] / r["tracked"]) if r["tracked"] else 0.0, axis=1)
    return df


def render_month_progress(df: pd.DataFrame) -> None:
    chart_df = df.copy()
    chart_df["day"] = pd.to_datetime(chart_df["day"])

    base = alt.Chart(chart_df).encode(
        x=alt.X("day:T", title="Date")
    )

    done_line = base.mark_line().encode(
        y=alt.Y("cum_done:Q", title="Cumulative completions"),
        tooltip=["day:T", "done:Q", "cum_done:Q", "tracked:Q", "cum_tracked:Q"],
    )

    tracked_line = base.mark_line(strokeDash=[4, 4]).encode(
        y=alt.Y("cum_tracked:Q"),
        tooltip=["day:T", "tracked:Q", "cum_tracked:Q"],
    )

    st.altair_chart((tracked_line + done_line).interactive(), use_container_width=True)


def render_health(statuses) -> None:
    st.subheader("Health score")
    score = health_score(statuses)
    if not score.has_data:
        st.info(score.message)
        return

    c0, c1, c2, c3, c4 = st.columns(5)
    c0.metric("Overall", f"{score.overall}", score.grade)
    c1.metric("Consistency", f"{score.consistency}%", help="7-day rate")
    c2.metric("Momentum", f"{score.momentum}%", help="Streak power")
    c3.metric("Balance", f"{score.balance}%", help="Mind, Body, Soul")
    c4.metric("Engagement", f"{score.engagement}%", help="Completed today")
    for rec in score.recommendations:
        st.caption(f"• {rec}")


def render_ecosystem(statuses) -> None:
    st.subheader("Habit ecosystem")
    radar = radar_scores(statuses)
    discipline = discipline_summary(statuses)

    left, right = st.columns([1.4, 0.6], gap="large")
    with left:
        df = pd.DataFrame(radar.axes(), columns=["axis", "score"])
        chart = (
            alt.Chart(df)
            .mark_bar()
            .encode(
                x=alt.X("score:Q", scale=alt.Scale(domain=[0, 100]), title=None),
                y=alt.Y("axis:N", sort=None, title=None),
                tooltip=["axis:N", "score:Q"],
            )
        )
        st.altair_chart(chart, use_container_width=True)
    with right:
        st.metric("Ecosystem", f"{radar.overall}", radar.grade, delta_color="off")
        st.markdown("#### Rules")
        st.caption(f"Active: {discipline.active} | Kept today: {discipline.kept_today}")
        if discipline.weakest_streak > 0:
            st.caption(f"{discipline.weakest_streak} day streak")
        elif discipline.active:
            st.caption("Build streak")


def render_today(trackables: list[Trackable], statuses, logs: list[dict], today: date) -> None:
    st.subheader("Today")

    if not trackables:
        st.info("Nothing tracked yet.")
        return

    # Reminder banner (only when something is still open)
    reminder = db.get_setting("reminder_time", "18:00")
    hh, mm = parse_hhmm(reminder)
    remind_dt = datetime.combine(today, datetime.min.time()).replace(hour=hh, minute=mm)
    open_items = sum(1 for s in statuses if not s.completed_today)
    if open_items > 0 and datetime.now() >= remind_dt:
        st.warning(f"Reminder: {open_items} item(s) still open today. (Settings → reminder time: {reminder})")

    col1, col2 = st.columns([1.2, 1.0], gap="large")

    with col1:
        st.markdown("#### Tracked")
        for s in statuses:
            t = s.trackable
            left, right = st.columns([0.75, 0.25])
            with left:
                st.write(f"**{t.name}**")
                st.caption(f"{category_label(t.category)} · {t.kind}")
            with right:
                label = "Done ✅" if s.completed_today else "Mark done"
                if st.button(label, key=f"done_{t.id}"):
                    if toggle_with_feedback(t.id, today):
                        load_logs.clear()
                        st.rerun()

    with col2:
        st.markdown("#### Quick stats")
        for s in statuses:
            index = build_index(logs, entity_id=s.trackable.id)
            rate_28 = success_rate(index, today - timedelta(days=27), today)
            progress = formation_progress(s.current_streak)
            st.write(f"**{s.trackable.name}**")
            st.caption(
                f"Streak: {s.current_streak} | Best: {s.longest_streak} | "
                f"{progress.stage} | 28-day: {rate_28:.0%}"
            )
            st.divider()


def render_categories(statuses) -> None:
    st.subheader("67-day formation by category")
    cols = st.columns(3)
    for col, cp in zip(cols, category_progress(statuses).values()):
        with col:
            st.write(f"**{category_label(cp.category)}** ({cp.count})")
            st.progress(cp.percent / 100, text=f"Avg: {cp.average_streak:.0f}/67 days")
            st.caption(f"Forming: {cp.forming} | Mastered: {cp.mastered}")


def main() -> None:
    app_header("You First", "Track habits, rules and goals. Watch streaks turn into habits.")

    today = local_today()
    trackables = [Trackable.from_row(r) for r in load_trackables()]
    logs = load_logs()
    statuses = [status_for(t, logs, today) for t in trackables]

    render_health(statuses)

    if statuses:
        st.divider()
        render_ecosystem(statuses)

    st.divider()
    render_today(trackables, statuses, logs, today)

    st.divider()
    render_categories(statuses)

    # Month selector (for the progress chart)
    st.divider()
    st.subheader("This month")
    month_pick = st.date_input("Month", value=today, help="Pick any day in the month you want to review.")
    month_start, month_end = month_bounds(month_pick)
    if trackables:
        df = daily_progress_frame(trackables, logs, month_start, month_end)
        total_tracked = int(df["tracked"].sum())
        total_done = int(df["done"].sum())
        rate = (total_done / total_tracked) if total_tracked else 0.0

        c1, c2, c3 = st.columns(3)
        c1.metric("Completions", f"{total_done}")
        c2.metric("Tracked days", f"{total_tracked}")
        c3.metric("Completion rate", f"{rate:.0%}")

        render_month_progress(df)
    else:
        st.info("Add something to track to see progress for the month.")


if __name__ == "__main__":
    main()
