"""
Formation page

The 67-day formation journey for one trackable: current stage, the per-stage
completion over the last 67 days, and a month heatmap.
"""

from __future__ import annotations

import altair as alt
import pandas as pd
import streamlit as st

from you_first import db, init_db
from you_first.dates import today as local_today
from you_first.formation import (
    WINDOW_STAGES,
    formation_days,
    formation_progress,
    formation_window,
    in_formation,
)
from you_first.log import setup_logging
from you_first.metrics import build_index, heatmap_frame, status_for
from you_first.models import Trackable
from you_first.ui_helpers import app_header

setup_logging()
init_db()
st.set_page_config(page_title="Formation", page_icon="🌱", layout="wide")

STAGE_COLORS = {"Stage 1": "#fed7aa", "Stage 2": "#bfdbfe", "Stage 3": "#bbf7d0", "Bonus": "#e9d5ff"}


def journey_frame(index, today) -> pd.DataFrame:
    stage_of = {i: name for name, start, end in WINDOW_STAGES for i in range(start, end)}
    rows = []
    for n, d in enumerate(formation_days(today), start=1):
        stage = stage_of[n - 1]
        rows.append(
            {
                "n": n,
                "day": d,
                "row": (n - 1) // 10,
                "col": (n - 1) % 10,
                "stage": stage,
                "done": "Completed" if index.get(d, False) else stage,
            }
        )
    return pd.DataFrame(rows)


def render_journey(df: pd.DataFrame) -> None:
    domain = list(STAGE_COLORS) + ["Completed"]
    colors = list(STAGE_COLORS.values()) + ["#10b981"]
    chart = (
        alt.Chart(df)
        .mark_rect(cornerRadius=3)
        .encode(
            x=alt.X("col:O", axis=None),
            y=alt.Y("row:O", axis=None),
            color=alt.Color("done:N", scale=alt.Scale(domain=domain, range=colors), title=None),
            tooltip=["n:Q", "day:T", "stage:N", "done:N"],
        )
    )
    st.altair_chart(chart, use_container_width=True)


def render_heatmap(index, today) -> None:
    month_start = today.replace(day=1)
    df = heatmap_frame(index, month_start, today)
    df = df[df["day_num"].notna()]
    chart = (
        alt.Chart(df)
        .mark_rect()
        .encode(
            x=alt.X("dow:O", title=None, axis=alt.Axis(labelExpr="['Mon','Tue','Wed','Thu','Fri','Sat','Sun'][datum.value]")),
            y=alt.Y("week:O", title=None),
            color=alt.Color("done:Q", scale=alt.Scale(domain=[0, 1], range=["#e5e7eb", "#10b981"]), legend=None),
            tooltip=["day:T", "done:Q"],
        )
    )
    st.altair_chart(chart, use_container_width=True)


def main() -> None:
    app_header("Formation", "67 days from first check-in to automatic.")

    today = local_today()
    trackables = [Trackable.from_row(r) for r in db.list_trackables()]
    if not trackables:
        st.info("Nothing tracked yet.")
        return

    logs = db.list_logs()
    statuses = [status_for(t, logs, today) for t in trackables]
    forming = in_formation(statuses)
    if not forming:
        st.success("All mastered! Every trackable has reached 67 days.")

    by_id = {s.trackable.id: s for s in statuses}
    picked = st.selectbox("Trackable", options=list(by_id), format_func=lambda i: by_id[i].trackable.name)
    status = by_id[picked]
    index = build_index(logs, entity_id=status.trackable.id)

    progress = formation_progress(status.current_streak)
    c1, c2, c3 = st.columns(3)
    c1.metric("Streak", f"{status.current_streak}/67")
    c2.metric("Stage", progress.stage)
    if progress.next_stage:
        c3.metric("Next stage", progress.next_stage, f"{progress.days_to_next} days")
    else:
        c3.metric("Next stage", "—")
    st.progress(progress.percent / 100)

    st.divider()
    st.markdown("#### 67-day journey")
    render_journey(journey_frame(index, today))

    cols = st.columns(4)
    for col, stats in zip(cols, formation_window(index, today)):
        with col:
            st.write(f"**{stats.name}**")
            st.metric("Completed", f"{stats.completed}/{stats.total}", f"{stats.percentage}%", delta_color="off")

    st.divider()
    st.markdown("#### This month")
    render_heatmap(index, today)


if __name__ == "__main__":
    main()
