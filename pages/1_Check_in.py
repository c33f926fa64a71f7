"""
Check-in page

Toggle trackables done for a selected date. The default is today, but you can
backfill earlier days as well.
"""

from __future__ import annotations

import streamlit as st

from you_first import db, init_db
from you_first.dates import today
from you_first.log import setup_logging
from you_first.metrics import build_index, is_completed
from you_first.ui_helpers import app_header, category_label, toggle_with_feedback

setup_logging()
init_db()
st.set_page_config(page_title="Check-in", page_icon="🗓️", layout="wide")


def main() -> None:
    app_header("Check-in", "Mark habits, rules and goal steps as done.")

    trackables = db.list_trackables()
    if not trackables:
        st.info("Nothing tracked yet.")
        return

    chosen = st.date_input("Date", value=today(), max_value=today())

    st.divider()
    st.write(f"### {chosen.isoformat()}")

    for t in trackables:
        index = build_index(db.list_logs_for_trackable(t["id"]))
        done = is_completed(index, chosen)

        with st.container(border=True):
            left, right = st.columns([0.75, 0.25])
            with left:
                st.write(f"**{t['name']}**")
                st.caption(f"{category_label(t['category'])} · {t['kind']}")
                if t.get("description"):
                    st.caption(t["description"])
            with right:
                label = "Undo" if done else "Mark done"
                if st.button(label, key=f"toggle_{t['id']}"):
                    if toggle_with_feedback(t["id"], chosen):
                        st.rerun()


if __name__ == "__main__":
    main()
