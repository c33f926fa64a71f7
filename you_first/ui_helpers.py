"""
UI helpers shared across pages (Streamlit).

Keeping this separate avoids repeating small formatting bits.
"""

from __future__ import annotations

import logging
import sqlite3

import streamlit as st

from you_first import db

logger = logging.getLogger(__name__)

CATEGORY_ICONS = {"mind": "🧠", "body": "💪", "soul": "🙏"}


def app_header(title: str, subtitle: str | None = None) -> None:
    st.title(title)
    if subtitle:
        st.caption(subtitle)


def category_label(category: str) -> str:
    icon = CATEGORY_ICONS.get(category, "⚡")
    return f"{icon} {category.title()}"


def toast_success(msg: str) -> None:
    st.toast(msg, icon="✅")


def toast_error(msg: str) -> None:
    logger.warning(msg)
    st.toast(msg, icon="⚠️")


def toggle_with_feedback(trackable_id: int, day) -> bool:
    """
    Toggle a check-in and toast the outcome. False when the write failed.
    """
    try:
        db.toggle_completion(trackable_id, day)
    except sqlite3.Error:
        logger.exception("Toggle failed for trackable %s", trackable_id)
        toast_error("Could not save the check-in.")
        return False
    toast_success("Saved")
    return True
