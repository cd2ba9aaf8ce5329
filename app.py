# app.py
# Run:
#   streamlit run app.py
#
# Monthly habit grid: tick days per habit, watch the month-to-date percent and
# the daily completion chart. Each month is saved on its own in data/habits.db.

import html
import logging
import os
from datetime import date

import streamlit as st

from app_utils.logger import setup_logger
from app_utils.plots import WEEK_COLORS, daily_completion_chart, grid_css
from app_utils.storage import SqlStore
from features.habits import HabitStore
from features.insights import (
    HABIT_COL,
    PERCENT_COL,
    daily_series,
    day_columns,
    grid_frame,
    selected_days,
    summary_frame,
)

# =========================
# 0) APP CONFIG + THEME
# =========================
st.set_page_config(page_title="Habit Tracker", layout="wide", page_icon="✅")

APP_DIR = os.path.dirname(os.path.abspath(__file__))
DATA_DIR = os.path.join(APP_DIR, "data")
DB_PATH = os.path.join(DATA_DIR, "habits.db")
LOG_PATH = os.path.join(DATA_DIR, "habits.log")

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

CUSTOM_CSS = """
<style>
.block-container {padding-top: 1.2rem; padding-bottom: 2rem; max-width: 1400px;}
h1, h2, h3 {letter-spacing: -0.02em;}
.month-label {font-size: 1.3rem; font-weight: 700; text-align: center; padding-top: 0.3rem;}
.dot {display:inline-block; width:12px; height:12px; border-radius:6px; margin-right:8px;}
.legend {display:inline-block; width:12px; height:12px; border-radius:6px; margin-right:6px;}
.small {opacity: 0.85; font-size: 0.92rem;}
</style>
"""
st.markdown(CUSTOM_CSS, unsafe_allow_html=True)

setup_logger(LOG_PATH)
log = logging.getLogger("habit_tracker")

# =========================
# 1) SESSION STATE
# =========================
if "store" not in st.session_state:
    today = date.today()
    st.session_state["store"] = HabitStore(SqlStore(DB_PATH), today.year, today.month)
    log.info("Session started on %d-%02d", today.year, today.month)
if "show_help" not in st.session_state:
    st.session_state["show_help"] = False

store = st.session_state["store"]


def toggle_help():
    st.session_state["show_help"] = not st.session_state["show_help"]


# =========================
# 2) UI BLOCKS
# =========================
def header_block():
    cols = st.columns([3, 0.5, 2, 0.5, 1])
    with cols[0]:
        st.title("Habit Tracker")
    with cols[1]:
        if st.button("◀", key="prev_month"):
            store.change_month(-1)
            st.rerun()
    with cols[2]:
        st.markdown(
            f'<div class="month-label">{MONTH_NAMES[store.month - 1]} {store.year}</div>',
            unsafe_allow_html=True,
        )
    with cols[3]:
        if st.button("▶", key="next_month"):
            store.change_month(1)
            st.rerun()
    with cols[4]:
        st.button("Hide help" if st.session_state["show_help"] else "Help", on_click=toggle_help, key="help")


def habit_panel():
    st.subheader("Habits")
    for h in list(store.habits):
        c1, c2 = st.columns([5, 1])
        with c1:
            st.markdown(
                f'<span class="dot" style="background:{h.color}"></span>{html.escape(h.name)}',
                unsafe_allow_html=True,
            )
        with c2:
            if st.button("✕", key=f"remove_{h.id}"):
                store.remove_habit(h.id)
                st.rerun()

    with st.form("add_habit", clear_on_submit=True):
        name = st.text_input("New habit name", placeholder="New habit name", label_visibility="collapsed")
        if st.form_submit_button("Add") and name.strip():
            store.add_habit(name)
            st.rerun()

    legend = "".join(
        f'<span class="legend" style="background:{c}"></span>{label}&nbsp;&nbsp;'
        for c, label in zip(WEEK_COLORS, ["Week 1", "Week 2", "Week 3", "Week 4+"])
    )
    st.markdown(f"<b>Weekly colors</b><br/>{legend}", unsafe_allow_html=True)

    if st.session_state["show_help"]:
        st.info(
            "**How it works:**\n"
            "- Click on a day cell to toggle completion for that habit.\n"
            "- Data is saved locally per month. Switch months with ◀ ▶.\n"
            "- Add or remove habits. Progress and chart update automatically."
        )


def habit_grid(today):
    year, month = store.year, store.month
    grid = grid_frame(store.habits, store.data, year, month, today)
    if grid.empty:
        st.info("No habits for this month yet. Add one on the left.")
        return

    colors = {h.id: h.color for h in store.habits}
    styled = grid.style.apply(lambda df: grid_css(df, colors, year, month), axis=None)

    column_config = {
        HABIT_COL: st.column_config.TextColumn("Habit \\ Day", width="medium"),
        PERCENT_COL: st.column_config.NumberColumn(PERCENT_COL, format="%d%%"),
    }
    for col in day_columns(year, month):
        column_config[col] = st.column_config.CheckboxColumn(col, width="small", help=f"Day {col}")

    # Styler colours only show on read-only columns; a selected cell is the toggle,
    # and the revision key drops that selection after every change
    event = st.dataframe(
        styled,
        key=f"grid_{year}_{month}_{store.revision}",
        hide_index=True,
        column_config=column_config,
        on_select="rerun",
        selection_mode="single-cell",
        width="stretch",
    )

    changes = selected_days(grid, event.selection.cells)
    if changes:
        for habit_id, day in changes:
            store.toggle_day(habit_id, day)
        st.rerun()


def progress_summary():
    st.markdown("#### Progress")
    summary = summary_frame(store.habits, store.data, store.year, store.month)
    if summary.empty:
        st.caption("Add a habit to see progress.")
        return
    for row in summary.itertuples(index=False):
        c1, c2, c3 = st.columns([1.4, 2, 0.6])
        with c1:
            st.markdown(
                f'<span class="dot" style="background:{row.color}"></span>{html.escape(row.name)}',
                unsafe_allow_html=True,
            )
        with c2:
            st.progress(int(row.percent))
        with c3:
            st.markdown(f"**{row.percent}%**")


def progress_chart():
    df = daily_series(store.habits, store.data, store.year, store.month)
    st.plotly_chart(daily_completion_chart(df), width="stretch")


# =========================
# 3) APP UI
# =========================
header_block()

left, right = st.columns([1, 3], gap="large")
with left:
    habit_panel()
with right:
    habit_grid(date.today())
    s1, s2 = st.columns([1, 1.4])
    with s1:
        progress_summary()
    with s2:
        progress_chart()

st.markdown("---")
st.caption(f"Saved locally in {DB_PATH}. To sync across devices, connect a backend.")
