from datetime import date

import pandas as pd

from app_utils.progress import (
    daily_aggregate_percent,
    days_in_month,
    habit_full_month_percent,
    habit_month_percent,
)

HABIT_COL = "Habit"
PERCENT_COL = "Month %"


def day_columns(year: int, month: int):
    return [str(d) for d in range(1, days_in_month(year, month) + 1)]


def grid_frame(habits, data, year: int, month: int, today: date) -> pd.DataFrame:
    # one row per habit (indexed by id), one bool column per day
    days = day_columns(year, month)
    rows = []
    for h in habits:
        entries = data.get(h.id, {})
        row = {HABIT_COL: h.name}
        row.update({col: bool(entries.get(int(col), False)) for col in days})
        row[PERCENT_COL] = habit_month_percent(h.id, data, year, month, today)
        rows.append(row)
    return pd.DataFrame(rows, index=pd.Index([h.id for h in habits], name="id"),
                        columns=[HABIT_COL] + days + [PERCENT_COL])


def selected_days(grid: pd.DataFrame, cells):
    """
    Maps selected grid cells, given as (row position, column name), to
    (habit_id, day) pairs. Cells outside the day columns are skipped.
    """
    out = []
    for row, col in cells:
        col = str(col)
        if not col.isdigit() or col not in grid.columns:
            continue
        if not 0 <= int(row) < len(grid.index):
            continue
        out.append((int(grid.index[int(row)]), int(col)))
    return out


def daily_series(habits, data, year: int, month: int) -> pd.DataFrame:
    days = range(1, days_in_month(year, month) + 1)
    return pd.DataFrame({
        "day": list(days),
        "percent": [daily_aggregate_percent(d, habits, data) for d in days],
    })


def summary_frame(habits, data, year: int, month: int) -> pd.DataFrame:
    return pd.DataFrame(
        [{"id": h.id, "name": h.name, "color": h.color,
          "percent": habit_full_month_percent(h.id, data, year, month)} for h in habits],
        columns=["id", "name", "color", "percent"],
    )
