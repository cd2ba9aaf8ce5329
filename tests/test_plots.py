from datetime import date

from app_utils.plots import WEEK_COLORS, daily_completion_chart, grid_css, hex_with_alpha, week_color
from app_utils.storage import Habit
from features.insights import HABIT_COL, daily_series, grid_frame


def test_hex_with_alpha():
    assert hex_with_alpha("#8ecae6", 0.45) == "rgba(142,202,230,0.45)"
    assert hex_with_alpha("#000000", 1) == "rgba(0,0,0,1)"


def test_week_color_cycles_bands():
    # September 2024 starts on a Sunday
    assert week_color(2024, 9, 1) == WEEK_COLORS[0]
    assert week_color(2024, 9, 8) == WEEK_COLORS[1]
    assert week_color(2024, 9, 29) == WEEK_COLORS[4]


def test_grid_css_tints_done_cells():
    habits = [Habit(1, "Meditation", "#8ecae6")]
    grid = grid_frame(habits, {1: {2: True}}, 2024, 9, date(2024, 9, 30))
    css = grid_css(grid, {1: "#8ecae6"}, 2024, 9)

    assert css.loc[1, "2"] == "background-color: rgba(142,202,230,0.45)"
    assert css.loc[1, "1"] == f"background-color: {WEEK_COLORS[0]}"
    assert css.loc[1, "9"] == f"background-color: {WEEK_COLORS[1]}"
    assert css.loc[1, HABIT_COL] == ""


def test_daily_completion_chart():
    habits = [Habit(1, "a", "#8ecae6"), Habit(2, "b", "#219ebc")]
    fig = daily_completion_chart(daily_series(habits, {1: {3: True}}, 2024, 4))
    trace = fig.data[0]
    assert list(trace.x) == list(range(1, 31))
    assert trace.y[2] == 50
    assert tuple(fig.layout.yaxis.range) == (0, 100)
