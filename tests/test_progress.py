from datetime import date

import pytest

from app_utils.progress import (
    daily_aggregate_percent,
    days_elapsed,
    days_in_month,
    habit_full_month_percent,
    habit_month_percent,
    percent,
    week_band,
)
from app_utils.storage import Habit


@pytest.mark.parametrize("year,month,days", [
    (2024, 2, 29),
    (2023, 2, 28),
    (2024, 4, 30),
    (2024, 1, 31),
    (1900, 2, 28),
    (2000, 2, 29),
])
def test_days_in_month(year, month, days):
    assert days_in_month(year, month) == days


def test_days_elapsed_for_current_and_other_months():
    today = date(2024, 3, 10)
    assert days_elapsed(2024, 3, today) == 10
    assert days_elapsed(2024, 2, today) == 29
    assert days_elapsed(2024, 4, today) == 30


def test_month_percent_with_no_completions_is_zero():
    assert habit_month_percent(1, {}, 2024, 4, date(2024, 6, 1)) == 0
    assert habit_month_percent(1, {1: {}}, 2024, 4, date(2024, 6, 1)) == 0


def test_month_percent_all_elapsed_days_done():
    data = {1: {d: True for d in range(1, 11)}}
    assert habit_month_percent(1, data, 2024, 3, date(2024, 3, 10)) == 100


def test_month_percent_ignores_days_after_today():
    data = {1: {1: True, 2: True, 20: True}}
    # 2 of 4 elapsed days
    assert habit_month_percent(1, data, 2024, 3, date(2024, 3, 4)) == 50


def test_month_percent_past_month_uses_full_length():
    data = {1: {d: True for d in range(1, 16)}}
    assert habit_month_percent(1, data, 2024, 4, date(2024, 10, 1)) == 50


def test_full_month_percent_ignores_today():
    data = {1: {1: True, 2: True}}
    assert habit_full_month_percent(1, data, 2024, 3) == 6
    assert habit_month_percent(1, data, 2024, 3, date(2024, 3, 2)) == 100


def test_percent_rounds_halves_up_and_guards_zero():
    assert percent(1, 8) == 13
    assert percent(1, 3) == 33
    assert percent(2, 3) == 67
    assert percent(0, 0) == 0


def test_daily_aggregate_percent():
    habits = [Habit(i, f"h{i}", "#8ecae6") for i in range(1, 5)]
    data = {1: {5: True}, 2: {5: True}, 3: {5: False}}
    assert daily_aggregate_percent(5, habits, data) == 50
    assert daily_aggregate_percent(6, habits, data) == 0


def test_daily_aggregate_percent_without_habits():
    assert daily_aggregate_percent(1, [], {1: {1: True}}) == 0


def test_daily_aggregate_ignores_orphan_entries():
    habits = [Habit(1, "a", "#8ecae6")]
    assert daily_aggregate_percent(1, habits, {99: {1: True}}) == 0


def test_week_band_month_starting_on_sunday():
    # September 2024 starts on a Sunday
    assert week_band(2024, 9, 1) == 0
    assert week_band(2024, 9, 7) == 0
    assert week_band(2024, 9, 8) == 1
    assert week_band(2024, 9, 30) == 4


def test_week_band_month_starting_midweek():
    # February 2023 starts on a Wednesday
    assert week_band(2023, 2, 1) == 0
    assert week_band(2023, 2, 4) == 0
    assert week_band(2023, 2, 5) == 1
