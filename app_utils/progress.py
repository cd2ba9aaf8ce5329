import calendar
import math
from datetime import date


def round_half_up(x: float) -> int:
    # 12.5 -> 13, unlike round()
    return int(math.floor(x + 0.5))


def percent(done: int, total: int) -> int:
    if total <= 0:
        return 0
    return round_half_up(done / total * 100)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def days_elapsed(year: int, month: int, today: date) -> int:
    if (today.year, today.month) == (year, month):
        return today.day
    return days_in_month(year, month)


def count_done(entries: dict, last_day: int) -> int:
    return sum(1 for d in range(1, last_day + 1) if entries.get(d))


def habit_month_percent(habit_id, data: dict, year: int, month: int, today: date) -> int:
    """Month-to-date completion: elapsed days for the current month, every day otherwise."""
    elapsed = days_elapsed(year, month, today)
    return percent(count_done(data.get(habit_id, {}), elapsed), elapsed)


def habit_full_month_percent(habit_id, data: dict, year: int, month: int) -> int:
    days = days_in_month(year, month)
    return percent(count_done(data.get(habit_id, {}), days), days)


def daily_aggregate_percent(day: int, habits, data: dict) -> int:
    done = sum(1 for h in habits if data.get(h.id, {}).get(day))
    return percent(done, len(habits))


def first_weekday(year: int, month: int) -> int:
    # Sunday = 0 .. Saturday = 6
    return (calendar.monthrange(year, month)[0] + 1) % 7


def week_band(year: int, month: int, day: int) -> int:
    return (first_weekday(year, month) + day - 1) // 7
