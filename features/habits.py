import logging
import random
from datetime import datetime

from app_utils.storage import (
    Habit,
    MonthSnapshot,
    SnapshotError,
    load_snapshot,
    save_snapshot,
)

logger = logging.getLogger(__name__)

DEFAULT_HABITS = [
    (1, "Meditation", "#8ecae6"),
    (2, "Workout", "#219ebc"),
    (3, "Read 30 min", "#ffd166"),
    (4, "No sugar", "#06d6a0"),
]

PALETTE = ["#8ecae6", "#219ebc", "#ffd166", "#06d6a0", "#f783ac", "#bdb2ff", "#ffb4a2"]


def default_snapshot() -> MonthSnapshot:
    habits = [Habit(id=i, name=n, color=c) for i, n, c in DEFAULT_HABITS]
    return MonthSnapshot(habits=habits, data={h.id: {} for h in habits})


def shift_month(year: int, month: int, delta: int):
    y, m = divmod(year * 12 + (month - 1) + delta, 12)
    return y, m + 1


class HabitStore:
    """
    Owns the snapshot of the active month. Every mutation writes the whole
    snapshot back through `storage` (anything with get(key) / set(key, value)).
    """

    def __init__(self, storage, year: int, month: int, rng=None, clock=datetime.now):
        self.storage = storage
        self.rng = rng or random.Random()
        self.clock = clock
        self.revision = 0
        self._last_id = 0
        self.year = year
        self.month = month
        self.snapshot = self.load_month(year, month)

    @property
    def habits(self):
        return self.snapshot.habits

    @property
    def data(self):
        return self.snapshot.data

    # -------- Months --------
    def load_month(self, year: int, month: int) -> MonthSnapshot:
        self.year, self.month = year, month
        try:
            snapshot = load_snapshot(self.storage, year, month)
        except SnapshotError as exc:
            logger.warning("Unreadable snapshot for %d-%02d, starting over: %s", year, month, exc)
            snapshot = None

        if snapshot is None:
            logger.info("Initialising %d-%02d with default habits", year, month)
            snapshot = default_snapshot()
            save_snapshot(self.storage, year, month, snapshot)

        self.snapshot = snapshot
        # orphan keys in data count too, a new habit must never pick up old entries
        self._last_id = max([self._last_id] + [h.id for h in snapshot.habits] + list(snapshot.data))
        self.revision += 1
        return snapshot

    def change_month(self, delta: int) -> MonthSnapshot:
        year, month = shift_month(self.year, self.month, delta)
        return self.load_month(year, month)

    # -------- Mutations --------
    def toggle_day(self, habit_id: int, day: int) -> bool:
        if not any(h.id == habit_id for h in self.habits):
            logger.info("Toggling day %d for unknown habit %s", day, habit_id)
            self._last_id = max(self._last_id, habit_id)
        entries = self.data.setdefault(habit_id, {})
        entries[day] = not entries.get(day, False)
        self._persist()
        return entries[day]

    def add_habit(self, name: str) -> Habit:
        name = (name or "").strip()
        if not name:
            raise ValueError("habit name must not be empty")
        habit = Habit(id=self._next_id(), name=name, color=self.rng.choice(PALETTE))
        self.habits.append(habit)
        self.data[habit.id] = {}
        logger.info("Added habit %r (%d) to %d-%02d", habit.name, habit.id, self.year, self.month)
        self._persist()
        return habit

    def remove_habit(self, habit_id: int):
        before = len(self.habits)
        self.snapshot.habits = [h for h in self.habits if h.id != habit_id]
        self.data.pop(habit_id, None)
        if len(self.habits) != before:
            logger.info("Removed habit %d from %d-%02d", habit_id, self.year, self.month)
        self._persist()

    # -------- Internals --------
    def _next_id(self) -> int:
        candidate = int(self.clock().timestamp() * 1000)
        self._last_id = max(candidate, self._last_id + 1)
        return self._last_id

    def _persist(self):
        save_snapshot(self.storage, self.year, self.month, self.snapshot)
        self.revision += 1
