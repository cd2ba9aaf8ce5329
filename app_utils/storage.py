import json
import logging
import os
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from sqlalchemy import create_engine, text

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 1
HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


class SnapshotError(ValueError):
    """Stored snapshot is not valid JSON or not shaped like a month snapshot."""


@dataclass
class Habit:
    id: int
    name: str
    color: str


@dataclass
class MonthSnapshot:
    habits: List[Habit] = field(default_factory=list)
    data: Dict[int, Dict[int, bool]] = field(default_factory=dict)  # habit id -> day -> done


def storage_key(year: int, month: int) -> str:
    # month is 1..12, the stored key is zero-based
    return f"habits-{year}-{month - 1}"


# =========================
# Key-value backends
# =========================
class MemoryStore:
    def __init__(self, items=None):
        self.items = dict(items or {})

    def get(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set(self, key: str, value: str):
        self.items[key] = value


class SqlStore:
    def __init__(self, db_path):
        folder = os.path.dirname(db_path)
        if folder:
            os.makedirs(folder, exist_ok=True)
        self.engine = create_engine(f"sqlite:///{db_path}", echo=False)
        self.init_db()

    def init_db(self):
        with self.engine.begin() as conn:
            conn.execute(text("""
            CREATE TABLE IF NOT EXISTS kv (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            )
            """))

    def get(self, key: str) -> Optional[str]:
        with self.engine.begin() as conn:
            row = conn.execute(text("SELECT value FROM kv WHERE key = :key"), {"key": key}).fetchone()
        return row[0] if row else None

    def set(self, key: str, value: str):
        with self.engine.begin() as conn:
            conn.execute(text("""
                INSERT INTO kv(key, value) VALUES(:key, :value)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
            """), {"key": key, "value": value})


# =========================
# Snapshot codec
# =========================
def encode_snapshot(snapshot: MonthSnapshot) -> str:
    return json.dumps({
        "version": SNAPSHOT_VERSION,
        "habits": [{"id": h.id, "name": h.name, "color": h.color} for h in snapshot.habits],
        "data": {
            str(habit_id): {str(day): bool(done) for day, done in days.items()}
            for habit_id, days in snapshot.data.items()
        },
    })


def _int_key(raw, what):
    if isinstance(raw, bool):
        raise SnapshotError(f"{what} must be an integer, got {raw!r}")
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise SnapshotError(f"{what} must be an integer, got {raw!r}") from None


def _decode_habit(item) -> Habit:
    if not isinstance(item, dict):
        raise SnapshotError(f"habit entry must be an object, got {type(item).__name__}")
    habit_id = item.get("id")
    name = item.get("name")
    color = item.get("color")
    if isinstance(habit_id, bool) or not isinstance(habit_id, int):
        raise SnapshotError(f"habit id must be an integer, got {habit_id!r}")
    if not isinstance(name, str) or not name.strip():
        raise SnapshotError(f"habit {habit_id} has no name")
    if not isinstance(color, str) or not HEX_COLOR.match(color):
        raise SnapshotError(f"habit {habit_id} has a bad color {color!r}")
    return Habit(id=habit_id, name=name, color=color)


def decode_snapshot(raw: str) -> MonthSnapshot:
    try:
        payload = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise SnapshotError(f"not valid JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise SnapshotError("snapshot must be a JSON object")
    version = payload.get("version", SNAPSHOT_VERSION)
    if version != SNAPSHOT_VERSION:
        raise SnapshotError(f"unsupported snapshot version {version!r}")

    raw_habits = payload.get("habits")
    if not isinstance(raw_habits, list):
        raise SnapshotError("'habits' must be a list")
    habits = [_decode_habit(item) for item in raw_habits]
    if len({h.id for h in habits}) != len(habits):
        raise SnapshotError("duplicate habit ids")

    raw_data = payload.get("data", {})
    if not isinstance(raw_data, dict):
        raise SnapshotError("'data' must be an object")
    data = {}
    for habit_key, days in raw_data.items():
        habit_id = _int_key(habit_key, "habit key")
        if not isinstance(days, dict):
            raise SnapshotError(f"days of habit {habit_id} must be an object")
        entries = {}
        for day_key, done in days.items():
            day = _int_key(day_key, "day key")
            if not isinstance(done, bool):
                raise SnapshotError(f"day {day} of habit {habit_id} must be true/false")
            entries[day] = done
        data[habit_id] = entries

    return MonthSnapshot(habits=habits, data=data)


def load_snapshot(store, year: int, month: int) -> Optional[MonthSnapshot]:
    """Returns None when nothing is stored; raises SnapshotError when unreadable."""
    raw = store.get(storage_key(year, month))
    if raw is None:
        return None
    return decode_snapshot(raw)


def save_snapshot(store, year: int, month: int, snapshot: MonthSnapshot):
    key = storage_key(year, month)
    store.set(key, encode_snapshot(snapshot))
    logger.debug("Saved %s (%d habits)", key, len(snapshot.habits))
