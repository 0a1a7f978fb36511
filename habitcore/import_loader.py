"""Import of habits from a backup database of another habit tracker."""

from __future__ import annotations

import os
import sqlite3
from contextlib import closing
from datetime import date, timedelta
from pathlib import Path

from .constants import INT_TRUE_VALUE
from .habit import Habit, HabitType
from .utility import current_date, to_int, to_int32, to_int64, to_str

DB_FILENAME = "backup.db"
HABITS_TABLE_NAME = "Habits"
DATES_TABLE_NAME = "Repetitions"

_EPOCH = date(1970, 1, 1)


def _seconds_from_millis(millis: int) -> int:
    seconds = abs(millis) // 1000
    return to_int32(seconds if millis >= 0 else -seconds)


def _normalize_status(value: int) -> int:
    if value == 2:
        return INT_TRUE_VALUE
    if value > 1000 and value % 1000 == 0:
        return value // 1000
    return value


def load_imported_habits(path: str | os.PathLike[str] = DB_FILENAME) -> list[Habit]:
    """Read habits and their daily statuses from a backup database.

    Each habit's start date becomes its earliest recorded day, or today if
    it has none. Raises ValueError if the expected tables are missing and
    KeyError if a repetition refers to an unknown habit.
    """
    uri = Path(path).resolve().as_uri() + "?mode=ro"
    with closing(sqlite3.connect(uri, uri=True)) as connection:
        tables = {
            row[0]
            for row in connection.execute(
                "SELECT name FROM sqlite_master WHERE type='table'"
            )
        }
        for table in (HABITS_TABLE_NAME, DATES_TABLE_NAME):
            if table not in tables:
                raise ValueError(f"no table named {table}, the file may be corrupted")

        habits: dict[int, Habit] = {}
        for habit_id, name, habit_type, target, unit in connection.execute(
            f"SELECT id, name, type, target_value, unit from {HABITS_TABLE_NAME} "
            "ORDER BY id;"
        ):
            habit = Habit(
                name=to_str(name),
                habit_type=HabitType(to_int(habit_type)),
                units=to_str(unit),
                daily_goal=to_int(target),
            )
            habit.id = to_int(habit_id)
            habits[habit.id] = habit

        today = current_date()
        earliest = {habit_id: today for habit_id in habits}

        cursor = connection.execute(f"SELECT * from {DATES_TABLE_NAME} ORDER BY id;")
        names = [column[0] for column in cursor.description]
        for row in cursor:
            record = dict(zip(names, row))
            habit_id = to_int(record["habit"])
            seconds = _seconds_from_millis(to_int64(record["timestamp"]))
            status = _normalize_status(to_int(record["value"]))

            if habit_id not in habits:
                raise KeyError(f"habit id {habit_id} not found")
            day = _EPOCH + timedelta(days=seconds // 86400)
            if day < earliest[habit_id]:
                earliest[habit_id] = day
            habits[habit_id].add_date_status(day, status)

    for habit_id, habit in habits.items():
        habit.start_date = earliest[habit_id]
    return list(habits.values())