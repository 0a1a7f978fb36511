"""Storage of habits and their daily statuses in SQLite."""

from __future__ import annotations

import logging
import sqlite3
from datetime import date
from typing import Any, Iterable

from .constants import INT_NULL_VALUE
from .habit import Habit, HabitType
from .queries import (
    TABLE_NAME_DATA,
    TABLE_NAME_ID,
    TEMP_COPY_TABLE,
    data_table_creation_queries,
    id_table_creation_query,
    null_to_false_queries,
    remove_habit_column_queries,
)
from .utility import current_date, to_date, to_int, to_str

_log = logging.getLogger(__name__)


class HabitDao:
    """Reads and writes habits through an open SQLite connection.

    Habit descriptions live in ``habits_id``; each habit owns an ``id_<n>``
    column in ``habits_data`` with one status per calendar day.
    """

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection

    def _execute(self, sql: str, params: Any = ()) -> sqlite3.Cursor:
        try:
            cursor = self._connection.execute(sql, params)
        except sqlite3.Error as error:
            _log.warning("Query KO: %s", error)
            _log.warning("Query text: %s", sql)
            raise
        _log.debug("Query OK: %s | Affected rows: %s", sql, cursor.rowcount)
        return cursor

    def _tables(self) -> set[str]:
        cursor = self._execute("SELECT name FROM sqlite_master WHERE type='table'")
        return {row[0] for row in cursor}

    @staticmethod
    def _rows(cursor: sqlite3.Cursor) -> Iterable[dict[str, Any]]:
        names = [column[0] for column in cursor.description]
        for row in cursor:
            yield dict(zip(names, row))

    @staticmethod
    def _habit_from_row(row: dict[str, Any]) -> Habit:
        habit = Habit(
            name=to_str(row["name"]),
            start_date=to_date(row["startDate"]),
            habit_type=HabitType(to_int(row["habitType"])),
            units=to_str(row["habitUnits"]),
            daily_goal=to_int(row["dailyGoal"]),
        )
        habit.id = to_int(row["id"])
        return habit

    def init(self) -> None:
        """Create the habit and data tables when they are missing."""
        with self._connection:
            tables = self._tables()
            if TABLE_NAME_ID not in tables:
                self._execute(id_table_creation_query())
            if TABLE_NAME_DATA not in tables:
                create, fill = data_table_creation_queries()
                self._execute(create)
                self._execute(fill)

    def add_habit(self, habit: Habit) -> None:
        """Insert ``habit``, give it its id and fill its statuses from the table."""
        repeat = habit.repeat_info
        with self._connection:
            cursor = self._execute(
                f"INSERT INTO {TABLE_NAME_ID} (name, startDate, habitType, habitUnits, "
                "dailyGoal, repeatFrequence, repeatDateUnit, repeatPattern, repeatEnds, "
                "repeatPatternSize) VALUES (:name, :start_date, :habit_type, "
                ":habit_units, :daily_goal, :repeat_frequence, :repeat_date_unit, "
                ":repeat_pattern, :repeat_ends, :repeat_pattern_size)",
                {
                    "name": habit.name,
                    "start_date": habit.start_date.isoformat(),
                    "habit_type": int(habit.habit_type),
                    "habit_units": habit.units or "",
                    "daily_goal": habit.daily_goal,
                    "repeat_frequence": repeat.frequence,
                    "repeat_date_unit": int(repeat.date_unit),
                    "repeat_pattern": repeat.pattern,
                    "repeat_ends": repeat.ends,
                    "repeat_pattern_size": repeat.pattern_size,
                },
            )
            habit.id = cursor.lastrowid

            self._execute(f"ALTER TABLE {TABLE_NAME_DATA} ADD {habit.id_name()} INT;")

            if not habit.dates_status:
                for query in null_to_false_queries(habit):
                    if query:
                        self._execute(query)
            else:
                for day in list(habit.dates_status):
                    self.update_habit_date_status(day, habit)

        self.load_habit_info_from_data_table(habit)

    def update_habit_date_status(self, date: date, habit: Habit) -> None:
        """Write the habit's status for ``date`` to the data table."""
        with self._connection:
            self._execute(
                f"UPDATE {TABLE_NAME_DATA} SET {habit.id_name()}=(:habit_date_status) "
                "WHERE date=(:habit_date)",
                {
                    "habit_date_status": habit.date_status(date),
                    "habit_date": date.isoformat(),
                },
            )

    def update_habit_basic_info(self, habit: Habit) -> None:
        """Write name, start date, type, units and daily goal of ``habit``."""
        with self._connection:
            self._execute(
                f"UPDATE {TABLE_NAME_ID} SET name=(:habit_name), "
                "startDate=(:habit_start_date), habitType=(:habit_type), "
                "habitUnits=(:habit_units), dailyGoal=(:daily_goal) "
                "WHERE id=(:habit_id)",
                {
                    "habit_name": habit.name,
                    "habit_start_date": habit.start_date.isoformat(),
                    "habit_type": int(habit.habit_type),
                    "habit_units": habit.units or "",
                    "daily_goal": habit.daily_goal,
                    "habit_id": habit.id,
                },
            )
        self._debug_print_table()

    def remove_habit(self, habit: Habit) -> None:
        """Delete ``habit`` and drop its column from the data table."""
        with self._connection:
            self._execute(
                f"DELETE FROM {TABLE_NAME_ID} WHERE id=(:habit_id)",
                {"habit_id": habit.id},
            )
            row = self._execute(
                "SELECT sql FROM sqlite_master WHERE name=?", (TABLE_NAME_DATA,)
            ).fetchone()
            if row is None or row[0] is None:
                raise LookupError(f"table {TABLE_NAME_DATA} has no schema")
            schema = to_str(row[0])

            self._execute(f"DROP TABLE IF EXISTS {TEMP_COPY_TABLE}")
            for query in remove_habit_column_queries(schema, habit.id_name()):
                self._execute(query)

    def habits(self) -> list[Habit]:
        """Return all stored habits, ordered by id, with their statuses up to today."""
        cursor = self._execute(f"SELECT * FROM {TABLE_NAME_ID} ORDER BY id;")
        result = [self._habit_from_row(row) for row in self._rows(cursor)]
        for habit in result:
            self.load_habit_info_from_data_table(habit)
        return result

    def load_habit_info_from_data_table(self, habit: Habit) -> None:
        """Replace the habit's statuses with the stored ones from its start to today."""
        column = habit.id_name()
        cursor = self._execute(
            f"SELECT date, {column} FROM {TABLE_NAME_DATA} "
            "WHERE date>=? AND date<=? ORDER BY id;",
            (habit.start_date.isoformat(), current_date().isoformat()),
        )
        statuses = {
            to_date(day): INT_NULL_VALUE if status is None else to_int(status)
            for day, status in cursor
        }
        habit.load_dates_info(statuses)

    def _debug_print_table(self) -> None:
        if not _log.isEnabledFor(logging.DEBUG):
            return
        cursor = self._execute(f"SELECT * FROM {TABLE_NAME_ID}  ORDER BY id;")
        for row in self._rows(cursor):
            habit = self._habit_from_row(row)
            _log.debug(
                "id:=%s name:=%s startDate:=%s type:=%s units:=%s dailyGoal:=%s",
                habit.id,
                habit.name,
                habit.start_date.isoformat(),
                int(habit.habit_type),
                habit.units,
                habit.daily_goal,
            )