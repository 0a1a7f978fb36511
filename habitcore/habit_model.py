"""A table of habits: one row per habit, one column per recent day."""

from __future__ import annotations

import copy
from datetime import date, timedelta
from enum import IntEnum
from typing import Any, Callable

from .database import DatabaseManager
from .habit import Habit, HabitType
from .utility import current_date, to_date, to_int, to_str

COLUMN_SIZE = 7
ALIGN_CENTER = "center"


class Role(IntEnum):
    """The kinds of data a cell can be asked for."""

    DISPLAY = 0
    TEXT_ALIGNMENT = 7
    USER = 0x0100
    ID = 0x0101
    NAME = 0x0102
    START_DATE = 0x0103
    TYPE = 0x0104
    UNITS = 0x0105
    DAILY_GOAL = 0x0106
    HABIT_STATUS = 0x0107
    HABIT_ALL_DATES_STATUS = 0x0108
    HABIT_FULL_DATA = 0x0109


def column_date(column: int) -> date:
    """Return the day shown in ``column``: column 1 is today, 2 yesterday, and so on."""
    return current_date() + timedelta(days=1 - column)


class HabitModel:
    """Habits held in memory and, unless ``ignore_db`` is set, kept in the database.

    Column 0 shows the habit name; columns 1 to 6 show the statuses of
    today and the five days before it.
    """

    def __init__(
        self, ignore_db: bool = False, database: DatabaseManager | None = None
    ) -> None:
        self._database = database
        self._ignore_db = ignore_db
        self._habits: list[Habit] = []
        self.data_changed: list[Callable[[int, int], None]] = []
        if not ignore_db:
            self._habits = self._db.habit_dao.habits()

    @property
    def _db(self) -> DatabaseManager:
        if self._database is None:
            self._database = DatabaseManager.instance()
        return self._database

    def _is_valid(self, row: int, column: int) -> bool:
        return 0 <= row < self.row_count() and 0 <= column < self.column_count()

    def add_habit(self, habit: Habit) -> int:
        """Append a copy of ``habit`` and return its row."""
        row = self.row_count()
        new_habit = copy.deepcopy(habit)
        if not self._ignore_db:
            self._db.habit_dao.add_habit(new_habit)
        self._habits.append(new_habit)
        return row

    def row_count(self) -> int:
        """Return the number of habits."""
        return len(self._habits)

    def column_count(self) -> int:
        """Return the number of columns."""
        return COLUMN_SIZE

    def data(self, row: int, column: int, role: Role) -> Any:
        """Return the value of a cell for ``role``, or None."""
        if not self._is_valid(row, column):
            return None
        habit = self._habits[row]
        if role == Role.TEXT_ALIGNMENT:
            return ALIGN_CENTER if column > 0 else None
        if role in (Role.ID, Role.USER):
            return habit.id
        if role == Role.NAME:
            return habit.name
        if role == Role.START_DATE:
            return habit.start_date
        if role == Role.TYPE:
            return int(habit.habit_type)
        if role == Role.UNITS:
            return habit.units
        if role == Role.DAILY_GOAL:
            return habit.daily_goal
        if role == Role.DISPLAY:
            return habit.name if column == 0 else None
        if role == Role.HABIT_STATUS:
            return habit.date_status(column_date(column)) if column > 0 else None
        if role == Role.HABIT_ALL_DATES_STATUS:
            return dict(habit.dates_status)
        if role == Role.HABIT_FULL_DATA:
            return copy.deepcopy(habit)
        return None

    def header_data(self, section: int) -> str | None:
        """Return the column heading, such as ``"Mon: 5"``; column 0 has none."""
        if section == 0:
            return None
        day = column_date(section)
        return f"{day:%a}: {day.day}"

    def set_data(self, row: int, column: int, value: Any, role: Role) -> bool:
        """Change a cell; return False for an invalid cell or unsupported role."""
        if not self._is_valid(row, column):
            return False
        day = column_date(column)
        habit = self._habits[row]
        if role == Role.HABIT_STATUS:
            if habit.habit_type == HabitType.ONE_TIME:
                habit.toggle_date_status(day)
            else:
                habit.set_date_status(day, to_int(value))
            if not self._ignore_db:
                self._db.habit_dao.update_habit_date_status(day, habit)
        elif role in (
            Role.NAME,
            Role.START_DATE,
            Role.TYPE,
            Role.UNITS,
            Role.DAILY_GOAL,
        ):
            if role == Role.NAME:
                habit.name = to_str(value)
            elif role == Role.START_DATE:
                habit.start_date = to_date(value)
            elif role == Role.TYPE:
                habit.habit_type = HabitType(to_int(value))
            elif role == Role.UNITS:
                habit.units = to_str(value)
            else:
                habit.daily_goal = to_int(value)
            if not self._ignore_db:
                self._db.habit_dao.update_habit_basic_info(habit)
        else:
            return False

        for callback in self.data_changed:
            callback(row, column)
        return True

    def remove_rows(self, row: int, count: int) -> bool:
        """Remove ``count`` habits starting at ``row``; False if out of range."""
        total = self.row_count()
        if row < 0 or row >= total or count <= 0 or row + count > total:
            return False
        if not self._ignore_db:
            for habit in reversed(self._habits[row : row + count]):
                self._db.habit_dao.remove_habit(habit)
        del self._habits[row : row + count]
        return True

    def habit(self, row: int) -> Habit:
        """Return the habit in ``row``; raise IndexError if there is none."""
        if not 0 <= row < self.row_count():
            raise IndexError(f"row {row} out of range")
        return self._habits[row]

    def update_cached_data(self) -> None:
        """Reload all habits from the database."""
        self._habits = self._db.habit_dao.habits()