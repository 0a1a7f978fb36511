"""The habit record and its repetition settings."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import IntEnum

from .constants import INT_NULL_VALUE
from .utility import current_date

ENDS_NEVER_OPTION = "Never"

_ONE_TIME = "One time"
_QUANTITATIVE = "Quantitative"


class HabitType(IntEnum):
    """Whether a habit is done once a day or measured by quantity."""

    ONE_TIME = 0
    QUANTITATIVE = 1


class TimeUnit(IntEnum):
    """The unit a repetition pattern is expressed in."""

    DAY = 0
    WEEK = 1
    MONTH = 2
    YEAR = 3
    N_DAYS = 4


class RISettings(IntEnum):
    """Presets for a repetition."""

    NONE = 0
    DAILY = 1


@dataclass
class RepeatInfo:
    """How a habit repeats.

    ``pattern`` is a bit mask with one bit per day; ``pattern_size`` only
    matters for ``TimeUnit.N_DAYS``. ``ends`` is "Never", an ISO date or a
    repetition count.
    """

    frequence: int = 0
    date_unit: TimeUnit = TimeUnit.DAY
    pattern: int = 0
    pattern_size: int = 0
    ends: str = ""

    @classmethod
    def daily(cls) -> RepeatInfo:
        """Repeat every day with no end."""
        return cls(frequence=1, date_unit=TimeUnit.DAY, ends=ENDS_NEVER_OPTION)


def type_to_string(habit_type: HabitType) -> str:
    """Return the display name of a habit type."""
    if habit_type == HabitType.ONE_TIME:
        return _ONE_TIME
    if habit_type == HabitType.QUANTITATIVE:
        return _QUANTITATIVE
    raise ValueError(f"unknown habit type: {habit_type!r}")


def string_to_type(text: str) -> HabitType:
    """Parse a habit type display name."""
    if text == _ONE_TIME:
        return HabitType.ONE_TIME
    if text == _QUANTITATIVE:
        return HabitType.QUANTITATIVE
    raise ValueError(f"unknown habit type name: {text!r}")


@dataclass
class Habit:
    """A habit with its per-date statuses, kept ordered by date."""

    name: str = ""
    start_date: date = field(default_factory=current_date)
    habit_type: HabitType = HabitType.ONE_TIME
    units: str = ""
    daily_goal: int = 1
    repeat_info: RepeatInfo = field(default_factory=RepeatInfo.daily)
    id: int = -1
    dates_status: dict[date, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.dates_status = dict(sorted(self.dates_status.items()))

    def set_date_status(self, date: date, status: int) -> None:
        """Change the status of a known date; raise KeyError otherwise."""
        if date not in self.dates_status:
            raise KeyError(f"no status recorded for {date}")
        self.dates_status[date] = status

    def add_date_status(self, date: date, status: int) -> None:
        """Record a status for a new date; raise ValueError if it exists."""
        if date in self.dates_status:
            raise ValueError(f"status for {date} already exists")
        needs_sort = bool(self.dates_status) and date < next(reversed(self.dates_status))
        self.dates_status[date] = status
        if needs_sort:
            self.dates_status = dict(sorted(self.dates_status.items()))

    def toggle_date_status(self, date: date) -> None:
        """Flip a one-time habit's status between 0 and 1 for ``date``."""
        if self.habit_type == HabitType.QUANTITATIVE:
            return
        if date not in self.dates_status:
            raise KeyError(f"no status recorded for {date}")
        self.dates_status[date] = 1 - self.dates_status[date]

    def load_dates_info(self, dates_status: dict[date, int]) -> None:
        """Replace all date statuses."""
        self.dates_status = dict(sorted(dates_status.items()))

    def date_status(self, date: date) -> int:
        """Return the status for ``date``, or INT_NULL_VALUE if none."""
        return self.dates_status.get(date, INT_NULL_VALUE)

    def id_name(self) -> str:
        """Return the column name used for this habit in the data table."""
        return f"id_{self.id}"