# habitcore

The core of a habit tracker. You define habits, give each one a repeat schedule and record a status for every day. Everything is stored in a local SQLite database.

## Installation

```
pip install habitcore
```

To install the test dependencies as well:

```
pip install "habitcore[test]"
```

## Concepts

- **Habit** (`habitcore.habit.Habit`): a dataclass with `name`, `start_date`, `habit_type`, `units`, `daily_goal`, `repeat_info`, `id` and `dates_status`. `dates_status` maps each date to a status and is kept in date order.
  - `HabitType.ONE_TIME`: the day is either done (1) or not done (0). `toggle_date_status` flips it.
  - `HabitType.QUANTITATIVE`: the day holds a count. `toggle_date_status` does nothing for this type.
  - `date_status(day)` returns `habitcore.constants.INT_NULL_VALUE` for days that have no status.
  - `set_date_status` raises `KeyError` for an unknown date. `add_date_status` raises `ValueError` for a date that already has a status.
  - `id_name()` returns the habit's column name in the data table, `id_<n>`.
  - `type_to_string` and `string_to_type` convert between types and the names `"One time"` and `"Quantitative"`.
- **RepeatInfo**: the days on which a habit is scheduled.
  - `date_unit` is a `TimeUnit`: `DAY`, `WEEK`, `MONTH`, `YEAR` or `N_DAYS`.
  - `pattern` is a bit mask of the chosen days.
  - `pattern_size` is the length of an `N_DAYS` pattern.
  - `frequence` repeats the pattern every n units.
  - `ends` says when the schedule stops: `"Never"`, an ISO date, or a number of repetitions.
  - `RepeatInfo.daily()` gives the every-day schedule with no end. It is the default for a new `Habit`.
- **HabitDao** (`habitcore.habit_dao`): stores habits in two tables.
  - `habits_id` has one row per habit.
  - `habits_data` is a calendar table with one row per day and one `id_<n>` column per habit.
  - `add_habit` inserts the habit and sets its `id`. A habit with no statuses has its scheduled days set to 0. A habit that already has statuses has those written instead. The stored statuses from the start date up to today are then read back into the habit.
  - `update_habit_date_status`, `update_habit_basic_info`, `remove_habit` and `habits()` cover the remaining operations.
- **SQL builders** (`habitcore.queries`): build the SQL text used by `HabitDao`. They are `id_table_creation_query`, `data_table_creation_queries`, `null_to_false_queries` and `remove_habit_column_queries`.
- **DatabaseManager** (`habitcore.database`): opens the SQLite file (default `habits.db`), creates any missing tables and exposes `habit_dao`.
  - It can be used as a context manager, which closes the connection on exit.
  - `DatabaseManager.instance()` returns a shared instance opened at the default file name.
- **HabitModel** (`habitcore.habit_model`): a table view of the habits.
  - Column 0 is the habit name. Column 1 is today, column 2 is yesterday, and so on up to column 6.
  - `data` reads cells and `set_data` writes them, selected by a `Role`. `header_data(section)` gives headings such as `"Mon: 5"`.
  - Callables appended to `data_changed` are called with `(row, column)` after each successful `set_data`.
  - With `ignore_db=True` the model keeps habits in memory only.
- **Settings** (`habitcore.settings`): a JSON file in the user configuration directory. It holds values for a fixed set of registered names, stored per group.
  - An unknown name raises `KeyError`. A value of an unsuitable type raises `TypeError`.
  - The `global` group's `new_day_offset` moves the start of the day back by that many hours. `habitcore.utility.current_date` applies it.
- **Utilities** (`habitcore.utility`):
  - `to_int`, `to_int64`, `to_bool`, `to_str` and `to_date` are lenient conversions. When a conversion fails they print a message and return a fallback value.
  - `run_command` runs a shell command and returns its exit status.

## Example

```python
import datetime

from habitcore.database import DatabaseManager
from habitcore.habit import Habit, HabitType

with DatabaseManager("habits.db") as db:
    habit = Habit(
        name="Read",
        start_date=datetime.date(2024, 1, 1),
        habit_type=HabitType.QUANTITATIVE,
        units="pages",
        daily_goal=20,
    )
    db.habit_dao.add_habit(habit)

    for stored in db.habit_dao.habits():
        print(stored.id_name(), stored.name, stored.date_status(datetime.date(2024, 1, 1)))
```

## Importing a backup

`habitcore.import_loader.load_imported_habits(path)` opens a backup database read-only and returns a list of `Habit` objects. `path` defaults to `backup.db`.

- Habits are read from the `Habits` table.
- Daily values are read from the `Repetitions` table.
- A value of 2 becomes 1. Multiples of 1000 above 1000 are divided by 1000.
- Each habit's start date is set to its earliest recorded day, or to today if it has none.
- A missing table raises `ValueError`. A repetition for an unknown habit raises `KeyError`.

Pass each returned habit to `HabitDao.add_habit` to store it.

## What this package does not do

- It is a library only. It has no command-line tool and no graphical interface, so charts, dialogs and sound are not included.
- The calendar table covers 5000 days starting at 2023-01-01. Statuses outside that range cannot be stored.