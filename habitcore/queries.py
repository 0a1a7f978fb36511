"""SQL text used to keep habits in the two-table SQLite layout.

``habits_id`` holds one row per habit. ``habits_data`` holds one row per
calendar day and one ``id_<n>`` column per habit with that day's status.
"""

from __future__ import annotations

import logging
import re
from datetime import date
from functools import reduce

from .constants import INT_FALSE_VALUE
from .habit import ENDS_NEVER_OPTION, Habit, TimeUnit
from .utility import to_int

TABLE_NAME_ID = "habits_id"
TABLE_NAME_DATA = "habits_data"
TEMP_COPY_TABLE = "temp_copy"

_log = logging.getLogger(__name__)

_ID_TABLE_QUERY = (
    "CREATE TABLE IF NOT EXISTS "
    + TABLE_NAME_ID
    + " (id INTEGER PRIMARY KEY AUTOINCREMENT,"
    "name TEXT NOT NULL,"
    "startDate DATE NOT NULL,"
    "habitType INT NOT NULL,"
    "habitUnits TEXT NOT NULL,"
    "dailyGoal INT NOT NULL,"
    "repeatFrequence INT NOT NULL,"
    "repeatDateUnit INT NOT NULL,"
    "repeatPattern INT,"
    "repeatEnds TEXT,"
    "repeatPatternSize INT"
    ");"
)

_DATA_TABLE_QUERY = (
    "CREATE TABLE IF NOT EXISTS "
    + TABLE_NAME_DATA
    + " (id INTEGER PRIMARY KEY AUTOINCREMENT,"
    "  date DATE UNIQUE NOT NULL,"
    "  dayofweek INT NOT NULL,"
    "  weekday TEXT NOT NULL,"
    "  quarter INT NOT NULL,"
    "  year INT NOT NULL,"
    "  month INT NOT NULL,"
    "  day INT NOT NULL"
    ");"
)

_DATA_TABLE_FILL_QUERY = (
    "INSERT"
    "  OR ignore INTO "
    + TABLE_NAME_DATA
    + " (date, dayofweek, weekday, quarter, year, month, day)"
    "SELECT *"
    "FROM ("
    "  WITH RECURSIVE dates(date) AS ("
    "    VALUES('2023-01-01')"
    "    UNION ALL"
    "    SELECT date(date, '+1 day')"
    "    FROM dates"
    "    LIMIT 5000"
    "  )"
    "  SELECT date,"
    "    (CAST(strftime('%w', date) AS INT) + 6) % 7 AS dayofweek,"
    "    CASE"
    "      (CAST(strftime('%w', date) AS INT) + 6) % 7"
    "      WHEN 0 THEN 'Monday'"
    "      WHEN 1 THEN 'Tuesday'"
    "      WHEN 2 THEN 'Wednesday'"
    "      WHEN 3 THEN 'Thursday'"
    "      WHEN 4 THEN 'Friday'"
    "      WHEN 5 THEN 'Saturday'"
    "      ELSE 'Sunday'"
    "    END AS weekday,"
    "    CASE"
    "      WHEN CAST(strftime('%m',date) AS INT) BETWEEN 1 AND 3 THEN 1"
    "      WHEN CAST(strftime('%m',date) AS INT) BETWEEN 4 AND 6 THEN 2"
    "      WHEN CAST(strftime('%m',date) AS INT) BETWEEN 7 AND 9 THEN 3"
    "      ELSE 4"
    "    END AS quarter,"
    "    CAST(strftime('%Y',date) AS INT) AS year,"
    "    CAST(strftime('%m',date) AS INT) AS month,"
    "    CAST(strftime('%d',date) AS INT) AS day"
    "  FROM dates"
    ") ORDER BY date;"
)

_PLACEHOLDER = re.compile(r"%([1-9][0-9]?)")
_COLUMN_NAME = re.compile(r"[\(|,] *(\w+)", re.ASCII)
_ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")


def _arg(template: str, value: object) -> str:
    """Replace every occurrence of the lowest-numbered ``%n`` marker."""
    numbers = [int(match.group(1)) for match in _PLACEHOLDER.finditer(template)]
    if not numbers:
        return template
    lowest = min(numbers)
    text = str(value)
    return _PLACEHOLDER.sub(
        lambda match: text if int(match.group(1)) == lowest else match.group(0),
        template,
    )


def _args(template: str, *values: object) -> str:
    return reduce(_arg, values, template)


def _is_iso_date(text: str) -> bool:
    if not _ISO_DATE.fullmatch(text):
        return False
    try:
        date.fromisoformat(text)
    except ValueError:
        return False
    return True


def _ends_kind(ends: str) -> str:
    """Classify a repetition end as "never", "date" or "count"."""
    if ends == ENDS_NEVER_OPTION:
        return "never"
    if _is_iso_date(ends):
        return "date"
    if to_int(ends):
        return "count"
    raise ValueError(f"unable to determine the kind of repetition end: {ends!r}")


def _close_temp_table_queries(
    query_1: str, query_2: str, ends: str, never_suffix: str = " ORDER BY id;"
) -> tuple[str, str]:
    kind = _ends_kind(ends)
    if kind == "never":
        return query_1 + never_suffix, query_2 + ";"
    if kind == "date":
        return query_1 + _arg(" AND date <='%1' ORDER BY id;", ends), query_2 + ";"
    return query_1 + " ORDER BY id;", query_2 + _arg(" LIMIT %2;", ends)


def _close_update_query(query_1: str, ends: str) -> str:
    kind = _ends_kind(ends)
    if kind == "never":
        return query_1 + ";"
    if kind == "date":
        return query_1 + _arg(" AND date <='%1';", ends)
    return query_1 + _arg(" LIMIT %2;", ends)


def _popcount(pattern: int) -> int:
    return bin(pattern & 0xFFFFFFFF).count("1")


def id_table_creation_query() -> str:
    """Return the statement creating the habit description table."""
    return _ID_TABLE_QUERY


def data_table_creation_queries() -> tuple[str, str]:
    """Return the statements creating and filling the per-day data table."""
    return _DATA_TABLE_QUERY, _DATA_TABLE_FILL_QUERY


def remove_habit_column_queries(schema: str, exclude: str) -> tuple[str, ...]:
    """Return six statements that rebuild the data table without ``exclude``.

    ``schema`` is the data table's ``CREATE TABLE`` text as stored in
    ``sqlite_master``; ``exclude`` is the name of an ``INT`` column.
    """
    schema = re.sub(",[ ]*" + exclude + "[ ]*INT", "", schema)

    position = schema.find(" TABLE")
    if position < 0:
        raise ValueError("schema does not contain a CREATE TABLE statement")
    schema_temp = schema[:position] + " TEMPORARY" + schema[position:]
    query_1 = re.sub(TABLE_NAME_DATA, TEMP_COPY_TABLE, schema_temp) + ";"

    names = [match.group(1) for match in _COLUMN_NAME.finditer(schema)]
    if not names:
        raise ValueError("schema lists no columns")
    columns = ", ".join(names)

    query_2 = (
        f"INSERT INTO {TEMP_COPY_TABLE} SELECT {columns} FROM {TABLE_NAME_DATA} "
        "ORDER BY id;"
    )
    query_3 = f"DROP TABLE {TABLE_NAME_DATA};"
    query_4 = schema + ";"
    query_5 = (
        f"INSERT INTO {TABLE_NAME_DATA} SELECT {columns} FROM {TEMP_COPY_TABLE} "
        "ORDER BY id;"
    )
    query_6 = f"DROP TABLE {TEMP_COPY_TABLE};"
    return query_1, query_2, query_3, query_4, query_5, query_6


def null_to_false_queries(habit: Habit) -> tuple[str, str, str, str]:
    """Return up to four statements marking the habit's scheduled days as not done.

    Empty strings stand for statements that need not be run. The data table
    must be ordered by date (rowid) for the row arithmetic to hold.
    """
    hab_id = habit.id_name()
    r = habit.repeat_info
    start = habit.start_date

    query_1 = ""
    query_2 = ""
    query_3 = _arg(
        "update habits_data SET %1=(SELECT temp_table.%1 FROM temp_table WHERE "
        "temp_table.date = habits_data.date  ORDER BY id);",
        hab_id,
    )
    query_4 = "DROP TABLE temp_table;"

    if r.date_unit == TimeUnit.DAY:
        query_1 = _arg(
            "CREATE TEMPORARY TABLE temp_table AS SELECT * from habits_data "
            "WHERE date>='%1'",
            start.isoformat(),
        )
        query_2 = _args(
            "update temp_table SET %1=%2 WHERE (ROWID-1) % %3 = 0",
            hab_id,
            INT_FALSE_VALUE,
            r.frequence,
        )
        query_1, query_2 = _close_temp_table_queries(query_1, query_2, r.ends)

    elif r.date_unit == TimeUnit.WEEK:
        if r.pattern <= 0:
            raise ValueError("a weekly repetition needs a non-empty pattern")
        start_week_day = start.weekday()
        selected = [day for day in range(7) if r.pattern & (1 << day)]
        offset = sum(1 for day in selected if day > start_week_day)
        query_1 = (
            _arg(
                "CREATE TEMPORARY TABLE temp_table AS SELECT * from habits_data "
                "WHERE date >= '%1' AND (",
                start.isoformat(),
            )
            + " OR ".join(f"dayofweek={day}" for day in selected)
            + ")"
        )
        weekdays = _popcount(r.pattern)
        query_2 = _args(
            "update temp_table SET %1=%2 WHERE (ROWID-1+%3) % %4 < %5",
            hab_id,
            INT_FALSE_VALUE,
            offset,
            weekdays * r.frequence,
            weekdays,
        )
        query_1, query_2 = _close_temp_table_queries(query_1, query_2, r.ends)

    elif r.date_unit == TimeUnit.MONTH:
        if r.pattern <= 0:
            raise ValueError("a monthly repetition needs a non-empty pattern")
        selected = [day for day in range(31) if r.pattern & (1 << day)]
        query_1 = (
            _arg(
                "CREATE TEMPORARY TABLE temp_table AS SELECT * from habits_data "
                "WHERE date >= '%1' AND (",
                start.isoformat(),
            )
            + " OR ".join(f"day={day + 1}" for day in selected)
            + ")"
        )
        days = _popcount(r.pattern)
        query_2 = _args(
            "update temp_table SET %1=2 WHERE (ROWID-1) % %3 < %4",
            hab_id,
            INT_FALSE_VALUE,
            days * r.frequence,
            days,
        )
        query_1, query_2 = _close_temp_table_queries(
            query_1, query_2, r.ends, never_suffix="  ORDER BY id;"
        )

    elif r.date_unit == TimeUnit.N_DAYS:
        if r.pattern <= 0:
            raise ValueError("an n-days repetition needs a non-empty pattern")
        query_1 = _args(
            "UPDATE habits_data SET %1=%2 WHERE "
            "date>='%3' AND ( (%4 & (1<<((rowid-1) % %5))) > 0)",
            hab_id,
            INT_FALSE_VALUE,
            start.isoformat(),
            r.pattern,
            r.pattern_size,
        )
        query_2 = query_3 = query_4 = ""
        query_1 = _close_update_query(query_1, r.ends)

    elif r.date_unit == TimeUnit.YEAR:
        query_1 = _args(
            "UPDATE habits_data SET %1=%2 WHERE month=%3 AND day=%4 AND year>=%5",
            hab_id,
            INT_FALSE_VALUE,
            start.month,
            start.day,
            start.year,
        )
        query_2 = query_3 = query_4 = ""
        query_1 = _close_update_query(query_1, r.ends)

    for number, query in enumerate((query_1, query_2, query_3, query_4), start=1):
        _log.debug("query_%d|%s|", number, query)

    return query_1, query_2, query_3, query_4