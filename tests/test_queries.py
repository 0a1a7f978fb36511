import sqlite3
from datetime import date

import pytest

from habitcore.habit import Habit, RepeatInfo, TimeUnit
from habitcore.queries import (
    data_table_creation_queries,
    id_table_creation_query,
    null_to_false_queries,
    remove_habit_column_queries,
)

START_OF_TABLE = date(2023, 1, 1)


@pytest.fixture
def conn():
    connection = sqlite3.connect(":memory:")
    connection.execute(id_table_creation_query())
    for query in data_table_creation_queries():
        connection.execute(query)
    connection.execute("ALTER TABLE habits_data ADD id_7 INT;")
    connection.commit()
    yield connection
    connection.close()


def _columns(connection, table):
    return [row[1] for row in connection.execute(f"PRAGMA table_info({table})")]


def _statuses(connection, column, limit=800):
    rows = connection.execute(
        f"SELECT date, {column} FROM habits_data ORDER BY id LIMIT {limit}"
    )
    return {date.fromisoformat(d): value for d, value in rows}


def _run(connection, queries):
    for query in queries:
        if query:
            connection.execute(query)
    connection.commit()


def _habit(start, repeat):
    return Habit(name="walk", start_date=start, repeat_info=repeat, id=7)


def test_id_table_columns():
    connection = sqlite3.connect(":memory:")
    connection.execute(id_table_creation_query())
    assert _columns(connection, "habits_id") == [
        "id",
        "name",
        "startDate",
        "habitType",
        "habitUnits",
        "dailyGoal",
        "repeatFrequence",
        "repeatDateUnit",
        "repeatPattern",
        "repeatEnds",
        "repeatPatternSize",
    ]


def test_data_table_is_filled(conn):
    count, first = conn.execute("SELECT COUNT(*), MIN(date) FROM habits_data").fetchone()
    assert count == 5000
    assert first == "2023-01-01"


def test_data_table_calendar_fields_agree(conn):
    rows = conn.execute(
        "SELECT id, date, dayofweek, year, month, day FROM habits_data ORDER BY id"
    ).fetchall()
    for rowid, text, dayofweek, year, month, day in rows[:400]:
        parsed = date.fromisoformat(text)
        assert dayofweek == parsed.weekday()
        assert (year, month, day) == (parsed.year, parsed.month, parsed.day)
        assert (parsed - START_OF_TABLE).days == rowid - 1


def test_fill_query_is_idempotent(conn):
    conn.execute(data_table_creation_queries()[1])
    assert conn.execute("SELECT COUNT(*) FROM habits_data").fetchone()[0] == 5000


def test_remove_column_worked_example():
    queries = remove_habit_column_queries(
        "CREATE TABLE habits_data (id INTEGER, a INT, id_3 INT)", "id_3"
    )
    assert len(queries) == 6
    assert queries[0] == "CREATE TEMPORARY TABLE temp_copy (id INTEGER, a INT);"
    assert queries[1] == "INSERT INTO temp_copy SELECT id, a FROM habits_data ORDER BY id;"
    assert queries[2] == "DROP TABLE habits_data;"
    assert queries[5] == "DROP TABLE temp_copy;"


def test_remove_column_keeps_similar_names():
    queries = remove_habit_column_queries(
        "CREATE TABLE habits_data (id INTEGER, id_3 INT, id_30 INT)", "id_3"
    )
    assert "id_30" in queries[3]
    assert ", id_3 INT," not in queries[3]


def test_remove_column_rebuilds_table(conn):
    conn.execute("ALTER TABLE habits_data ADD id_8 INT;")
    conn.execute("UPDATE habits_data SET id_8=5 WHERE id<=3;")
    conn.commit()
    schema = conn.execute(
        "SELECT sql FROM sqlite_master WHERE name='habits_data';"
    ).fetchone()[0]
    _run(conn, remove_habit_column_queries(schema, "id_7"))
    columns = _columns(conn, "habits_data")
    assert "id_7" not in columns
    assert "id_8" in columns
    assert conn.execute("SELECT COUNT(*) FROM habits_data").fetchone()[0] == 5000
    assert conn.execute("SELECT COUNT(*) FROM habits_data WHERE id_8=5").fetchone()[0] == 3


def test_remove_column_requires_table_statement():
    with pytest.raises(ValueError):
        remove_habit_column_queries("habits_data (id INT)", "id_1")


def test_remove_column_requires_columns():
    with pytest.raises(ValueError):
        remove_habit_column_queries("CREATE TABLE habits_data", "id_1")


def test_daily_every_second_day(conn):
    start = date(2023, 1, 5)
    repeat = RepeatInfo(frequence=2, date_unit=TimeUnit.DAY, ends="Never")
    _run(conn, null_to_false_queries(_habit(start, repeat)))
    for day, value in _statuses(conn, "id_7").items():
        scheduled = day >= start and (day - start).days % 2 == 0
        assert (value == 0) == scheduled
        assert value in (0, None)


def test_daily_until_date(conn):
    start = date(2023, 1, 5)
    repeat = RepeatInfo(frequence=1, date_unit=TimeUnit.DAY, ends="2023-01-10")
    queries = null_to_false_queries(_habit(start, repeat))
    assert queries[0].endswith(" AND date <='2023-01-10' ORDER BY id;")
    _run(conn, queries)
    for day, value in _statuses(conn, "id_7").items():
        assert (value == 0) == (start <= day <= date(2023, 1, 10))


def test_daily_count_limit_text():
    repeat = RepeatInfo(frequence=1, date_unit=TimeUnit.DAY, ends="4")
    queries = null_to_false_queries(_habit(date(2023, 1, 5), repeat))
    assert queries[0].endswith(" ORDER BY id;")
    assert queries[1].endswith(" LIMIT 4;")
    assert queries[3] == "DROP TABLE temp_table;"


def test_weekly_pattern(conn):
    start = date(2023, 1, 2)
    repeat = RepeatInfo(
        frequence=1, date_unit=TimeUnit.WEEK, pattern=0b101, ends="Never"
    )
    queries = null_to_false_queries(_habit(start, repeat))
    assert "dayofweek=0 OR dayofweek=2" in queries[0]
    _run(conn, queries)
    for day, value in _statuses(conn, "id_7").items():
        assert (value == 0) == (day >= start and day.weekday() in (0, 2))


def test_weekly_needs_pattern():
    repeat = RepeatInfo(frequence=1, date_unit=TimeUnit.WEEK, pattern=0, ends="Never")
    with pytest.raises(ValueError):
        null_to_false_queries(_habit(date(2023, 1, 2), repeat))


def test_monthly_query_selects_days():
    repeat = RepeatInfo(
        frequence=1, date_unit=TimeUnit.MONTH, pattern=(1 << 0) | (1 << 14), ends="Never"
    )
    queries = null_to_false_queries(_habit(date(2023, 1, 2), repeat))
    assert "day=1 OR day=15)" in queries[0]
    assert queries[0].endswith("  ORDER BY id;")
    assert queries[1].startswith("update temp_table SET id_7=")


def test_monthly_needs_pattern():
    repeat = RepeatInfo(frequence=1, date_unit=TimeUnit.MONTH, pattern=0, ends="Never")
    with pytest.raises(ValueError):
        null_to_false_queries(_habit(date(2023, 1, 2), repeat))


def test_yearly(conn):
    start = date(2023, 3, 15)
    repeat = RepeatInfo(frequence=1, date_unit=TimeUnit.YEAR, ends="Never")
    queries = null_to_false_queries(_habit(start, repeat))
    assert queries[1:] == ("", "", "")
    _run(conn, queries)
    for day, value in _statuses(conn, "id_7").items():
        assert (value == 0) == (day.month == 3 and day.day == 15)


def test_n_days(conn):
    start = date(2023, 1, 4)
    repeat = RepeatInfo(
        frequence=1, date_unit=TimeUnit.N_DAYS, pattern=0b1, pattern_size=3, ends="Never"
    )
    queries = null_to_false_queries(_habit(start, repeat))
    assert queries[1:] == ("", "", "")
    _run(conn, queries)
    for day, value in _statuses(conn, "id_7").items():
        offset = (day - START_OF_TABLE).days
        assert (value == 0) == (day >= start and offset % 3 == 0)


def test_n_days_count_limit_text():
    repeat = RepeatInfo(
        frequence=1, date_unit=TimeUnit.N_DAYS, pattern=0b11, pattern_size=4, ends="3"
    )
    queries = null_to_false_queries(_habit(date(2023, 1, 4), repeat))
    assert queries[0].endswith(" LIMIT 3;")
    assert "date>='2023-01-04'" in queries[0]


def test_unknown_ends_raises():
    repeat = RepeatInfo(frequence=1, date_unit=TimeUnit.DAY, ends="soon")
    with pytest.raises(ValueError):
        null_to_false_queries(_habit(date(2023, 1, 4), repeat))