from datetime import date

import pytest

from habitcore.constants import INT_NULL_VALUE
from habitcore.habit import (
    ENDS_NEVER_OPTION,
    Habit,
    HabitType,
    RepeatInfo,
    TimeUnit,
    string_to_type,
    type_to_string,
)

D1 = date(2023, 3, 1)
D2 = date(2023, 3, 2)
D3 = date(2023, 3, 3)


def make_habit(**kwargs):
    kwargs.setdefault("start_date", D1)
    return Habit(name="Read", **kwargs)


def test_type_names():
    assert type_to_string(HabitType.ONE_TIME) == "One time"
    assert type_to_string(HabitType.QUANTITATIVE) == "Quantitative"


@pytest.mark.parametrize("habit_type", list(HabitType))
def test_type_round_trip(habit_type):
    assert string_to_type(type_to_string(habit_type)) is habit_type


def test_unknown_type_name_raises():
    with pytest.raises(ValueError):
        string_to_type("Sometimes")


def test_repeat_info_defaults():
    info = RepeatInfo()
    assert (info.frequence, info.date_unit, info.pattern, info.ends) == (0, TimeUnit.DAY, 0, "")


def test_repeat_info_daily():
    info = RepeatInfo.daily()
    assert info.frequence == 1
    assert info.ends == ENDS_NEVER_OPTION == "Never"


def test_habit_defaults():
    habit = make_habit()
    assert habit.id == -1
    assert habit.daily_goal == 1
    assert habit.habit_type is HabitType.ONE_TIME
    assert habit.repeat_info == RepeatInfo.daily()


def test_id_name():
    habit = make_habit(id=5)
    assert habit.id_name() == "id_5"


def test_add_and_read_status():
    habit = make_habit()
    habit.add_date_status(D1, 1)
    assert habit.date_status(D1) == 1
    assert habit.date_status(D2) == INT_NULL_VALUE


def test_add_duplicate_raises():
    habit = make_habit()
    habit.add_date_status(D1, 0)
    with pytest.raises(ValueError):
        habit.add_date_status(D1, 1)


def test_statuses_stay_ordered_by_date():
    habit = make_habit()
    habit.add_date_status(D3, 1)
    habit.add_date_status(D1, 0)
    habit.add_date_status(D2, 1)
    assert list(habit.dates_status) == [D1, D2, D3]


def test_set_status_requires_known_date():
    habit = make_habit()
    with pytest.raises(KeyError):
        habit.set_date_status(D1, 3)
    habit.add_date_status(D1, 0)
    habit.set_date_status(D1, 3)
    assert habit.date_status(D1) == 3


def test_toggle_one_time():
    habit = make_habit()
    habit.add_date_status(D1, 0)
    habit.toggle_date_status(D1)
    assert habit.date_status(D1) == 1
    habit.toggle_date_status(D1)
    assert habit.date_status(D1) == 0


def test_toggle_unknown_date_raises():
    habit = make_habit()
    with pytest.raises(KeyError):
        habit.toggle_date_status(D1)


def test_toggle_quantitative_does_nothing():
    habit = make_habit(habit_type=HabitType.QUANTITATIVE)
    habit.add_date_status(D1, 4)
    habit.toggle_date_status(D1)
    assert habit.date_status(D1) == 4


def test_load_dates_info_replaces_and_sorts():
    habit = make_habit()
    habit.add_date_status(D1, 1)
    habit.load_dates_info({D3: 0, D2: 1})
    assert habit.dates_status == {D2: 1, D3: 0}
    assert list(habit.dates_status) == [D2, D3]
    assert habit.date_status(D1) == INT_NULL_VALUE