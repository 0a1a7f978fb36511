from datetime import date, datetime, timedelta

import pytest

from habitcore.constants import INT32_MAX, INT_NULL_VALUE
from habitcore.settings import Settings
from habitcore.utility import (
    current_date,
    log_message,
    run_command,
    to_bool,
    to_date,
    to_int,
    to_int32,
    to_int64,
    to_str,
)


@pytest.fixture
def settings(tmp_path):
    return Settings(tmp_path / "settings.json")


def test_current_date_without_offset(settings):
    assert current_date(settings) == date.today()


def test_current_date_with_offset(settings):
    settings.set_setting("global", "new_day_offset", 48)
    assert current_date(settings) == date.today() - timedelta(days=2)


def test_run_command_returns_exit_status():
    assert run_command("exit 3") == 3
    assert run_command("true") == 0


def test_to_int32_in_range_is_identity(capsys):
    assert to_int32(INT32_MAX) == INT32_MAX
    assert capsys.readouterr().out == ""


def test_to_int32_out_of_range_wraps_and_logs(capsys):
    assert to_int32(INT32_MAX + 1) == INT_NULL_VALUE
    assert "Failed conversion" in capsys.readouterr().out


def test_to_int_conversions(capsys):
    assert to_int("42") == 42
    assert to_int(True) == 1
    assert to_int(7) == 7
    assert capsys.readouterr().out == ""


def test_to_int_failure_logs_and_returns_zero(capsys):
    assert to_int("abc") == 0
    assert "Failed conversion: QVariant to int" in capsys.readouterr().out


def test_to_int_rejects_64_bit_values(capsys):
    assert to_int(INT32_MAX + 1) == 0
    assert "Failed conversion" in capsys.readouterr().out


def test_to_int64_accepts_large_values():
    big = 1_700_000_000_000
    assert to_int64(big) == big
    assert to_int64(str(big)) == big


@pytest.mark.parametrize("text", ["", "0", "false", "FALSE"])
def test_to_bool_false_strings(text):
    assert to_bool(text) is False


def test_to_bool_true_values():
    assert to_bool("yes") is True
    assert to_bool(5) is True


def test_to_bool_none_logs(capsys):
    assert to_bool(None) is False
    assert "Failed conversion: QVariant to bool" in capsys.readouterr().out


def test_to_str_values(capsys):
    assert to_str("abc") == "abc"
    assert to_str(12) == "12"
    assert to_str(date(2023, 1, 5)) == date(2023, 1, 5).isoformat()
    assert capsys.readouterr().out == ""


def test_to_str_none_logs(capsys):
    assert to_str(None) == ""
    assert "Failed conversion: QVariant to QString" in capsys.readouterr().out


def test_to_date_values():
    assert to_date("2023-01-05") == date(2023, 1, 5)
    assert to_date(datetime(2023, 1, 5, 10, 30)) == date(2023, 1, 5)
    assert to_date("nonsense") is None


def test_to_date_none_logs(capsys):
    assert to_date(None) is None
    assert "Failed conversion: QVariant to QDate" in capsys.readouterr().out


def test_log_message_names_caller(capsys):
    log_message("hello there")
    out = capsys.readouterr().out
    assert out.strip().endswith("test_log_message_names_caller: hello there")
    assert "test_utility.py(" in out