"""Date helpers, lenient value conversions and diagnostic logging."""

from __future__ import annotations

import inspect
import math
import subprocess
from datetime import date, datetime, timedelta
from typing import Any

from .constants import INT32_MAX, INT32_MIN, INT64_MAX, INT64_MIN
from .settings import Settings


def _emit(msg: str, depth: int) -> None:
    frame = inspect.currentframe()
    for _ in range(depth + 1):
        if frame is None or frame.f_back is None:
            break
        frame = frame.f_back
    if frame is None:
        print(msg, flush=True)
        return
    code = frame.f_code
    print(f"{code.co_filename}({frame.f_lineno}): {code.co_name}: {msg}", flush=True)


def log_message(msg: str) -> None:
    """Print ``msg`` prefixed with the caller's file, line and function."""
    _emit(msg, 1)


def current_date(settings: Settings | None = None) -> date:
    """Return today's date, shifted back by the ``new_day_offset`` hours."""
    settings = settings if settings is not None else Settings.instance()
    hours = to_int(settings.get_setting("global", "new_day_offset"))
    return (datetime.now() - timedelta(hours=hours)).date()


def run_command(cmd: str) -> int:
    """Run ``cmd`` through the shell and return its exit status."""
    completed = subprocess.run(cmd, shell=True, stdout=subprocess.DEVNULL, check=False)
    return completed.returncode


def _wrap(value: int, bits: int) -> int:
    half = 1 << (bits - 1)
    return ((value + half) % (1 << bits)) - half


def to_int32(value: int) -> int:
    """Narrow ``value`` to a signed 32-bit integer, logging if data is lost."""
    if value > INT32_MAX or value < INT32_MIN:
        _emit("Failed conversion: int64_t to int(32) some data lost", 1)
    return _wrap(value, 32)


def _parse_int(value: Any, low: int, high: int) -> int | None:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        result = value
    elif isinstance(value, float):
        if not math.isfinite(value):
            return None
        result = round(value)
    elif isinstance(value, (str, bytes)):
        text = value.decode() if isinstance(value, bytes) else value
        try:
            result = int(text.strip())
        except ValueError:
            return None
    else:
        return None
    return result if low <= result <= high else None


def to_int(value: Any) -> int:
    """Convert to a 32-bit int; log and return 0 when that is impossible."""
    result = _parse_int(value, INT32_MIN, INT32_MAX)
    if result is None:
        _emit("Failed conversion: QVariant to int", 1)
        return 0
    return result


def to_int64(value: Any) -> int:
    """Convert to a 64-bit int; log and return 0 when that is impossible."""
    result = _parse_int(value, INT64_MIN, INT64_MAX)
    if result is None:
        _emit("Failed conversion: QVariant to int", 1)
        return 0
    return result


def to_bool(value: Any) -> bool:
    """Convert to bool; strings "", "0" and "false" are false."""
    if isinstance(value, (bool, int, float)):
        return bool(value)
    if isinstance(value, (str, bytes)):
        text = value.decode() if isinstance(value, bytes) else value
        return text.strip().lower() not in ("", "0", "false")
    _emit("Failed conversion: QVariant to bool", 1)
    return False


def to_str(value: Any) -> str:
    """Convert to text; log and return an empty string for unconvertible values."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        text = repr(value)
        return text[:-2] if text.endswith(".0") else text
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, bytes):
        return value.decode(errors="replace")
    _emit("Failed conversion: QVariant to QString", 1)
    return ""


def to_date(value: Any) -> date | None:
    """Convert to a date; an unparsable string gives None."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            return None
    _emit("Failed conversion: QVariant to QDate", 1)
    return None