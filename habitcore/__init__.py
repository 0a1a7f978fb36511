"""Habit tracking core: habits, repeat schedules, settings, SQLite storage and backup import."""

__version__ = "0.2.1"