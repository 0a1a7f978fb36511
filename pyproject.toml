[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "habitcore"
version = "0.2.1"
description = "Habit tracking core: habits, recurrence schedules and SQLite storage of daily statuses"
requires-python = ">=3.10"
dependencies = [
    "platformdirs",
]
keywords = ["habits", "tracker", "sqlite", "schedule", "recurrence"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Scheduling",
    "Topic :: Database",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["habitcore"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
