"""Values shared across the habit tracker core."""

DATABASE_FILENAME = "habits.db"

INT_NULL_VALUE = -(2**31)
INT_TRUE_VALUE = 1
INT_FALSE_VALUE = 0

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

LIB_PROJECT_NAME = "app_core"
LIB_PROJECT_VERSION = "0.2.1"
LIB_PROJECT_VERSION_MAJOR = "0"
LIB_PROJECT_VERSION_MINOR = "2"

APPLICATION_NAME = "HabitTracker"
ORGANIZATION_NAME = "Nop Inc."