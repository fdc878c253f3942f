"""
Application constants and environment-driven configuration.
"""
import os

# Habit schedule frequencies
FREQUENCY_DAILY = "daily"
FREQUENCY_WEEKLY = "weekly"

# Weekday indices, Sunday = 0 ... Saturday = 6
ALL_WEEKDAYS = [0, 1, 2, 3, 4, 5, 6]
WEEKDAY_NAMES = [
    "Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"
]

# Derived habit statuses (computed on read, never stored)
HABIT_STATUS_COMPLETED = "completed"
HABIT_STATUS_PENDING = "pending"
HABIT_STATUS_WARNING = "warning"
HABIT_STATUS_OVERDUE = "overdue"

# Key under which the whole habit collection is stored
HABITS_STORAGE_KEY = "habits"

# Pages reported to the event counter
PAGE_HOME = "/"
PAGE_MANAGE = "/manage"
EVENT_PAGE_VIEW = "page_view"

# Storage
DB_PATH = os.getenv("HABIT_TRACKER_DB_PATH", "./habits.db")

# Logging
DEFAULT_LOG_DIRECTORY_PROD = "/var/log/habit-tracker"
DEFAULT_LOG_DIRECTORY_DEV = "./logs"
LOG_DIR = os.getenv("HABIT_TRACKER_LOG_DIR", DEFAULT_LOG_DIRECTORY_PROD)
LOG_FILE = os.getenv("HABIT_TRACKER_LOG_FILE", "app.log")

# CORS
CORS_ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv("HABIT_TRACKER_CORS_ORIGINS", "*").split(",")
    if origin.strip()
]

# Event tracking client; unset disables tracking
TRACK_ENDPOINT = os.getenv("HABIT_TRACKER_TRACK_ENDPOINT")
TRACK_TIMEOUT_SECONDS = 2.0

# Servers
HABIT_API_PORT = int(os.getenv("HABIT_TRACKER_PORT", "8000"))
METRICS_PORT = int(os.getenv("METRICS_PORT", "5001"))
