"""
Derived habit state. Nothing here is stored; every value is computed on read
from completedDates and lastCompleted.
"""
from datetime import date, datetime
from typing import List, Optional

from habit_tracker.schemas import Habit, HabitSchedule
from habit_tracker.services.date_service import DateService
from habit_tracker.constants import (
    FREQUENCY_DAILY, WEEKDAY_NAMES,
    HABIT_STATUS_COMPLETED, HABIT_STATUS_PENDING,
    HABIT_STATUS_WARNING, HABIT_STATUS_OVERDUE,
)


def is_completed_on(habit: Habit, day: date) -> bool:
    """Check whether the habit has a completion on the given calendar day"""
    return any(DateService.is_same_day(value, day) for value in habit.completed_dates)


def is_scheduled_on(habit: Habit, day: date) -> bool:
    """Daily habits always match; weekly ones match their selected weekdays"""
    if habit.schedule.frequency == FREQUENCY_DAILY:
        return True
    return DateService.weekday_index(day) in habit.schedule.days


def habit_status(habit: Habit, now: Optional[datetime] = None) -> str:
    """
    Compute display status of a habit.

    Returns:
        "completed" if done today, "pending" if never completed,
        "warning" one day after the last completion, "overdue" after that
    """
    now = now or DateService.now()
    if is_completed_on(habit, now.date()):
        return HABIT_STATUS_COMPLETED

    days_since = DateService.difference_in_days(now, habit.last_completed)
    if days_since is None:
        return HABIT_STATUS_PENDING
    if days_since == 1:
        return HABIT_STATUS_WARNING
    if days_since > 1:
        return HABIT_STATUS_OVERDUE
    return HABIT_STATUS_PENDING


def sort_for_display(habits: List[Habit], today: Optional[date] = None) -> List[Habit]:
    """Incomplete habits first; original order kept within each group"""
    today = today or DateService.today()
    return sorted(habits, key=lambda habit: is_completed_on(habit, today))


def describe_schedule(schedule: HabitSchedule) -> str:
    if schedule.frequency == FREQUENCY_DAILY:
        return "Every day"
    return "Weekly: " + ", ".join(WEEKDAY_NAMES[day] for day in schedule.days)
