from pydantic import BaseModel, Field, field_validator, model_validator
from datetime import datetime
from typing import List, Optional

from habit_tracker.constants import ALL_WEEKDAYS, FREQUENCY_DAILY, FREQUENCY_WEEKLY


class HabitSchedule(BaseModel):
    frequency: str = Field(default=FREQUENCY_DAILY, pattern="^(daily|weekly)$")
    days: List[int] = Field(default_factory=list)  # 0-6 for Sunday-Saturday

    @field_validator("days")
    @classmethod
    def check_weekday_range(cls, days: List[int]) -> List[int]:
        for day in days:
            if day < 0 or day > 6:
                raise ValueError(f"Weekday index must be 0-6, got {day}")
        return sorted(set(days))

    @model_validator(mode="after")
    def fill_daily_days(self):
        # Daily habits occupy every weekday slot
        if self.frequency == FREQUENCY_DAILY:
            self.days = list(ALL_WEEKDAYS)
        return self


class Habit(BaseModel):
    id: str
    name: str
    schedule: HabitSchedule
    last_completed: Optional[datetime] = Field(default=None, alias="lastCompleted")
    streak: int = 0
    missed_once: bool = Field(default=False, alias="missedOnce")
    completed_dates: List[str] = Field(default_factory=list, alias="completedDates")  # ISO strings

    @field_validator("completed_dates", mode="before")
    @classmethod
    def default_completed_dates(cls, value):
        # Collections written before completedDates existed store null or nothing
        return value or []

    class Config:
        populate_by_name = True


def _require_weekly_days(schedule: Optional[HabitSchedule]) -> None:
    if schedule and schedule.frequency == FREQUENCY_WEEKLY and not schedule.days:
        raise ValueError("Weekly habits need at least one day")


class HabitCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    schedule: HabitSchedule = Field(default_factory=HabitSchedule)

    @model_validator(mode="after")
    def check_schedule(self):
        _require_weekly_days(self.schedule)
        return self


class HabitUpdate(BaseModel):
    """Partial habit; only the supplied fields are merged into the stored habit."""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    schedule: Optional[HabitSchedule] = None
    last_completed: Optional[datetime] = Field(None, alias="lastCompleted")
    streak: Optional[int] = None
    missed_once: Optional[bool] = Field(None, alias="missedOnce")
    completed_dates: Optional[List[str]] = Field(None, alias="completedDates")

    @model_validator(mode="after")
    def check_schedule(self):
        _require_weekly_days(self.schedule)
        return self

    class Config:
        populate_by_name = True


class HabitResponse(Habit):
    status: str
    completed_today: bool = Field(default=False, alias="completedToday")
    schedule_description: str = Field(default="", alias="scheduleDescription")


class TodayHabitsResponse(BaseModel):
    habits: List[HabitResponse]
    completion_percentage: int = Field(default=0, alias="completionPercentage")

    class Config:
        populate_by_name = True
