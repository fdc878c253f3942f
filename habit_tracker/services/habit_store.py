"""
Habit store - owns the habit collection and its mutation rules.

Every mutation builds a new list (the touched habit is copied, never edited in
place), stores it as the current collection and returns it. Persistence is not
done here; the caller saves the returned collection after each commit.

Mutations are serialized by `lock`. It is re-entrant, so a caller can hold it
across a mutation and the save that follows.
"""
import math
import logging
import threading
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from habit_tracker.schemas import Habit, HabitCreate
from habit_tracker.services.date_service import DateService
from habit_tracker.services.habit_status import is_completed_on, is_scheduled_on

logger = logging.getLogger("habit_tracker.store")


class HabitStore:
    """In-memory authoritative habit collection"""

    def __init__(self, habits: Optional[List[Habit]] = None):
        self.habits: List[Habit] = list(habits or [])
        self.lock = threading.RLock()

    def get(self, habit_id: str) -> Optional[Habit]:
        """Get habit by ID"""
        for habit in self.habits:
            if habit.id == habit_id:
                return habit
        return None

    def _commit(self, habits: List[Habit]) -> List[Habit]:
        # Caller holds self.lock
        self.habits = habits
        return habits

    def _replace(self, habit_id: str, **changes) -> List[Habit]:
        """Swap one habit for an updated copy; unknown IDs leave the collection as is"""
        if self.get(habit_id) is None:
            logger.debug(f"Ignoring mutation for unknown habit {habit_id}")
            return self.habits
        return self._commit([
            habit.model_copy(update=changes) if habit.id == habit_id else habit
            for habit in self.habits
        ])

    def _new_id(self, now: datetime) -> str:
        candidate = int(now.timestamp() * 1000)
        taken = {habit.id for habit in self.habits}
        while str(candidate) in taken:
            candidate += 1
        return str(candidate)

    def add(self, draft: HabitCreate, now: Optional[datetime] = None) -> List[Habit]:
        """
        Append a new habit built from the draft.

        The schedule is taken as given; HabitCreate already rejects weekly
        schedules without days.
        """
        now = now or DateService.now()
        with self.lock:
            habit = Habit(
                id=self._new_id(now),
                name=draft.name,
                schedule=draft.schedule.model_copy(),
                last_completed=None,
                streak=0,
                missed_once=False,
                completed_dates=[],
            )
            logger.info(f"Added habit {habit.id} ({habit.name})")
            return self._commit([*self.habits, habit])

    def toggle_completion(
        self,
        habit_id: str,
        today: Optional[date] = None,
        now: Optional[datetime] = None
    ) -> List[Habit]:
        """
        Mark the habit complete for `today`, or undo today's completion.

        Completing appends today's start-of-day ISO string, sets lastCompleted
        to `now` and adds one to the streak. Undoing removes today's entries,
        keeps lastCompleted and subtracts one from the streak. The streak is
        not clamped and can go below zero.
        """
        today = today or DateService.today()
        now = now or DateService.now()

        with self.lock:
            habit = self.get(habit_id)
            if habit is None:
                return self.habits

            if is_completed_on(habit, today):
                return self._replace(
                    habit_id,
                    completed_dates=[
                        value for value in habit.completed_dates
                        if not DateService.is_same_day(value, today)
                    ],
                    streak=habit.streak - 1,
                )

            return self._replace(
                habit_id,
                completed_dates=[*habit.completed_dates, DateService.start_of_day_iso(today)],
                last_completed=now,
                streak=habit.streak + 1,
            )

    def delete(self, habit_id: str) -> List[Habit]:
        """Remove a habit; absent IDs are ignored"""
        with self.lock:
            return self._commit([habit for habit in self.habits if habit.id != habit_id])

    def reset(self, habit_id: str) -> List[Habit]:
        """Clear completion history and streak, keeping name and schedule"""
        with self.lock:
            return self._replace(
                habit_id,
                last_completed=None,
                streak=0,
                missed_once=False,
                completed_dates=[],
            )

    def edit(self, habit_id: str, fields: Dict[str, Any]) -> List[Habit]:
        """
        Shallow-merge the supplied fields into the habit.

        Keys may be attribute names or their camelCase aliases. The id is never
        reassigned. The merged habit is re-validated for type shape only.

        Raises:
            pydantic.ValidationError: If a supplied value has the wrong shape
        """
        aliases = {
            info.alias: name for name, info in Habit.model_fields.items() if info.alias
        }

        with self.lock:
            habit = self.get(habit_id)
            if habit is None:
                return self.habits

            merged = habit.model_dump()
            for key, value in fields.items():
                name = aliases.get(key, key)
                if name == "id" or name not in Habit.model_fields:
                    continue
                merged[name] = value

            updated = Habit.model_validate(merged)
            return self._commit([
                updated if item.id == habit_id else item for item in self.habits
            ])

    def todays_habits(self, today: Optional[date] = None) -> List[Habit]:
        """Habits scheduled for today's weekday"""
        today = today or DateService.today()
        return [habit for habit in self.habits if is_scheduled_on(habit, today)]

    def completion_percentage(self, today: Optional[date] = None) -> int:
        """
        Share of today's habits already completed, as a whole percentage.

        Returns:
            0 when nothing is scheduled today
        """
        today = today or DateService.today()
        scheduled = self.todays_habits(today)
        if not scheduled:
            return 0
        done = sum(1 for habit in scheduled if is_completed_on(habit, today))
        # Half-up rounding, so 12.5 -> 13 and 50.5 -> 51
        return int(math.floor(100 * done / len(scheduled) + 0.5))
