"""
Habit service - applies store mutations and writes the result through to
storage after each commit.
"""
import logging
from datetime import date, datetime
from typing import List, Optional

from habit_tracker.schemas import Habit, HabitCreate, HabitUpdate
from habit_tracker.services.habit_store import HabitStore
from habit_tracker.services.persistence import HabitPersistence
from habit_tracker.exceptions import HabitNotFoundException

logger = logging.getLogger("habit_tracker.service")


class HabitService:
    """Orchestrates the habit store and its persistence adapter"""

    def __init__(self, store: HabitStore, persistence: HabitPersistence):
        self.store = store
        self.persistence = persistence

    def _commit(self, habits: List[Habit]) -> List[Habit]:
        # Saved under the store lock so the last write is the newest collection
        self.persistence.save(habits)
        return habits

    def _require(self, habit_id: str) -> Habit:
        habit = self.store.get(habit_id)
        if habit is None:
            raise HabitNotFoundException(habit_id)
        return habit

    def list_habits(self) -> List[Habit]:
        return self.store.habits

    def todays_habits(self, today: Optional[date] = None) -> List[Habit]:
        return self.store.todays_habits(today)

    def completion_percentage(self, today: Optional[date] = None) -> int:
        return self.store.completion_percentage(today)

    def add_habit(self, draft: HabitCreate, now: Optional[datetime] = None) -> Habit:
        """Create a habit and return it"""
        with self.store.lock:
            habits = self._commit(self.store.add(draft, now))
            return habits[-1]

    def toggle_habit(
        self,
        habit_id: str,
        today: Optional[date] = None,
        now: Optional[datetime] = None
    ) -> Habit:
        """
        Toggle today's completion.

        Raises:
            HabitNotFoundException: If the habit does not exist
        """
        with self.store.lock:
            self._require(habit_id)
            self._commit(self.store.toggle_completion(habit_id, today, now))
            return self.store.get(habit_id)

    def reset_habit(self, habit_id: str) -> Habit:
        """
        Reset streak and completion history.

        Raises:
            HabitNotFoundException: If the habit does not exist
        """
        with self.store.lock:
            self._require(habit_id)
            self._commit(self.store.reset(habit_id))
            return self.store.get(habit_id)

    def edit_habit(self, habit_id: str, habit_update: HabitUpdate) -> Habit:
        """
        Merge the fields set on the update into the habit.

        Raises:
            HabitNotFoundException: If the habit does not exist
        """
        fields = habit_update.model_dump(exclude_unset=True)
        with self.store.lock:
            self._require(habit_id)
            self._commit(self.store.edit(habit_id, fields))
            return self.store.get(habit_id)

    def delete_habit(self, habit_id: str) -> None:
        """Delete a habit; deleting an absent habit is not an error"""
        with self.store.lock:
            self._commit(self.store.delete(habit_id))
