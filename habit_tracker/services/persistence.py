"""
Habit persistence adapter.

Writes the whole habit collection as one JSON document under the "habits" key
and reads it back once at startup. Neither direction raises: a corrupt or
unreadable collection falls back to an empty one, and failures are handed to
the error callback.
"""
import json
import logging
from typing import Callable, List, Optional

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from habit_tracker.constants import HABITS_STORAGE_KEY
from habit_tracker.exceptions import PersistenceException
from habit_tracker.repositories.storage_repository import StorageRepository
from habit_tracker.schemas import Habit

logger = logging.getLogger("habit_tracker.persistence")

ErrorCallback = Callable[[Exception], None]


def log_persistence_error(error: Exception) -> None:
    """Default error callback"""
    logger.error(f"Habit storage error: {error}")


class HabitPersistence:
    """Serializes the habit collection to the key-value store"""

    def __init__(
        self,
        db: Session,
        on_error: Optional[ErrorCallback] = None,
        key: str = HABITS_STORAGE_KEY
    ):
        self.db = db
        self.on_error = on_error or log_persistence_error
        self.key = key
        self.repo = StorageRepository()

    def load(self) -> List[Habit]:
        """
        Read the stored collection.

        Returns:
            Stored habits, or an empty list when nothing is stored or the
            stored data is corrupt
        """
        try:
            raw = self.repo.get(self.db, self.key)
        except SQLAlchemyError as e:
            self.on_error(PersistenceException("read", str(e)))
            return []

        if raw is None:
            return []

        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError(f"expected a list, got {type(data).__name__}")
            habits = [Habit.model_validate(item) for item in data]
        except (ValueError, TypeError, ValidationError) as e:
            self.on_error(PersistenceException("read", str(e)))
            return []

        logger.info(f"Loaded {len(habits)} habits from storage")
        return habits

    def save(self, habits: List[Habit]) -> bool:
        """
        Overwrite the stored collection.

        Returns:
            True if written, False if the write failed
        """
        payload = json.dumps([
            habit.model_dump(mode="json", by_alias=True) for habit in habits
        ])
        try:
            self.repo.set(self.db, self.key, payload)
        except SQLAlchemyError as e:
            self.db.rollback()
            self.on_error(PersistenceException("write", str(e)))
            return False
        return True
