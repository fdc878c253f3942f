"""
Storage repository - Data access layer for the local key-value store.
Values are JSON text; the repository does not interpret them.
"""
from typing import Optional
from sqlalchemy.orm import Session

from habit_tracker.models import StoredValue


class StorageRepository:
    """Repository for StoredValue data access"""

    @staticmethod
    def get(db: Session, key: str) -> Optional[str]:
        """
        Get the raw stored value for a key.

        Returns:
            JSON text, or None if the key was never written
        """
        entry = db.query(StoredValue).filter(StoredValue.key == key).first()
        return entry.value if entry else None

    @staticmethod
    def set(db: Session, key: str, value: str) -> StoredValue:
        """Create or overwrite the value stored under a key"""
        entry = db.query(StoredValue).filter(StoredValue.key == key).first()
        if entry:
            entry.value = value
        else:
            entry = StoredValue(key=key, value=value)
            db.add(entry)
        db.commit()
        db.refresh(entry)
        return entry

