from sqlalchemy import Column, String, Text, DateTime
from datetime import datetime
from habit_tracker.database import Base


class StoredValue(Base):
    """One entry of the local key-value store. `value` holds JSON text."""
    __tablename__ = "stored_values"

    key = Column(String, primary_key=True, index=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)
