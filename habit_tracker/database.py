"""
SQLAlchemy engine and session factory for the local key-value store.
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from habit_tracker.constants import DB_PATH

engine = create_engine(
    f"sqlite:///{DB_PATH}",
    connect_args={"check_same_thread": False},
    echo=False
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    """Yield a database session and close it afterwards"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
