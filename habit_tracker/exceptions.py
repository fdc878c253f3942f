"""
Custom exceptions for the habit tracker application.
"""


class HabitTrackerException(Exception):
    """Base exception for habit tracker application"""
    pass


class HabitNotFoundException(HabitTrackerException):
    """Raised when a habit is not found"""
    def __init__(self, habit_id: str):
        self.habit_id = habit_id
        super().__init__(f"Habit with ID {habit_id} not found")


class PersistenceException(HabitTrackerException):
    """Raised when the stored habit collection cannot be read or written"""
    def __init__(self, operation: str, details: str):
        self.operation = operation
        self.details = details
        super().__init__(f"Storage {operation} failed: {details}")
