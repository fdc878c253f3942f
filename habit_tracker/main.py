from fastapi import FastAPI, Depends, HTTPException, Request, BackgroundTasks, status
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session
from typing import List
import logging
import threading

from habit_tracker.database import engine, get_db, Base
from habit_tracker import models  # Import all models to register them with Base
from habit_tracker.schemas import (
    Habit, HabitCreate, HabitUpdate, HabitResponse, TodayHabitsResponse
)
from habit_tracker.services.habit_store import HabitStore
from habit_tracker.services.habit_service import HabitService
from habit_tracker.services.persistence import HabitPersistence
from habit_tracker.services.habit_status import (
    habit_status, is_completed_on, sort_for_display, describe_schedule
)
from habit_tracker.services.date_service import DateService
from habit_tracker.services.analytics import EventTracker
from habit_tracker.exceptions import HabitNotFoundException
from habit_tracker.logging_config import configure_logging
from habit_tracker.constants import CORS_ALLOWED_ORIGINS, HABIT_API_PORT, PAGE_HOME, PAGE_MANAGE

log_path = configure_logging()
logger = logging.getLogger("habit_tracker")

# Create database tables
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Habit Tracker API",
    description="Daily and weekly habits with streak and completion tracking",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOWED_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Loaded from storage on first use, then kept in memory
app.state.store = None
app.state.store_lock = threading.Lock()
app.state.tracker = EventTracker()


@app.on_event("startup")
async def startup_event():
    logger.info(f"Habit Tracker API started. Logging to: {log_path}")


def get_habit_service(request: Request, db: Session = Depends(get_db)) -> HabitService:
    """Habit service bound to the shared store and a request-scoped session"""
    persistence = HabitPersistence(db)
    if request.app.state.store is None:
        with request.app.state.store_lock:
            if request.app.state.store is None:
                request.app.state.store = HabitStore(persistence.load())
    return HabitService(request.app.state.store, persistence)


def to_response(habit: Habit) -> HabitResponse:
    now = DateService.now()
    return HabitResponse(
        **habit.model_dump(),
        status=habit_status(habit, now),
        completed_today=is_completed_on(habit, now.date()),
        schedule_description=describe_schedule(habit.schedule),
    )


# Health check
@app.get("/")
async def root():
    return {"message": "Habit Tracker API", "status": "active"}


@app.get("/api/habits", response_model=List[HabitResponse])
def get_habits(
    request: Request,
    background_tasks: BackgroundTasks,
    service: HabitService = Depends(get_habit_service)
):
    """Get all habits (manage view)"""
    background_tasks.add_task(request.app.state.tracker.track_page_view, PAGE_MANAGE)
    return [to_response(habit) for habit in service.list_habits()]


@app.get("/api/habits/today", response_model=TodayHabitsResponse)
def get_today_habits(
    request: Request,
    background_tasks: BackgroundTasks,
    service: HabitService = Depends(get_habit_service)
):
    """Get habits scheduled for today, incomplete first, with completion percentage"""
    background_tasks.add_task(request.app.state.tracker.track_page_view, PAGE_HOME)
    today = DateService.today()
    habits = sort_for_display(service.todays_habits(today), today)
    return TodayHabitsResponse(
        habits=[to_response(habit) for habit in habits],
        completion_percentage=service.completion_percentage(today),
    )


@app.post("/api/habits", response_model=HabitResponse, status_code=status.HTTP_201_CREATED)
def create_habit(habit: HabitCreate, service: HabitService = Depends(get_habit_service)):
    """Create a new habit"""
    return to_response(service.add_habit(habit))


@app.post("/api/habits/{habit_id}/toggle", response_model=HabitResponse)
def toggle_habit(habit_id: str, service: HabitService = Depends(get_habit_service)):
    """Mark a habit complete for today, or undo today's completion"""
    try:
        return to_response(service.toggle_habit(habit_id))
    except HabitNotFoundException as e:
        raise HTTPException(status_code=404, detail=str(e))


@app.post("/api/habits/{habit_id}/reset", response_model=HabitResponse)
def reset_habit(habit_id: str, service: HabitService = Depends(get_habit_service)):
    """Reset a habit's streak and completion history"""
    try:
        return to_response(service.reset_habit(habit_id))
    except HabitNotFoundException as e:
        raise HTTPException(status_code=404, detail=str(e))


@app.put("/api/habits/{habit_id}", response_model=HabitResponse)
def update_habit(
    habit_id: str,
    habit_update: HabitUpdate,
    service: HabitService = Depends(get_habit_service)
):
    """Update a habit"""
    try:
        return to_response(service.edit_habit(habit_id, habit_update))
    except HabitNotFoundException as e:
        raise HTTPException(status_code=404, detail=str(e))


@app.delete("/api/habits/{habit_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_habit(habit_id: str, service: HabitService = Depends(get_habit_service)):
    """Delete a habit"""
    service.delete_habit(habit_id)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("habit_tracker.main:app", host="0.0.0.0", port=HABIT_API_PORT, reload=False)
