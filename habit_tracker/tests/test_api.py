"""
Tests for the habit HTTP API.
"""
from unittest.mock import patch

from habit_tracker.services.date_service import DateService


def create(client, name="Drink Water", **schedule):
    body = {"name": name}
    if schedule:
        body["schedule"] = schedule
    response = client.post("/api/habits", json=body)
    assert response.status_code == 201
    return response.json()


class TestHabitEndpoints:

    def test_health(self, api_client):
        response = api_client.get("/")

        assert response.status_code == 200
        assert response.json()["status"] == "active"

    def test_create_returns_camel_case_habit(self, api_client):
        habit = create(api_client)

        assert habit["name"] == "Drink Water"
        assert habit["streak"] == 0
        assert habit["completedDates"] == []
        assert habit["lastCompleted"] is None
        assert habit["missedOnce"] is False
        assert habit["status"] == "pending"
        assert habit["scheduleDescription"] == "Every day"

    def test_create_rejects_weekly_without_days(self, api_client):
        response = api_client.post(
            "/api/habits", json={"name": "Gym", "schedule": {"frequency": "weekly", "days": []}}
        )

        assert response.status_code == 422

    def test_create_rejects_empty_name(self, api_client):
        assert api_client.post("/api/habits", json={"name": ""}).status_code == 422

    def test_toggle_twice(self, api_client):
        habit = create(api_client)

        first = api_client.post(f"/api/habits/{habit['id']}/toggle").json()
        assert first["streak"] == 1
        assert first["completedToday"] is True
        assert first["status"] == "completed"

        second = api_client.post(f"/api/habits/{habit['id']}/toggle").json()
        assert second["streak"] == 0
        assert second["completedDates"] == []

    def test_unknown_habit_returns_404(self, api_client):
        assert api_client.post("/api/habits/nope/toggle").status_code == 404
        assert api_client.post("/api/habits/nope/reset").status_code == 404
        assert api_client.put("/api/habits/nope", json={"name": "x"}).status_code == 404

    def test_update_and_reset(self, api_client):
        habit = create(api_client)
        api_client.post(f"/api/habits/{habit['id']}/toggle")

        updated = api_client.put(f"/api/habits/{habit['id']}", json={"name": "Water"}).json()
        assert updated["name"] == "Water"
        assert updated["streak"] == 1

        reset = api_client.post(f"/api/habits/{habit['id']}/reset").json()
        assert reset["streak"] == 0
        assert reset["completedDates"] == []

    def test_delete(self, api_client):
        habit = create(api_client)

        assert api_client.delete(f"/api/habits/{habit['id']}").status_code == 204
        assert api_client.delete(f"/api/habits/{habit['id']}").status_code == 204
        assert api_client.get("/api/habits").json() == []

    def test_today_lists_scheduled_habits_with_percentage(self, api_client):
        today_index = DateService.weekday_index(DateService.today())
        other_day = (today_index + 1) % 7
        done = create(api_client, "Done")
        create(api_client, "Open")
        create(api_client, "Not today", frequency="weekly", days=[other_day])
        api_client.post(f"/api/habits/{done['id']}/toggle")

        body = api_client.get("/api/habits/today").json()

        assert [h["name"] for h in body["habits"]] == ["Open", "Done"]
        assert body["completionPercentage"] == 50

    def test_today_empty(self, api_client):
        body = api_client.get("/api/habits/today").json()

        assert body == {"habits": [], "completionPercentage": 0}

    def test_page_views_are_tracked(self, api_client):
        with patch("habit_tracker.services.analytics.EventTracker.track_page_view") as track:
            api_client.get("/api/habits")
            api_client.get("/api/habits/today")

        pages = [call.args[0] for call in track.call_args_list]
        assert pages == ["/manage", "/"]

    def test_collection_survives_store_reload(self, api_client):
        from habit_tracker.main import app

        habit = create(api_client)
        api_client.post(f"/api/habits/{habit['id']}/toggle")
        app.state.store = None  # next request rehydrates from storage

        habits = api_client.get("/api/habits").json()

        assert len(habits) == 1
        assert habits[0]["streak"] == 1
