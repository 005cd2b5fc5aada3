"""
API tests for the MindScope routes.

Each test runs against a fresh SQLite file through FastAPI's TestClient.

Usage:
    pytest tests/test_wellness_api.py -v
"""
from datetime import datetime, timedelta, timezone

import pytest


def utc_today():
    return datetime.now(timezone.utc).date()


def days_ago(n: int) -> str:
    return (utc_today() - timedelta(days=n)).isoformat()


MOOD = {"date": "2025-03-15", "moodType": "good", "intensity": 7}
JOURNAL = {
    "date": "2025-03-15",
    "title": "Quiet evening",
    "content": "Read a book and went to bed early tonight",
}
GOAL = {
    "title": "Sleep better",
    "description": "Get seven hours a night",
    "category": "physical-health",
    "targetDate": "2025-06-01",
}
HABIT = {"name": "Walk", "description": "Thirty minute walk", "category": "health"}
TIP = {
    "title": "Box breathing",
    "content": "Breathe in for four, hold for four, out for four.",
    "category": "stress",
    "duration": "5 minutes",
}


# ============================================================================
# Envelope and error handling
# ============================================================================


class TestEnvelope:
    """Test the success and error envelopes."""

    def test_health_check(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "success"

    def test_validation_failure(self, client):
        response = client.post("/api/moods", json={**MOOD, "moodType": "ecstatic", "intensity": 11})

        assert response.status_code == 400
        body = response.json()
        assert body["status"] == "error"
        assert body["message"] == "Validation failed"
        fields = {e["field"] for e in body["errors"]}
        assert "body.moodType" in fields
        assert "body.intensity" in fields

    def test_bad_date_rejected(self, client):
        response = client.post("/api/moods", json={**MOOD, "date": "yesterday"})
        assert response.status_code == 400

    def test_not_found(self, client):
        response = client.get("/api/moods/does-not-exist")

        assert response.status_code == 404
        assert response.json() == {"status": "error", "message": "Mood not found"}

    def test_bad_query_date(self, client):
        response = client.get("/api/moods", params={"startDate": "soon"})

        assert response.status_code == 400
        assert response.json()["message"] == "startDate must be in valid ISO format"


# ============================================================================
# Collections
# ============================================================================


class TestMoodRoutes:
    """Test mood CRUD."""

    def test_create_and_get(self, client):
        created = client.post("/api/moods", json=MOOD)

        assert created.status_code == 201
        data = created.json()["data"]
        assert data["moodType"] == "good"
        assert data["energy"] == 5
        assert data["stress"] == 5

        fetched = client.get(f"/api/moods/{data['id']}").json()["data"]
        assert fetched == data

    def test_list_filters_and_pagination(self, client):
        for day, mood_type in [("2025-03-10", "poor"), ("2025-03-12", "good"), ("2025-03-14", "good")]:
            client.post("/api/moods", json={**MOOD, "date": day, "moodType": mood_type})

        body = client.get("/api/moods", params={"moodType": "good", "limit": 1}).json()

        assert body["total"] == 2
        assert body["results"] == 1
        assert body["pages"] == 2
        assert body["data"][0]["date"] == "2025-03-14"

        ranged = client.get("/api/moods", params={"startDate": "2025-03-11", "endDate": "2025-03-13"}).json()
        assert [m["date"] for m in ranged["data"]] == ["2025-03-12"]

    def test_update_and_delete(self, client):
        mood_id = client.post("/api/moods", json=MOOD).json()["data"]["id"]

        updated = client.put(f"/api/moods/{mood_id}", json={**MOOD, "moodType": "excellent"})
        assert updated.json()["data"]["moodType"] == "excellent"

        assert client.delete(f"/api/moods/{mood_id}").status_code == 200
        assert client.get(f"/api/moods/{mood_id}").status_code == 404
        assert client.delete(f"/api/moods/{mood_id}").status_code == 404


class TestJournalRoutes:
    """Test journal CRUD and derived metrics."""

    def test_word_count_and_reading_time(self, client):
        data = client.post("/api/journals", json=JOURNAL).json()["data"]

        assert data["wordCount"] == 9
        assert data["readingTime"] == 1
        assert data["category"] == "reflection"

    def test_update_recomputes_word_count(self, client):
        journal_id = client.post("/api/journals", json=JOURNAL).json()["data"]["id"]

        data = client.put(f"/api/journals/{journal_id}", json={**JOURNAL, "content": "short"}).json()["data"]

        assert data["wordCount"] == 1

    def test_search_is_case_insensitive(self, client):
        client.post("/api/journals", json=JOURNAL)
        client.post("/api/journals", json={**JOURNAL, "title": "Busy day", "content": "Meetings", "tags": ["work"]})

        assert client.get("/api/journals", params={"search": "BOOK"}).json()["total"] == 1
        assert client.get("/api/journals", params={"search": "work"}).json()["total"] == 1

    @pytest.mark.parametrize("term,expected", [("%", 1), ("_", 1), ("50%", 1), ("a_b", 0), ("\\", 0)])
    def test_search_wildcards_match_literally(self, client, term, expected):
        client.post("/api/journals", json={**JOURNAL, "title": "Half done", "content": "Got 50% through_it"})
        client.post("/api/journals", json={**JOURNAL, "title": "Plain", "content": "nothing here"})

        assert client.get("/api/journals", params={"search": term}).json()["total"] == expected


class TestGoalRoutes:
    """Test goals and milestone toggling."""

    def test_milestones_drive_progress(self, client):
        payload = {**GOAL, "milestones": [{"title": "Blackout curtains"}, {"title": "No screens after 10"}]}
        goal = client.post("/api/goals", json=payload).json()["data"]

        assert goal["progress"] == 0
        first, second = (m["id"] for m in goal["milestones"])

        goal = client.patch(f"/api/goals/{goal['id']}/milestones/{first}").json()["data"]
        assert goal["progress"] == 50
        assert goal["milestones"][0]["completedAt"]

        goal = client.patch(f"/api/goals/{goal['id']}/milestones/{second}").json()["data"]
        assert goal["progress"] == 100
        assert goal["status"] == "completed"

    def test_unknown_milestone(self, client):
        goal_id = client.post("/api/goals", json=GOAL).json()["data"]["id"]

        response = client.patch(f"/api/goals/{goal_id}/milestones/nope")

        assert response.status_code == 404
        assert response.json()["message"] == "Milestone not found"

    def test_list_by_status(self, client):
        client.post("/api/goals", json=GOAL)
        client.post("/api/goals", json={**GOAL, "status": "paused"})

        body = client.get("/api/goals", params={"status": "paused"}).json()

        assert body["total"] == 1
        assert body["data"][0]["status"] == "paused"


class TestHabitRoutes:
    """Test habits and completion toggling."""

    def test_toggle_builds_streak(self, client):
        habit_id = client.post("/api/habits", json=HABIT).json()["data"]["id"]

        for n in (2, 1, 0):
            response = client.patch(f"/api/habits/{habit_id}/toggle", json={"date": days_ago(n)})
            assert response.status_code == 200

        habit = response.json()["data"]
        assert habit["currentStreak"] == 3
        assert habit["longestStreak"] == 3

        habit = client.patch(f"/api/habits/{habit_id}/toggle", json={"date": days_ago(1)}).json()["data"]
        assert habit["currentStreak"] == 1
        assert habit["longestStreak"] == 3

    def test_toggle_requires_date(self, client):
        habit_id = client.post("/api/habits", json=HABIT).json()["data"]["id"]

        response = client.patch(f"/api/habits/{habit_id}/toggle", json={"note": "x"})

        assert response.status_code == 400

    def test_update_keeps_history(self, client):
        habit_id = client.post("/api/habits", json=HABIT).json()["data"]["id"]
        client.patch(f"/api/habits/{habit_id}/toggle", json={"date": days_ago(0)})

        habit = client.put(f"/api/habits/{habit_id}", json={**HABIT, "name": "Long walk"}).json()["data"]

        assert habit["name"] == "Long walk"
        assert habit["currentStreak"] == 1
        assert len(habit["completions"]) == 1

    def test_inactive_habits_listed_separately(self, client):
        client.post("/api/habits", json=HABIT)
        client.post("/api/habits", json={**HABIT, "isActive": False})

        assert client.get("/api/habits").json()["total"] == 1
        assert client.get("/api/habits", params={"isActive": "false"}).json()["total"] == 1


class TestTipRoutes:
    """Test wellness tips."""

    def test_featured_first_and_completion(self, client):
        client.post("/api/tips", json=TIP)
        featured = client.post("/api/tips", json={**TIP, "title": "Body scan", "featured": True}).json()["data"]

        body = client.get("/api/tips").json()
        assert body["data"][0]["id"] == featured["id"]

        tip = client.patch(f"/api/tips/{featured['id']}/complete").json()["data"]
        assert tip["completions"] == 1

    def test_filter_featured(self, client):
        client.post("/api/tips", json=TIP)

        assert client.get("/api/tips", params={"featured": "true"}).json()["total"] == 0

    def test_search_percent_is_literal(self, client):
        client.post("/api/tips", json=TIP)
        client.post("/api/tips", json={**TIP, "title": "Drink 100% water"})

        body = client.get("/api/tips", params={"search": "%"}).json()

        assert body["total"] == 1
        assert body["data"][0]["title"] == "Drink 100% water"


# ============================================================================
# Analytics
# ============================================================================


class TestAnalyticsRoutes:
    """Test the analytics endpoints end to end."""

    def test_empty_dashboard(self, client):
        body = client.get("/api/analytics/dashboard").json()

        assert body["status"] == "success"
        data = body["data"]
        assert data["summary"]["totalMoods"] == 0
        assert data["moodStats"]["averageMood"] == 0
        assert [i["title"] for i in data["insights"]] == ["Start Your Wellness Journey", "Try Journaling"]
        assert len(data["weeklyMoodData"]) == 7
        assert len(data["moodDistribution"]) == 5

    def test_dashboard_respects_lookback_window(self, client):
        client.post("/api/moods", json={**MOOD, "date": days_ago(0), "moodType": "excellent"})
        client.post("/api/moods", json={**MOOD, "date": days_ago(3), "moodType": "good"})
        client.post("/api/moods", json={**MOOD, "date": days_ago(60), "moodType": "terrible"})

        default_window = client.get("/api/analytics/dashboard").json()["data"]

        assert default_window["summary"]["totalMoods"] == 2
        assert default_window["moodStats"]["averageMood"] == 4.5
        assert default_window["weeklyMoodData"][-1]["mood"] == 5.0

    @pytest.mark.parametrize("days,expected", [(1, 1), (2, 2), (3, 3), (30, 4)])
    def test_window_covers_exactly_n_days(self, client, days, expected):
        for n in (0, 1, 2, 29, 30):
            client.post("/api/moods", json={**MOOD, "date": days_ago(n)})
            client.post("/api/journals", json={**JOURNAL, "date": days_ago(n)})

        data = client.get("/api/analytics/dashboard", params={"days": days}).json()["data"]
        trends = client.get("/api/analytics/mood-trends", params={"days": days}).json()["data"]

        assert data["summary"]["totalMoods"] == expected
        assert data["summary"]["totalJournals"] == expected
        assert trends["totalEntries"] == expected

    def test_dashboard_habit_stats(self, client):
        habit_id = client.post("/api/habits", json=HABIT).json()["data"]["id"]
        for n in range(24):
            client.patch(f"/api/habits/{habit_id}/toggle", json={"date": days_ago(n)})

        data = client.get("/api/analytics/dashboard").json()["data"]

        [stat] = data["habitStats"]
        assert stat["recentCompletionRate"] == 80
        assert stat["currentStreak"] == 24
        assert data["insights"][-1]["title"] == "Habit Champion"

    def test_mood_trends(self, client):
        for n in range(13, 6, -1):
            client.post("/api/moods", json={**MOOD, "date": days_ago(n), "moodType": "poor"})
        for n in range(6, -1, -1):
            client.post("/api/moods", json={**MOOD, "date": days_ago(n), "moodType": "good"})

        data = client.get("/api/analytics/mood-trends").json()["data"]

        assert data["totalEntries"] == 14
        assert data["trends"] == {"trend": "improving", "change": 2.0}
        assert sum(b["count"] for b in data["distribution"]) == 14

    @pytest.mark.parametrize("days", [0, 400])
    def test_days_out_of_range(self, client, days):
        response = client.get("/api/analytics/dashboard", params={"days": days})
        assert response.status_code == 400
