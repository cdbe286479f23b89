"""Tests for JSON endpoints."""

from unittest.mock import patch

from sqlalchemy.exc import OperationalError

from tasklist.services import TaskStore


class TestListTasksApi:
    def test_list_empty(self, client, db):
        response = client.get("/api/tasks")
        assert response.status_code == 200
        assert response.get_json() == {"tasks": [], "sortBy": "old", "sortType": "asc"}

    def test_list_by_priority(self, client, store):
        store.create("A", "high")
        store.create("B", "low")
        store.create("C", "medium")

        data = client.get("/api/tasks?sortBy=priority&sortType=des").get_json()

        assert [task["title"] for task in data["tasks"]] == ["A", "C", "B"]
        assert [task["priority"] for task in data["tasks"]] == ["high", "medium", "low"]
        assert data["sortBy"] == "priority"
        assert data["sortType"] == "des"

    def test_task_fields(self, client, store):
        task = store.create("Fields", "low")

        data = client.get("/api/tasks").get_json()["tasks"][0]

        assert data["id"] == task.id
        assert data["done"] is False
        assert "created_at" in data
        assert "updated_at" in data

    def test_unranked_priority_is_null(self, client, make_task, insert_raw_task, minutes):
        make_task("high", "high", created_at=minutes(0))
        insert_raw_task("legacy", "urgent", minutes(1))

        data = client.get("/api/tasks?sortBy=priority&sortType=des").get_json()

        assert [(task["title"], task["priority"]) for task in data["tasks"]] == [
            ("high", "high"),
            ("legacy", None),
        ]

    def test_invalid_sort_falls_back(self, client, db):
        data = client.get("/api/tasks?sortBy=nope&sortType=nope").get_json()
        assert data["sortBy"] == "old"
        assert data["sortType"] == "asc"


class TestHealth:
    def test_health_reports_task_count(self, client, store):
        store.create("One")
        store.create("Two")

        response = client.get("/api/health")

        assert response.status_code == 200
        data = response.get_json()
        assert data["status"] == "healthy"
        assert data["tasks"] == 2
        assert data["service"] and data["version"]

    def test_health_database_down(self, client, db):
        failure = OperationalError("SELECT count(*)", {}, Exception("connection refused"))
        with patch.object(TaskStore, "count", side_effect=failure):
            response = client.get("/api/health")

        assert response.status_code == 503
        assert response.get_json() == {"status": "unhealthy", "database": "unreachable"}


class TestApiErrors:
    def test_unknown_api_path_is_json(self, client, db):
        response = client.get("/api/nothing-here")
        assert response.status_code == 404
        assert response.get_json() == {"error": "Not found", "status": 404}
