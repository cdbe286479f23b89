"""Tests for the HTML listing and form endpoints."""

import pytest

from tasklist.models import Priority


def _listed_titles(store, **kwargs):
    store.session.expire_all()
    return [task.title for task in store.list(**kwargs)]


def _assert_back_to_listing(response):
    assert response.status_code == 302
    assert response.headers["Location"].endswith("/tasks")


class TestIndex:
    def test_root_redirects_to_listing(self, client, db):
        _assert_back_to_listing(client.get("/"))


class TestListTasks:
    def test_list_empty(self, client, db):
        response = client.get("/tasks")
        assert response.status_code == 200
        assert b"No tasks yet." in response.data

    def test_list_shows_tasks(self, client, store):
        store.create("Water plants", "low")

        response = client.get("/tasks")
        assert response.status_code == 200
        assert b"Water plants" in response.data
        assert b'class="priority priority-low"' in response.data

    def test_sort_by_priority(self, client, store):
        store.create("A-high", "high")
        store.create("B-low", "low")
        store.create("C-medium", "medium")

        html = client.get("/tasks?sortBy=priority&sortType=asc").get_data(as_text=True)
        assert html.index("B-low") < html.index("C-medium") < html.index("A-high")

        html = client.get("/tasks?sortBy=priority&sortType=des").get_data(as_text=True)
        assert html.index("A-high") < html.index("C-medium") < html.index("B-low")

    def test_sort_selection_is_preserved(self, client, db):
        html = client.get("/tasks?sortBy=priority&sortType=des").get_data(as_text=True)
        assert '<option value="priority" selected>' in html
        assert '<option value="des" selected>' in html

    def test_invalid_sort_params_use_defaults(self, client, store):
        store.create("first")
        store.create("second")

        response = client.get("/tasks?sortBy=bogus&sortType=sideways")
        assert response.status_code == 200
        html = response.get_data(as_text=True)
        assert html.index("first") < html.index("second")
        assert '<option value="old" selected>' in html
        assert '<option value="asc" selected>' in html

    def test_unranked_priority_lists_first_ascending(self, client, make_task, insert_raw_task, minutes):
        make_task("Ranked-low", "low", created_at=minutes(0))
        insert_raw_task("Legacy-urgent", "urgent", minutes(1))

        response = client.get("/tasks?sortBy=priority&sortType=asc")
        assert response.status_code == 200
        html = response.get_data(as_text=True)
        assert html.index("Legacy-urgent") < html.index("Ranked-low")
        assert 'class="priority priority-unranked"' in html

        html = client.get("/tasks?sortBy=priority&sortType=des").get_data(as_text=True)
        assert html.index("Ranked-low") < html.index("Legacy-urgent")

    def test_titles_are_escaped(self, client, store):
        store.create("<script>alert(1)</script>")

        html = client.get("/tasks").get_data(as_text=True)
        assert "<script>alert(1)</script>" not in html
        assert "&lt;script&gt;" in html


class TestCreateTask:
    def test_create(self, client, store):
        response = client.post("/tasks", data={"title": "  Call mom ", "priority": "high"})

        _assert_back_to_listing(response)
        tasks = list(store.list())
        assert len(tasks) == 1
        assert tasks[0].title == "Call mom"
        assert tasks[0].priority is Priority.HIGH
        assert tasks[0].done is False

    def test_create_without_priority(self, client, store):
        client.post("/tasks", data={"title": "Default"})
        assert store.list()[0].priority is Priority.MEDIUM

    @pytest.mark.parametrize("form", [{}, {"title": ""}, {"title": "   ", "priority": "low"}])
    def test_blank_title_is_silently_rejected(self, client, store, form):
        response = client.post("/tasks", data=form)

        _assert_back_to_listing(response)
        assert store.count() == 0

    def test_invalid_priority_is_silently_rejected(self, client, store):
        response = client.post("/tasks", data={"title": "Nope", "priority": "urgent"})

        _assert_back_to_listing(response)
        assert store.count() == 0


class TestToggleTask:
    def test_toggle(self, client, store):
        task_id = store.create("Flip me").id

        _assert_back_to_listing(client.post(f"/tasks/{task_id}/toggle"))
        store.session.expire_all()
        assert store.get_by_id(task_id).done is True

        client.post(f"/tasks/{task_id}/toggle")
        store.session.expire_all()
        assert store.get_by_id(task_id).done is False

    @pytest.mark.parametrize("task_id", ["999", "abc"])
    def test_toggle_unknown_redirects(self, client, db, task_id):
        _assert_back_to_listing(client.post(f"/tasks/{task_id}/toggle"))


class TestEditTask:
    def test_edit(self, client, store):
        task_id = store.create("Before", "low").id

        _assert_back_to_listing(client.post(f"/tasks/{task_id}/edit", data={"title": "After"}))

        assert _listed_titles(store) == ["After"]
        assert store.get_by_id(task_id).priority is Priority.LOW

    def test_blank_edit_keeps_title(self, client, store):
        task_id = store.create("Stay").id

        _assert_back_to_listing(client.post(f"/tasks/{task_id}/edit", data={"title": "  "}))

        assert _listed_titles(store) == ["Stay"]

    def test_edit_unknown_redirects(self, client, db):
        _assert_back_to_listing(client.post("/tasks/404/edit", data={"title": "Ghost"}))


class TestDeleteTask:
    def test_delete(self, client, store):
        task_id = store.create("Bye").id

        _assert_back_to_listing(client.post(f"/tasks/{task_id}/delete"))

        assert store.count() == 0

    def test_delete_twice_redirects(self, client, store):
        task_id = store.create("Bye").id

        client.post(f"/tasks/{task_id}/delete")
        _assert_back_to_listing(client.post(f"/tasks/{task_id}/delete"))

    def test_delete_requires_post(self, client, store):
        task_id = store.create("Stay").id

        response = client.get(f"/tasks/{task_id}/delete")
        assert response.status_code == 405
        assert store.count() == 1
