"""Pytest fixtures for the task list application."""

import os
from datetime import datetime, timedelta

import pytest


# Disable OpenTelemetry for tests
os.environ["OTEL_SDK_DISABLED"] = "true"


@pytest.fixture
def app():
    """Create test application."""
    from tasklist import create_app
    from tasklist.config import TestConfig

    app = create_app(TestConfig)
    app.config["TESTING"] = True

    yield app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def db(app):
    """Create test database."""
    from tasklist.extensions import db as _db

    with app.app_context():
        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def store(app, db):
    """The TaskStore wired into the test app."""
    return app.extensions["task_service"].store


@pytest.fixture
def make_task(store, db):
    """Create a task, optionally pinning its creation time."""

    def _make(title="Task", priority=None, created_at: datetime | None = None):
        task = store.create(title, priority)
        if created_at is not None:
            task.created_at = created_at
            db.session.commit()
        return task

    return _make


@pytest.fixture
def base_time():
    return datetime(2024, 1, 1, 12, 0, 0)


@pytest.fixture
def minutes(base_time):
    """Return a timestamp ``n`` minutes after base_time."""
    return lambda n: base_time + timedelta(minutes=n)


@pytest.fixture
def insert_raw_task(db):
    """Insert a row directly, bypassing the model's priority validation."""
    from sqlalchemy import text

    def _insert(title, priority, created_at: datetime):
        # Same text layout SQLAlchemy uses for SQLite DATETIME
        stamp = created_at.strftime("%Y-%m-%d %H:%M:%S.%f")
        db.session.execute(
            text(
                "INSERT INTO tasks (title, done, priority, created_at, updated_at) "
                "VALUES (:title, :done, :priority, :ts, :ts)"
            ),
            {"title": title, "done": False, "priority": priority, "ts": stamp},
        )
        db.session.commit()

    return _insert
