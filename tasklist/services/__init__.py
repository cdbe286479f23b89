"""Service modules."""

from tasklist.services.task_store import TaskStore
from tasklist.services.tasks import TaskListing, TaskService


__all__ = ["TaskStore", "TaskService", "TaskListing"]
