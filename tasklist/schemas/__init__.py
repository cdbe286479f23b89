"""Marshmallow schemas for serialization and query parsing."""

from tasklist.schemas.task import TaskListQuerySchema, TaskListResponseSchema, TaskSchema


__all__ = [
    "TaskSchema",
    "TaskListQuerySchema",
    "TaskListResponseSchema",
]
