"""Database models."""

from tasklist.models.task import Priority, SortBy, SortDirection, Task


__all__ = ["Task", "Priority", "SortBy", "SortDirection"]
