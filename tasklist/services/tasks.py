"""Request-facing task operations.

Turns query strings, form fields and path identifiers into TaskStore calls.
Domain errors are raised to the caller unchanged so the HTTP layer decides how
much of them to show.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from marshmallow import ValidationError

from tasklist.errors import TaskNotFoundError
from tasklist.models import SortBy, SortDirection, Task
from tasklist.schemas import TaskListQuerySchema
from tasklist.services.task_store import TaskStore


logger = logging.getLogger(__name__)

MAX_TASK_ID = 2**31 - 1


@dataclass(frozen=True)
class TaskListing:
    """Ordered tasks plus the sort options that produced them."""

    tasks: list[Task]
    sort_by: SortBy
    direction: SortDirection


def parse_listing_args(args: Mapping[str, str]) -> tuple[SortBy, SortDirection]:
    """Read ``sortBy``/``sortType`` from query parameters.

    Unknown values fall back to the defaults instead of failing the request.
    """
    try:
        data = TaskListQuerySchema().load(dict(args))
    except ValidationError as err:
        logger.debug(f"Ignoring invalid listing parameters: {err.messages}")
        data = err.valid_data or {}

    return (
        data.get("sort_by", SortBy.OLD),
        data.get("direction", SortDirection.ASC),
    )


def parse_task_id(raw_id) -> int:
    """Convert a path identifier to a task id.

    Raises:
        TaskNotFoundError: If the identifier is not an integer.
    """
    try:
        task_id = int(raw_id)
    except (TypeError, ValueError):
        raise TaskNotFoundError(raw_id) from None

    # Out of range for the INTEGER primary key
    if not 0 < task_id <= MAX_TASK_ID:
        raise TaskNotFoundError(raw_id)
    return task_id


class TaskService:
    """Form and query handling in front of a TaskStore."""

    def __init__(self, store: TaskStore) -> None:
        self.store = store

    def listing(self, args: Mapping[str, str]) -> TaskListing:
        sort_by, direction = parse_listing_args(args)
        return TaskListing(
            tasks=list(self.store.list(sort_by, direction)),
            sort_by=sort_by,
            direction=direction,
        )

    def create(self, form: Mapping[str, str]) -> Task:
        # A blank select counts as not chosen
        priority = (form.get("priority") or "").strip() or None
        return self.store.create(form.get("title", ""), priority)

    def toggle(self, raw_id) -> Task:
        return self.store.toggle_done(parse_task_id(raw_id))

    def rename(self, raw_id, form: Mapping[str, str]) -> Task:
        return self.store.update_title(parse_task_id(raw_id), form.get("title", ""))

    def delete(self, raw_id) -> None:
        self.store.delete(parse_task_id(raw_id))
