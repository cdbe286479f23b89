"""Persistence and ordering of Task records."""

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from tasklist.errors import TaskNotFoundError, TaskValidationError
from tasklist.models import Priority, SortBy, SortDirection, Task
from tasklist.models.task import TITLE_MAX_LENGTH
from tasklist.telemetry import get_tracer


logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)


def clean_title(title: str | None) -> str:
    """Trim a title and check it is usable.

    Raises:
        TaskValidationError: If the title is empty, blank, or too long.
    """
    cleaned = (title or "").strip()
    if not cleaned:
        raise TaskValidationError("Title must not be empty", field="title")
    if len(cleaned) > TITLE_MAX_LENGTH:
        raise TaskValidationError(
            f"Title must be at most {TITLE_MAX_LENGTH} characters", field="title"
        )
    return cleaned


class TaskStore:
    """Task storage backed by a SQLAlchemy session.

    Every write commits immediately; each operation touches a single row, so
    isolation is left to the database transaction.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    @property
    def session(self) -> Session:
        return self._session

    def list(
        self,
        sort_by: SortBy = SortBy.OLD,
        direction: SortDirection = SortDirection.ASC,
    ) -> list[Task]:
        """List all tasks in the requested order.

        Args:
            sort_by: ``OLD`` orders by creation time, ``PRIORITY`` by priority rank.
            direction: Direction applied to the primary sort key.

        Returns:
            Ordered list of tasks. Ties are broken by creation time then id,
            both ascending, whatever the direction.
        """
        descending = direction == SortDirection.DESC

        if sort_by == SortBy.PRIORITY:
            rank = Task.priority_rank()
            order = [
                rank.desc() if descending else rank.asc(),
                Task.created_at.asc(),
                Task.id.asc(),
            ]
        else:
            order = [
                Task.created_at.desc() if descending else Task.created_at.asc(),
                Task.id.asc(),
            ]

        return self._session.scalars(select(Task).order_by(*order)).all()

    def count(self) -> int:
        return self._session.scalar(select(func.count()).select_from(Task)) or 0

    def create(self, title: str | None, priority: str | Priority | None = None) -> Task:
        """Create and persist a new task.

        Args:
            title: Task title; surrounding whitespace is trimmed.
            priority: Priority label; defaults to medium when omitted.

        Returns:
            The stored task with id and timestamps assigned.

        Raises:
            TaskValidationError: If the title is blank or the priority is unknown.
        """
        with tracer.start_as_current_span("task.create") as span:
            task = Task(title=clean_title(title), priority=Priority.parse(priority), done=False)

            self._session.add(task)
            self._session.commit()

            span.set_attribute("task.id", task.id)
            span.set_attribute("task.priority", task.priority.value)
            logger.info(f"Task created: {task.id}", extra={"task_id": task.id})

            return task

    def get_by_id(self, task_id: int) -> Task:
        """Fetch a task by id.

        Raises:
            TaskNotFoundError: If no task has this id.
        """
        task = self._session.get(Task, task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def toggle_done(self, task_id: int) -> Task:
        """Flip the done flag of a task."""
        with tracer.start_as_current_span("task.toggle") as span:
            span.set_attribute("task.id", task_id)
            task = self.get_by_id(task_id)

            task.done = not task.done
            self._session.commit()

            span.set_attribute("task.done", task.done)
            logger.info(f"Task toggled: {task_id} done={task.done}", extra={"task_id": task_id})

            return task

    def update_title(self, task_id: int, title: str | None) -> Task:
        """Replace the title of a task, leaving everything else untouched.

        Raises:
            TaskValidationError: If the new title is blank. Nothing is written.
            TaskNotFoundError: If no task has this id.
        """
        with tracer.start_as_current_span("task.update_title") as span:
            span.set_attribute("task.id", task_id)
            cleaned = clean_title(title)
            task = self.get_by_id(task_id)

            task.title = cleaned
            self._session.commit()

            logger.info(f"Task renamed: {task_id}", extra={"task_id": task_id})

            return task

    def delete(self, task_id: int) -> None:
        """Remove a task permanently.

        Raises:
            TaskNotFoundError: If no task has this id, including one already deleted.
        """
        with tracer.start_as_current_span("task.delete") as span:
            span.set_attribute("task.id", task_id)
            task = self.get_by_id(task_id)

            self._session.delete(task)
            self._session.commit()

            logger.info(f"Task deleted: {task_id}", extra={"task_id": task_id})
