"""Task listing page and form endpoints.

Every form endpoint answers with a redirect to the listing (Post/Redirect/Get),
whether or not the write happened.
"""

import logging

from flask import Blueprint, current_app, redirect, render_template, request, url_for

from tasklist.errors import TaskError
from tasklist.middleware.metrics import record_task_mutation
from tasklist.models import Priority, SortBy, SortDirection
from tasklist.services import TaskService


logger = logging.getLogger(__name__)

tasks_bp = Blueprint("tasks", __name__)


def get_task_service() -> TaskService:
    """Return the TaskService wired into the current app."""
    return current_app.extensions["task_service"]


def _back_to_listing():
    return redirect(url_for("tasks.list_tasks"))


def _rejected(operation: str, error: TaskError):
    """Record a write that was not performed and send the caller back."""
    record_task_mutation(operation, error.kind)
    logger.warning(f"Task {operation} rejected ({error.kind}): {error}")
    return _back_to_listing()


def _accepted(operation: str):
    record_task_mutation(operation, "ok")
    return _back_to_listing()


@tasks_bp.route("/", methods=["GET"])
def index():
    """Send visitors to the task listing."""
    return _back_to_listing()


@tasks_bp.route("/tasks", methods=["GET"])
def list_tasks():
    """Render the task listing.

    Query params:
        sortBy: ``old`` (creation time, default) or ``priority``
        sortType: ``asc`` (default) or ``des``

    Returns:
        HTML page with the ordered tasks.
    """
    listing = get_task_service().listing(request.args)

    return render_template(
        "tasks.html",
        tasks=listing.tasks,
        sort_by=listing.sort_by.value,
        sort_type=listing.direction.value,
        priorities=list(Priority),
        sort_options=list(SortBy),
        direction_options=list(SortDirection),
        default_priority=Priority.default().value,
    )


@tasks_bp.route("/tasks", methods=["POST"])
def create_task():
    """Create a task from the ``title`` and ``priority`` form fields."""
    try:
        get_task_service().create(request.form)
    except TaskError as err:
        return _rejected("create", err)
    return _accepted("create")


@tasks_bp.route("/tasks/<task_id>/toggle", methods=["POST"])
def toggle_task(task_id: str):
    """Flip a task between done and not done."""
    try:
        get_task_service().toggle(task_id)
    except TaskError as err:
        return _rejected("toggle", err)
    return _accepted("toggle")


@tasks_bp.route("/tasks/<task_id>/edit", methods=["POST"])
def edit_task(task_id: str):
    """Rename a task from the ``title`` form field."""
    try:
        get_task_service().rename(task_id, request.form)
    except TaskError as err:
        return _rejected("edit", err)
    return _accepted("edit")


@tasks_bp.route("/tasks/<task_id>/delete", methods=["POST"])
def delete_task(task_id: str):
    """Delete a task."""
    try:
        get_task_service().delete(task_id)
    except TaskError as err:
        return _rejected("delete", err)
    return _accepted("delete")
