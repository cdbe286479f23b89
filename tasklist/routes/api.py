"""Read-only JSON endpoints."""

from flask import Blueprint, jsonify, request

from tasklist.routes.tasks import get_task_service
from tasklist.schemas import TaskListResponseSchema


api_bp = Blueprint("api", __name__, url_prefix="/api")


@api_bp.route("/tasks", methods=["GET"])
def list_tasks():
    """List tasks as JSON, ordered like the HTML listing.

    Query params:
        sortBy: ``old`` (default) or ``priority``
        sortType: ``asc`` (default) or ``des``

    Returns:
        JSON response with the ordered tasks and the sort applied.
    """
    listing = get_task_service().listing(request.args)
    return jsonify(TaskListResponseSchema().dump(listing))
