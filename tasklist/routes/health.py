"""Health check endpoint."""

import logging

from flask import Blueprint, current_app, jsonify
from sqlalchemy.exc import SQLAlchemyError

from tasklist.routes.tasks import get_task_service


logger = logging.getLogger(__name__)

health_bp = Blueprint("health", __name__, url_prefix="/api")


@health_bp.route("/health", methods=["GET"])
def health_check():
    """Report whether the task table can be read.

    Returns:
        JSON with status, task count and service identity; 503 when the
        database is unreachable.
    """
    store = get_task_service().store

    try:
        task_count = store.count()
    except SQLAlchemyError as err:
        store.session.rollback()
        logger.warning(f"Health check: task store unavailable: {err}")
        return jsonify({"status": "unhealthy", "database": "unreachable"}), 503

    return jsonify(
        {
            "status": "healthy",
            "database": "reachable",
            "tasks": task_count,
            "service": current_app.config["SERVICE_NAME"],
            "version": current_app.config["SERVICE_VERSION"],
        }
    )
