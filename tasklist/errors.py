"""Domain exceptions and error handlers with OpenTelemetry trace context."""

import logging

from flask import Flask, jsonify, render_template, request
from opentelemetry import trace
from sqlalchemy.exc import SQLAlchemyError

from tasklist.extensions import db


logger = logging.getLogger(__name__)


class TaskError(Exception):
    """Base class for task operation failures."""

    kind = "task_error"


class TaskValidationError(TaskError):
    """Raised when a title or priority is not acceptable."""

    kind = "validation"

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class TaskNotFoundError(TaskError):
    """Raised when no task has the given id."""

    kind = "not_found"

    def __init__(self, task_id) -> None:
        super().__init__(f"Task not found: {task_id!r}")
        self.task_id = task_id


def register_error_handlers(app: Flask) -> None:
    """Register error handlers on Flask app.

    Args:
        app: Flask application instance.
    """

    @app.errorhandler(404)
    def not_found(error):
        return _make_error_response("Not found", 404)

    @app.errorhandler(405)
    def method_not_allowed(error):
        return _make_error_response("Method not allowed", 405)

    @app.errorhandler(500)
    def internal_error(error):
        return _make_error_response("Internal server error", 500)

    @app.errorhandler(SQLAlchemyError)
    def storage_error(error):
        # Keep the scoped session usable for the next request
        db.session.rollback()
        span = trace.get_current_span()
        span.record_exception(error)
        logger.error(f"Storage failure on {request.method} {request.path}: {error}", exc_info=error)
        return _make_error_response("Internal server error", 500)


def _trace_id() -> str | None:
    span_context = trace.get_current_span().get_span_context()
    if span_context.is_valid:
        return format(span_context.trace_id, "032x")
    return None


def _make_error_response(message: str, status_code: int) -> tuple:
    """Create error response with trace context.

    API paths get JSON, everything else gets the HTML error page.

    Args:
        message: Error message.
        status_code: HTTP status code.

    Returns:
        Tuple of (response, status_code).
    """
    trace_id = _trace_id()

    if request.path.startswith("/api/"):
        response = {
            "error": message,
            "status": status_code,
        }
        if trace_id:
            response["trace_id"] = trace_id
        return jsonify(response), status_code

    return (
        render_template("error.html", message=message, status_code=status_code, trace_id=trace_id),
        status_code,
    )
