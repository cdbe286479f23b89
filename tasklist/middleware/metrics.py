"""Task write metrics.

Request duration comes from FlaskInstrumentor; this middleware adds what it
cannot see: whether a form write was applied or silently rejected, since both
answer with the same redirect.
"""

from flask import Flask, g, request

from tasklist.telemetry import HEALTH_PATHS, get_meter


def record_task_mutation(operation: str, outcome: str) -> None:
    """Tag the current request with the result of a task write.

    Args:
        operation: ``create``, ``toggle``, ``edit`` or ``delete``.
        outcome: ``ok`` or the error kind (``validation``, ``not_found``).
    """
    g.task_mutation = (operation, outcome)


def register_metrics_middleware(app: Flask) -> None:
    """Register task write and request counters on Flask app.

    Args:
        app: Flask application instance.
    """
    meter = get_meter(__name__)

    task_mutations = meter.create_counter(
        name="tasks.mutations",
        description="Task write requests by operation and outcome",
        unit="1",
    )

    task_requests = meter.create_counter(
        name="tasks.requests",
        description="Requests to task pages and endpoints",
        unit="1",
    )

    @app.after_request
    def count_task_request(response):
        if request.path in HEALTH_PATHS:
            return response

        # Route pattern keeps task ids out of the attributes
        route = request.url_rule.rule if request.url_rule else "unmatched"
        task_requests.add(
            1,
            {"method": request.method, "route": route, "status": str(response.status_code)},
        )

        mutation = g.pop("task_mutation", None)
        if mutation is not None:
            operation, outcome = mutation
            task_mutations.add(1, {"operation": operation, "outcome": outcome})

        return response
