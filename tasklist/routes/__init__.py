"""Route blueprints."""

from tasklist.routes.api import api_bp
from tasklist.routes.health import health_bp
from tasklist.routes.tasks import tasks_bp


__all__ = ["tasks_bp", "api_bp", "health_bp"]
