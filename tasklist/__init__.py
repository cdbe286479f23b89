"""Flask application factory with OpenTelemetry instrumentation."""

import logging

from flask import Flask
from sqlalchemy import text

from tasklist.extensions import db, ma
from tasklist.telemetry import telemetry_enabled


logger = logging.getLogger(__name__)


def create_app(config_class: type | None = None) -> Flask:
    """Create and configure the Flask application.

    Connects to the database before returning, so an unreachable database
    fails here rather than on the first request.

    Args:
        config_class: Configuration class to use. Defaults to Config.

    Returns:
        Configured Flask application instance.

    Raises:
        sqlalchemy.exc.SQLAlchemyError: If the database cannot be reached.
    """
    # Initialize telemetry BEFORE creating Flask app
    if telemetry_enabled():
        from tasklist.telemetry import get_otel_log_handler, instrument_flask_app, setup_telemetry

        setup_telemetry()

    app = Flask(__name__)

    # Instrument Flask app (needed for forked WSGI workers)
    if telemetry_enabled():
        instrument_flask_app(app)

    # Load configuration
    if config_class is None:
        from tasklist.config import Config

        config_class = Config
    app.config.from_object(config_class)

    # Initialize extensions
    db.init_app(app)
    ma.init_app(app)

    # Wire the store into the app so routes never reach for a global handle
    from tasklist.services import TaskService, TaskStore

    app.extensions["task_service"] = TaskService(TaskStore(db.session))

    # Register blueprints
    from tasklist.routes.api import api_bp
    from tasklist.routes.health import health_bp
    from tasklist.routes.tasks import tasks_bp

    app.register_blueprint(tasks_bp)
    app.register_blueprint(api_bp)
    app.register_blueprint(health_bp)

    # Register error handlers
    from tasklist.errors import register_error_handlers

    register_error_handlers(app)

    # Register metrics middleware (no-op meter when the SDK is disabled)
    from tasklist.middleware.metrics import register_metrics_middleware

    register_metrics_middleware(app)

    # Attach OTel log handler after app setup
    if telemetry_enabled():
        handler = get_otel_log_handler()
        if handler:
            root_logger = logging.getLogger()
            if handler not in root_logger.handlers:
                root_logger.addHandler(handler)

    # Configure logging
    _configure_logging()

    # Check connectivity, then create database tables
    with app.app_context():
        _check_database()
        db.create_all()

    return app


def _check_database() -> None:
    """Run a trivial query against the configured database."""
    try:
        db.session.execute(text("SELECT 1"))
    except Exception:
        logger.error("Database is unreachable at startup", exc_info=True)
        raise
    finally:
        db.session.remove()


def _configure_logging() -> None:
    """Configure logging for the application."""
    # App loggers - propagate to root (where OTel handler is)
    logging.getLogger("tasklist").setLevel(logging.DEBUG)
    logging.getLogger("tasklist").propagate = True

    # Reduce noise from framework loggers
    logging.getLogger("werkzeug").setLevel(logging.WARNING)
    logging.getLogger("werkzeug").propagate = False

    # SQLAlchemy engine logs can be noisy
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
