"""Run the task list server: ``python -m tasklist``."""

import logging
import sys

from sqlalchemy.exc import SQLAlchemyError


logger = logging.getLogger("tasklist")


def main() -> int:
    """Build the app and serve it on the configured host and port.

    Returns:
        Process exit status; 1 when the database is unreachable at startup.
    """
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    from tasklist import create_app

    try:
        app = create_app()
    except SQLAlchemyError as err:
        logger.error(f"Failed to initialize: {err}")
        return 1

    host = app.config["HOST"]
    port = app.config["PORT"]
    logger.info(f"Serving task list on http://{host}:{port}/tasks")
    app.run(host=host, port=port, debug=app.config.get("DEBUG", False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
