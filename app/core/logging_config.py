import logging
import sys

from app.core.config import settings


def setup_logging():
    """
    Configure logging for the application.

    Sets up logging to stdout with timestamps, log levels, and module names.
    Uvicorn's own loggers are left alone; only the root handler is set here.
    """
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)]
    )

    # Reduce SQLAlchemy noise in logs
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    return logging.getLogger("notes")


# Create global logger instance
logger = setup_logging()
