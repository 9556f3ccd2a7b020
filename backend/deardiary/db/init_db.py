"""
Database initialization script.

Usage: python -m deardiary.db.init_db
"""
import logging
from deardiary.core.config import settings
from deardiary.core.utils import configure_logging
from deardiary.db.session import init_db

logger = logging.getLogger(__name__)

if __name__ == "__main__":
    configure_logging(settings.LOG_LEVEL)
    logger.info("Initializing database...")
    init_db()
    logger.info("Database initialized successfully!")
