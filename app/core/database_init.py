"""Database initialization - runs on backend startup."""
import logging
import time

from sqlalchemy import text

from app.core.exceptions import StoreUnavailableError
from app.infrastructure.persistence.db import Database

logger = logging.getLogger(__name__)


def wait_for_database(database: Database, retries: int, delay_seconds: float) -> None:
    """Block until the store answers a ping.

    Tries up to ``retries`` times with a fixed pause between attempts.

    Raises:
        StoreUnavailableError: every attempt failed
    """
    attempts = max(retries, 1)
    for attempt in range(1, attempts + 1):
        try:
            database.ping()
            logger.info(f"✅ Connected to database (attempt {attempt}/{attempts})")
            return
        except StoreUnavailableError as e:
            logger.warning(f"Database not reachable (attempt {attempt}/{attempts}): {e.__cause__ or e}")
            if attempt < attempts:
                time.sleep(delay_seconds)

    raise StoreUnavailableError(f"Could not connect to the database after {attempts} attempt(s)")


def initialize_database(
    database: Database,
    retries: int = 5,
    delay_seconds: float = 2.0,
    create_tables: bool = True,
) -> None:
    """Wait for the store, then make sure the catalog tables exist.

    Any failure propagates; the application must not serve requests
    without a working store.
    """
    wait_for_database(database, retries, delay_seconds)
    if create_tables:
        database.create_tables()
        logger.info("✅ Database schema initialized successfully")


def check_database_health(database: Database) -> bool:
    """Check if the movies table is reachable.

    Returns:
        bool: True if a trivial query against it succeeds, False otherwise
    """
    try:
        with database.transaction() as session:
            session.execute(text("SELECT 1 FROM movies LIMIT 1"))
        return True
    except Exception as e:
        logger.error(f"Table movies not reachable: {e}")
        return False
