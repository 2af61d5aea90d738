#!/usr/bin/env python3
"""Reset database by deleting every movie and its rating aggregate."""
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.config import settings
from app.infrastructure.persistence.db import Database
from app.infrastructure.persistence import models
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def reset_database(database: Database) -> int:
    """Delete all movies. Returns the number of rows removed."""
    logger.info("Resetting database...")
    with database.transaction() as session:
        deleted = session.query(models.Movie).delete()
    logger.info(f"✓ Database reset complete - {deleted} movie(s) deleted")
    return deleted


if __name__ == "__main__":
    confirm = input("⚠️  This will DELETE all movies and their ratings from the database. Continue? (yes/no): ")
    if confirm.lower() == "yes":
        db = Database.from_settings(settings)
        try:
            reset_database(db)
        finally:
            db.dispose()
    else:
        logger.info("Reset cancelled")
