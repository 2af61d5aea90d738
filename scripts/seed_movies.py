#!/usr/bin/env python3
"""Seed the catalog with a few well-known movies.

Movies already present (same title and director) are skipped, so the
script can be run repeatedly.
"""
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.config import settings
from app.core.database_init import initialize_database
from app.infrastructure.persistence.db import Database
from app.infrastructure.persistence import models
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SEED_MOVIES = [
    {
        "title": "Inception",
        "director": "Christopher Nolan",
        "year": 2010,
        "genre": "Sci-Fi",
        "description": (
            "A thief who steals corporate secrets through the use of dream-sharing "
            "technology is given the inverse task of planting an idea into the mind of a C.E.O."
        ),
        "poster_url": "https://image.tmdb.org/t/p/w500/oYuLEt3zVCKq57qu2F8dT7NIa6f.jpg",
    },
    {
        "title": "The Shawshank Redemption",
        "director": "Frank Darabont",
        "year": 1994,
        "genre": "Drama",
        "description": (
            "Two imprisoned men bond over a number of years, finding solace and eventual "
            "redemption through acts of common decency."
        ),
        "poster_url": "https://image.tmdb.org/t/p/w500/q6y0Go1tsGEsmtFryDOJo3dEmqu.jpg",
    },
    {
        "title": "Pulp Fiction",
        "director": "Quentin Tarantino",
        "year": 1994,
        "genre": "Crime",
        "description": (
            "The lives of two mob hitmen, a boxer, a gangster and his wife, and a pair of "
            "diner bandits intertwine in four tales of violence and redemption."
        ),
        "poster_url": "https://image.tmdb.org/t/p/w500/d5iIlFn5s0ImszYzBPb8JPIfbXD.jpg",
    },
]


def seed_movies(database: Database, movies=SEED_MOVIES) -> int:
    """Insert the given movies if missing. Returns how many were added."""
    added = 0
    with database.transaction() as session:
        for movie in movies:
            exists = (
                session.query(models.Movie.id)
                .filter(
                    models.Movie.title == movie["title"],
                    models.Movie.director == movie["director"],
                )
                .first()
            )
            if exists:
                logger.info(f"Skipping '{movie['title']}' (already present)")
                continue
            session.add(models.Movie(**movie))
            added += 1
            logger.info(f"✓ Added '{movie['title']}'")
    logger.info(f"Seeding complete - {added} movie(s) added")
    return added


if __name__ == "__main__":
    db = Database.from_settings(settings)
    try:
        initialize_database(
            db,
            retries=settings.DB_CONNECT_RETRIES,
            delay_seconds=settings.DB_CONNECT_RETRY_DELAY_SECONDS,
        )
        seed_movies(db)
    finally:
        db.dispose()
