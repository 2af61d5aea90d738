"""
Pytest configuration and shared fixtures for backend tests.

This module provides test fixtures for:
- Database (in-memory SQLite for fast tests, file-backed for concurrency)
- FastAPI test client
- Services wired to the test database
- Test data factories
"""

import os
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from app.application.services.catalog_service import CatalogService
from app.application.services.rating_aggregator import RatingAggregator
from app.infrastructure.persistence.db import Database
from app.main import create_app


# ==============================================================================
# DATABASE FIXTURES
# ==============================================================================

@pytest.fixture(scope="function")
def test_database() -> Generator[Database, None, None]:
    """Create an in-memory SQLite database for testing."""
    database = Database(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    database.create_tables()

    yield database

    database.dispose()


@pytest.fixture(scope="function")
def file_database(tmp_path) -> Generator[Database, None, None]:
    """Create a file-backed SQLite database that several threads can share."""
    database = Database(
        f"sqlite:///{tmp_path / 'movies.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    database.create_tables()

    yield database

    database.dispose()


# ==============================================================================
# SERVICE FIXTURES
# ==============================================================================

@pytest.fixture
def catalog_service(test_database) -> CatalogService:
    return CatalogService(test_database)


@pytest.fixture
def rating_aggregator(test_database) -> RatingAggregator:
    return RatingAggregator(test_database)


@pytest.fixture(scope="function")
def client(test_database) -> Generator[TestClient, None, None]:
    """Create a FastAPI test client with test database."""
    app = create_app(database=test_database)

    with TestClient(app) as test_client:
        yield test_client


# ==============================================================================
# TEST DATA FACTORIES
# ==============================================================================

@pytest.fixture
def sample_movie_data():
    """Sample movie data for testing."""
    return {
        "title": "Inception",
        "director": "Christopher Nolan",
        "year": 2010,
        "genre": "Sci-Fi",
        "description": "A thief who steals corporate secrets through dream-sharing technology.",
        "poster_url": "https://image.tmdb.org/t/p/w500/oYuLEt3zVCKq57qu2F8dT7NIa6f.jpg",
    }


@pytest.fixture
def sample_catalog_data():
    """Three movies, two of them from 1994."""
    return [
        {
            "title": "Inception",
            "director": "Christopher Nolan",
            "year": 2010,
            "genre": "Sci-Fi",
        },
        {
            "title": "The Shawshank Redemption",
            "director": "Frank Darabont",
            "year": 1994,
            "genre": "Drama",
        },
        {
            "title": "Pulp Fiction",
            "director": "Quentin Tarantino",
            "year": 1994,
            "genre": "Crime",
        },
    ]


@pytest.fixture
def seeded_catalog(catalog_service, sample_catalog_data):
    """Store the sample catalog and return the created movies."""
    return [catalog_service.create_movie(dict(data)) for data in sample_catalog_data]


# ==============================================================================
# UTILITY FIXTURES
# ==============================================================================

@pytest.fixture(autouse=True)
def reset_environment():
    """Reset environment variables after each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


# ==============================================================================
# MARKERS
# ==============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: Mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: Mark test as an integration test"
    )
    config.addinivalue_line(
        "markers", "slow: Mark test as slow (may take >1 second)"
    )
