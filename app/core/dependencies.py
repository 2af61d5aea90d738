"""Dependency injection for FastAPI routes.
Routes receive services built around the Database created at startup."""
from fastapi import Depends, Request

from app.application.services.catalog_service import CatalogService
from app.application.services.rating_aggregator import RatingAggregator
from app.infrastructure.persistence.db import Database
from app.services.health_service import HealthCheckService


def get_database(request: Request) -> Database:
    """Get the application's Database (set up in the lifespan hook)."""
    return request.app.state.database


def get_catalog_service(database: Database = Depends(get_database)) -> CatalogService:
    """Get catalog service."""
    return CatalogService(database)


def get_rating_aggregator(database: Database = Depends(get_database)) -> RatingAggregator:
    """Get rating aggregator."""
    return RatingAggregator(database)


def get_health_service(database: Database = Depends(get_database)) -> HealthCheckService:
    """Get health check service."""
    return HealthCheckService(database)
