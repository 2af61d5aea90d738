"""Health check service for monitoring system components."""
import logging
from typing import Dict, Any
from datetime import datetime, timezone
from enum import Enum

from sqlalchemy.engine import make_url

from app.core.database_init import check_database_health
from app.infrastructure.persistence.db import Database

logger = logging.getLogger(__name__)


class HealthStatus(str, Enum):
    """Health status values."""
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    DEGRADED = "degraded"


class HealthCheckService:
    """Service for checking health of system components."""

    def __init__(self, database: Database):
        """Initialize health check service."""
        self.database = database
        url = make_url(database.url)
        self.db_details = {
            "backend": url.get_backend_name(),
            "host": url.host,
            "database": url.database,
        }

    def check_database(self) -> Dict[str, Any]:
        """Check database connectivity and health.

        Returns:
            Dictionary with status and details
        """
        try:
            self.database.ping()
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return {
                "status": HealthStatus.UNHEALTHY,
                "message": f"Database connection failed: {str(e)}",
                "details": {**self.db_details, "error": str(e)},
            }

        if not check_database_health(self.database):
            return {
                "status": HealthStatus.DEGRADED,
                "message": "Database reachable but movies table is missing",
                "details": self.db_details,
            }

        pool = self.database.engine.pool
        return {
            "status": HealthStatus.HEALTHY,
            "message": "Database connection successful",
            "details": {**self.db_details, "pool": pool.status()},
        }

    def get_overall_health(self) -> Dict[str, Any]:
        """Get overall system health status.

        Returns:
            Dictionary with overall health and component statuses
        """
        db_health = self.check_database()

        return {
            "status": db_health["status"],
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "components": {
                "database": db_health,
            },
        }
