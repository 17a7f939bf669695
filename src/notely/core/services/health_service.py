"""Health service implementation."""

import time
from datetime import datetime, timezone
from typing import Any, Dict

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from ... import __version__
from ..logging import get_logger
from ..schemas.common import HealthCheckResponse
from .interfaces import IHealthService

logger = get_logger("health")


class HealthService(IHealthService):
    """Health check service implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_health_status(self) -> HealthCheckResponse:
        """Get app health status."""
        db_health = await self.check_database_health()

        return HealthCheckResponse(
            status="healthy" if db_health["connected"] else "unhealthy",
            timestamp=datetime.now(timezone.utc),
            version=__version__,
            checks={"database": db_health},
        )

    async def check_database_health(self) -> Dict[str, Any]:
        """Check DB connection."""
        start_time = time.perf_counter()
        try:
            result = await self.session.execute(text("SELECT 1"))
            result.scalar()
        except Exception as e:
            # reported, not raised: an unhealthy database is a valid answer here
            logger.error("Database health check failed", exc_info=e)
            return {"connected": False, "status": "unhealthy", "response_time_ms": 0.0}

        return {
            "connected": True,
            "status": "healthy",
            "response_time_ms": round((time.perf_counter() - start_time) * 1000, 2),
        }
