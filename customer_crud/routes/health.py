"""
Health check routes for the customer service
"""

from datetime import datetime, timezone
from fastapi import APIRouter, Request, HTTPException, status
import logging

from customer_crud.db.database import DATABASE_ERRORS

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
async def health_check(request: Request):
    """Service health check"""
    settings = request.app.state.settings
    return {
        "service": "customer-service",
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": settings.app_version
    }


@router.get("/database")
async def database_health_check(request: Request):
    """Database connection health check"""
    database = getattr(request.app.state, "db", None)
    if database is None or database.pool is None:
        return {
            "status": "healthy",
            "database": "not_initialized"
        }

    try:
        async with database.pool.acquire() as conn:
            await conn.fetchval("SELECT 1")
    except DATABASE_ERRORS as e:
        logger.error(f"Database health check failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database connection failed"
        )

    return {
        "status": "healthy",
        "database": "connected",
        "test_query": "passed"
    }
