"""Health check endpoints"""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi.responses import JSONResponse
from typing import Dict, Any
from datetime import datetime, timezone
import logging
import time

from giftreservoir.core.database import get_db
from giftreservoir.core.config import settings

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/health")
async def health_check():
    """Basic health check"""
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }

@router.get("/health/db")
async def database_health_check(
    db: AsyncSession = Depends(get_db)
) -> Dict[str, Any]:
    """Check that the database answers a trivial query"""
    start = time.time()
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        return JSONResponse(
            status_code=503,
            content={
                "status": "unhealthy",
                "components": {"database": {"status": "unhealthy"}}
            }
        )

    return {
        "status": "healthy",
        "components": {
            "database": {
                "status": "healthy",
                "response_time_ms": round((time.time() - start) * 1000, 2)
            }
        }
    }
