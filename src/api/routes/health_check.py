import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from src.app.services.database import Database
from src.app.services.errors import DatabaseError
from src.depends import get_database

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(db: Database = Depends(get_database)):
    """Liveness plus a one-row round-trip to the store"""
    try:
        rows = await db.query_raw("SELECT 1 AS Ok", lambda record: record.get_int32("Ok"))
        database = "ok" if rows == [1] else "unavailable"
    except DatabaseError as e:
        logger.warning(f"Health check database probe failed: {e.message}")
        database = "unavailable"

    status_code = status.HTTP_200_OK if database == "ok" else status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(
        status_code=status_code,
        content={"status": "ok" if database == "ok" else "degraded", "database": database},
    )
