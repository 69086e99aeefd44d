"""Health check endpoint with optional database connectivity check."""

from datetime import UTC, datetime

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from essential_times.core.config import settings
from essential_times.core.database import check_db_connected, get_db
from essential_times.schemas.health import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def get_health(db: Session = Depends(get_db)) -> HealthResponse:
    """
    Return service health status and database connectivity.
    Used by load balancers and monitoring.
    """
    db_status = "connected" if check_db_connected(db) else "disconnected"

    return HealthResponse(
        status="OK",
        timestamp=datetime.now(UTC),
        environment=settings.APP_ENV,
        database=db_status,
    )
